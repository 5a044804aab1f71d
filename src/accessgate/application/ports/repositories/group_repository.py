"""Group membership repository port."""

from datetime import datetime
from typing import Protocol

from accessgate.domain.entities import Group, GroupMembership


class GroupRepository(Protocol):
    """Port for groups and account memberships."""

    async def active_group_ids_for(self, account: str) -> set[int]: ...

    async def list_groups_for(
        self, account: str
    ) -> list[tuple[Group, GroupMembership]]: ...

    async def get_by_id(self, group_id: int) -> Group | None: ...

    async def get_by_name(self, name: str) -> Group | None: ...

    async def has_active_membership(
        self, account: str, group_id: int | None = None
    ) -> bool: ...

    async def add_membership(self, membership: GroupMembership) -> GroupMembership: ...

    async def revoke_membership(
        self, account: str, group_id: int, removed_by: str, removed_date: datetime
    ) -> bool: ...
