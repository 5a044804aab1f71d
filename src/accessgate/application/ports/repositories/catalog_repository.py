"""Security catalog repository port - systems and security definitions."""

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from accessgate.application.dto.system_dto import SystemGroupInfo, SystemStats, SystemUserInfo
from accessgate.domain.entities import SecurityDefinition, System


class CatalogRepository(Protocol):
    """Port for system and security definition persistence."""

    async def list_systems(self) -> list[System]: ...

    async def get_system_by_code(self, code: str) -> System | None: ...

    async def system_code_exists(self, code: str) -> bool: ...

    async def search_systems(self, query: str) -> list[System]: ...

    async def create_system(self, system: System) -> System: ...

    async def update_system(self, system: System) -> None: ...

    async def deactivate_system(
        self, code: str, modified_by: str, modified_date: datetime
    ) -> bool: ...

    async def list_definitions(
        self,
        *,
        security_ids: Collection[int] | None = None,
        system_id: int | None = None,
    ) -> list[SecurityDefinition]: ...

    async def count_definitions_by_system(self) -> dict[int, int]: ...

    async def stats(self) -> SystemStats: ...

    async def list_system_groups(self, code: str) -> list[SystemGroupInfo]: ...

    async def list_system_users(self, code: str) -> list[SystemUserInfo]: ...
