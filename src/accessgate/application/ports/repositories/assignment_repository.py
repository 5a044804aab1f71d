"""Security assignment repository port - group and direct grants."""

from collections.abc import Collection
from datetime import datetime
from typing import Protocol

from accessgate.domain.entities import (
    EmployeeSecurityAssignment,
    GroupSecurityAssignment,
)


class AssignmentRepository(Protocol):
    """Port for group-level and direct per-account grants."""

    async def list_group_assignments(
        self, group_ids: Collection[int]
    ) -> list[GroupSecurityAssignment]: ...

    async def list_direct_assignments(
        self, account: str
    ) -> list[EmployeeSecurityAssignment]: ...

    async def get_active_direct(
        self, account: str, security_id: int
    ) -> EmployeeSecurityAssignment | None: ...

    async def create_direct(
        self, assignment: EmployeeSecurityAssignment
    ) -> EmployeeSecurityAssignment: ...

    async def revoke_direct(
        self, account: str, security_id: int, revoked_by: str, revoked_date: datetime
    ) -> bool: ...
