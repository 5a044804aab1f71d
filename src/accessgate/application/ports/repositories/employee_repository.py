"""Employee directory repository port."""

from typing import Protocol

from accessgate.domain.entities import Employee


class EmployeeRepository(Protocol):
    """Port for employee directory lookup."""

    async def get_by_account(self, account: str) -> Employee | None: ...

    async def list_all(self) -> list[Employee]: ...
