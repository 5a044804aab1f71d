"""System permissions use case."""

from accessgate.application.dto.permission_dto import EmployeePermission
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class ListSystemPermissionsUseCase(PermissionQueryUseCase):
    """Permissions the account holds inside one system."""

    async def execute(self, account: Account, system_code: str) -> list[EmployeePermission]:
        async with self._engine() as engine:
            return await engine.permissions_for_system(account, system_code)
