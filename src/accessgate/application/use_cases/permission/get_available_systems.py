"""Available systems use case."""

from accessgate.application.dto.permission_dto import SystemAccess
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class GetAvailableSystemsUseCase(PermissionQueryUseCase):
    """Systems visible to the account after the manager gate."""

    async def execute(self, account: Account) -> list[SystemAccess]:
        async with self._engine() as engine:
            return await engine.visible_systems(account)
