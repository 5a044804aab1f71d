"""Held security ids use case."""

from accessgate.application.dto.permission_dto import EmployeeSecurityId
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class ListSecurityIdsUseCase(PermissionQueryUseCase):
    """Flattened list of every grant the account holds."""

    async def execute(self, account: Account) -> list[EmployeeSecurityId]:
        async with self._engine() as engine:
            return await engine.all_security_ids_for(account)
