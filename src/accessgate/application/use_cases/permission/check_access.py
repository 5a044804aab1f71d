"""Check access use case."""

from accessgate.application.dto.permission_dto import PermissionCheckResult
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class CheckAccessUseCase(PermissionQueryUseCase):
    """Does the account hold a single security id."""

    async def execute(self, account: Account, security_id: int) -> PermissionCheckResult:
        async with self._engine() as engine:
            return await engine.check_access(account, security_id)
