"""Access summary use case."""

from accessgate.application.dto.permission_dto import AccessSummary
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class GetAccessSummaryUseCase(PermissionQueryUseCase):
    """Grouped-by-system summary shown after sign-in."""

    async def execute(self, account: Account) -> AccessSummary:
        async with self._engine() as engine:
            return await engine.access_summary(account)
