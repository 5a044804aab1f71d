"""Batch check access use case."""

from collections.abc import Iterable

from accessgate.application.dto.permission_dto import PermissionCheckResult
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase
from accessgate.domain.value_objects import Account


class BatchCheckAccessUseCase(PermissionQueryUseCase):
    """Check many security ids at once; equivalent to checking each separately."""

    async def execute(
        self, account: Account, security_ids: Iterable[int | str]
    ) -> dict[int | str, PermissionCheckResult]:
        async with self._engine() as engine:
            return await engine.batch_check_access(account, security_ids)
