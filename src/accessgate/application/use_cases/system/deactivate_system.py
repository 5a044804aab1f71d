"""Deactivate system use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class DeactivateSystemUseCase:
    """Soft-delete a system; its definitions drop out of every grant set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        admin_security_id: int,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._admin_security_id = admin_security_id
        self._clock = clock

    async def execute(self, actor: Account, system_code: str) -> None:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to manage systems")

        async with self._uow_factory() as uow:
            deactivated = await uow.catalog.deactivate_system(
                system_code, modified_by=actor.key, modified_date=self._clock()
            )
            if not deactivated:
                raise NotFound("System", system_code)

        log.info("system_deactivated", system_code=system_code, actor=actor.key)
