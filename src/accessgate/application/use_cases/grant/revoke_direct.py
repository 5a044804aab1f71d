"""Revoke direct permission use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class RevokeDirectPermissionUseCase:
    """Deactivate an account's active direct grant for a security id."""

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

    async def execute(self, actor: Account, account: Account, security_id: int) -> None:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to revoke permissions")

        async with self._uow_factory() as uow:
            revoked = await uow.assignments.revoke_direct(
                account.key, security_id, revoked_by=actor.key, revoked_date=self._clock()
            )
            if not revoked:
                raise NotFound("DirectGrant", f"{account}/{security_id}")

        log.info("direct_grant_revoked", account=account.key, security_id=security_id, actor=actor.key)
