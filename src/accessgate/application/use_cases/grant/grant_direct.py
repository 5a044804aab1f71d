"""Grant direct permission use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.domain.entities import EmployeeSecurityAssignment
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class GrantDirectPermissionUseCase:
    """Grant a security id straight to an account, bypassing groups.

    An existing active direct grant for the same id is replaced in the same
    transaction, so readers never observe two active rows.
    """

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

    async def execute(
        self,
        actor: Account,
        account: Account,
        security_id: int,
        expiry_date: datetime | None = None,
        notes: str | None = None,
    ) -> EmployeeSecurityAssignment:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to grant permissions")

        now = self._clock()
        if expiry_date is not None and expiry_date <= now:
            raise ValidationError("Expiry date must be in the future")

        async with self._uow_factory() as uow:
            if not await SecurityCatalog(uow).entries_for([security_id]):
                raise NotFound("SecurityDefinition", security_id)

            existing = await uow.assignments.get_active_direct(account.key, security_id)
            if existing:
                await uow.assignments.revoke_direct(
                    account.key, security_id, revoked_by=actor.key, revoked_date=now
                )

            assignment = await uow.assignments.create_direct(
                EmployeeSecurityAssignment(
                    account=account.key,
                    security_id=security_id,
                    assigned_by=actor.key,
                    assigned_date=now,
                    expiry_date=expiry_date,
                    notes=notes,
                )
            )

        log.info(
            "direct_grant_added",
            account=account.key,
            security_id=security_id,
            expiry_date=expiry_date.isoformat() if expiry_date else None,
            actor=actor.key,
        )
        return assignment
