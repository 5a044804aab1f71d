"""Remove group member use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class RemoveGroupMemberUseCase:
    """Deactivate an account's membership, stamping who removed it and when."""

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

    async def execute(self, actor: Account, account: Account, group_id: int) -> None:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to manage group membership")

        async with self._uow_factory() as uow:
            removed = await uow.groups.revoke_membership(
                account.key, group_id, removed_by=actor.key, removed_date=self._clock()
            )
            if not removed:
                raise NotFound("Membership", f"{account}/{group_id}")

        log.info("group_member_removed", account=account.key, group_id=group_id, actor=actor.key)
