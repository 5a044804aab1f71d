"""Add group member use case."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.ports import PermissionChecker
from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.entities import GroupMembership
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class AddGroupMemberUseCase:
    """Add an account to a group. Actor must hold the admin security id."""

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

    async def execute(self, actor: Account, account: Account, group_id: int) -> GroupMembership:
        if not await self._permission_checker.check(actor, self._admin_security_id):
            raise PermissionDenied("Account is not allowed to manage group membership")

        async with self._uow_factory() as uow:
            group = await uow.groups.get_by_id(group_id)
            if not group or not group.is_active:
                raise NotFound("Group", group_id)
            if await uow.groups.has_active_membership(account.key, group_id):
                raise ValidationError(f"{account} is already a member of group {group_id}")

            membership = await uow.groups.add_membership(
                GroupMembership(
                    account=account.key,
                    group_id=group_id,
                    assigned_by=actor.key,
                    assigned_date=self._clock(),
                )
            )

        log.info("group_member_added", account=account.key, group_id=group_id, actor=actor.key)
        return membership
