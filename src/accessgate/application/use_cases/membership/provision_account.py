"""Provision account use case - default group on first sign-in."""

from collections.abc import Callable
from datetime import datetime

from accessgate.application.services.grant_resolver import utc_now
from accessgate.domain.entities import GroupMembership
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)

PROVISIONING_ACTOR = "SYSTEM"


class ProvisionAccountUseCase:
    """Add an account with no active membership to the default group."""

    def __init__(
        self,
        unit_of_work_factory: type,
        default_group_name: str,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._default_group_name = default_group_name
        self._clock = clock

    async def execute(self, account: Account) -> bool:
        """Return True when a membership was created."""
        async with self._uow_factory() as uow:
            if await uow.groups.has_active_membership(account.key):
                return False

            group = await uow.groups.get_by_name(self._default_group_name)
            if not group or not group.is_active:
                log.warning("default_group_missing", group_name=self._default_group_name)
                return False

            await uow.groups.add_membership(
                GroupMembership(
                    account=account.key,
                    group_id=group.id,
                    assigned_by=PROVISIONING_ACTOR,
                    assigned_date=self._clock(),
                )
            )

        log.info("account_provisioned", account=account.key, group_id=group.id)
        return True
