"""List account groups use case."""

from accessgate.application.dto.permission_dto import GroupInfo
from accessgate.application.ports import PermissionChecker
from accessgate.domain.exceptions import PermissionDenied
from accessgate.domain.value_objects import Account


class ListAccountGroupsUseCase:
    """Active groups of an account. Accounts may list their own; others need admin."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        admin_security_id: int,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._admin_security_id = admin_security_id

    async def execute(self, actor: Account, account: Account) -> list[GroupInfo]:
        if actor != account and not await self._permission_checker.check(
            actor, self._admin_security_id
        ):
            raise PermissionDenied("Account is not allowed to view other memberships")

        async with self._uow_factory() as uow:
            rows = await uow.groups.list_groups_for(account.key)

        items = [
            GroupInfo(
                group_id=group.id,
                group_name=group.name,
                group_description=group.description,
                assigned_date=membership.assigned_date,
                assigned_by=membership.assigned_by,
            )
            for group, membership in rows
        ]
        items.sort(key=lambda g: g.assigned_date, reverse=True)
        return items
