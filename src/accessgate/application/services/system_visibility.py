"""System visibility filter - systems an account may see, with the manager gate applied."""

from accessgate.application.dto.permission_dto import GrantDetail, SystemAccess
from accessgate.application.ports import JobTitleClassifier, UnitOfWork
from accessgate.application.services.grant_resolver import GrantResolver
from accessgate.domain.entities import System
from accessgate.domain.value_objects import AccessLevel, Account, ResourceType


class SystemVisibilityFilter:
    """Derives visible systems from effective grants.

    Gating runs after grant resolution: a requires_manager system is hidden
    from non-managers even when they hold a direct grant inside it.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        classifier: JobTitleClassifier,
        resolver: GrantResolver | None = None,
    ) -> None:
        self._uow = uow
        self._classifier = classifier
        self._resolver = resolver or GrantResolver(uow)

    async def is_manager_level(self, account: Account) -> bool:
        """Classify the account's directory job title. Unknown employees are not managers."""
        employee = await self._uow.employees.get_by_account(account.key)
        return self._classifier.is_manager_level(employee.job_title if employee else None)

    async def visible_systems(
        self,
        account: Account,
        grants: list[GrantDetail] | None = None,
        is_manager: bool | None = None,
    ) -> list[SystemAccess]:
        """Systems holding at least one of the account's grants, minus gated ones."""
        if grants is None:
            grants = await self._resolver.grant_detail(account)
        if is_manager is None:
            is_manager = await self.is_manager_level(account)

        by_system: dict[int, tuple[System, list[GrantDetail]]] = {}
        for grant in grants:
            system = grant.entry.system
            if system is None:
                continue
            if system.requires_manager and not is_manager:
                continue
            by_system.setdefault(system.id, (system, []))[1].append(grant)

        if not by_system:
            return []

        totals = await self._uow.catalog.count_definitions_by_system()
        visible = [
            _summarize(system, held, totals.get(system.id, 0))
            for system, held in by_system.values()
        ]
        visible.sort(key=lambda s: (s.system_name, s.system_code))
        return visible


def _summarize(system: System, held: list[GrantDetail], defined: int) -> SystemAccess:
    access = SystemAccess(
        system_id=system.id,
        system_code=system.code,
        system_name=system.name,
        description=system.description,
        icon=system.icon,
        base_url=system.base_url,
        is_internal=system.is_internal,
        requires_manager=system.requires_manager,
        total_permissions=len(held),
    )
    for grant in held:
        resource_type = ResourceType.from_value(grant.entry.definition.resource_type)
        if resource_type is ResourceType.SCREEN:
            access.screen_permissions += 1
        elif resource_type is ResourceType.BUTTON:
            access.button_permissions += 1
        elif resource_type is ResourceType.CONTROLLER:
            access.controller_permissions += 1
    access.access_level = AccessLevel.FULL if len(held) >= defined > 0 else AccessLevel.PARTIAL
    return access
