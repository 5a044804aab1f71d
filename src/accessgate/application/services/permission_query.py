"""Permission query engine - public query surface over resolved grants."""

from collections.abc import Callable, Iterable
from datetime import datetime

from accessgate.application.dto.permission_dto import (
    AccessSummary,
    EmployeePermission,
    EmployeeSecurityId,
    GrantDetail,
    PermissionCheckResult,
    SystemAccess,
    SystemPermissions,
)
from accessgate.application.ports import JobTitleClassifier, UnitOfWork
from accessgate.application.services.grant_resolver import GrantResolver, utc_now
from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.application.services.system_visibility import SystemVisibilityFilter
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


class PermissionQueryEngine:
    """Answers permission queries for one account within one unit of work.

    Every operation reads fresh grant state and never writes. Unknown
    accounts produce empty results. Access checks ignore the manager gate:
    a held grant is reported even when its system is hidden.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        classifier: JobTitleClassifier,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow = uow
        self.catalog = SecurityCatalog(uow)
        self.resolver = GrantResolver(uow, self.catalog, clock)
        self.visibility = SystemVisibilityFilter(uow, classifier, self.resolver)

    async def effective_grants(self, account: Account) -> set[int]:
        return await self.resolver.effective_grants(account)

    async def grant_detail(self, account: Account) -> list[GrantDetail]:
        return await self.resolver.grant_detail(account)

    async def visible_systems(self, account: Account) -> list[SystemAccess]:
        return await self.visibility.visible_systems(account)

    async def check_access(self, account: Account, security_id: int) -> PermissionCheckResult:
        """Check one security id. Missing or unknown ids are denied, never raised."""
        index = _index(await self.resolver.grant_detail(account))
        result = _evaluate(index, security_id)
        log.debug(
            "permission_checked",
            account=account.key,
            security_id=security_id,
            has_access=result.has_access,
            source=str(result.assignment_source),
        )
        return result

    async def batch_check_access(
        self, account: Account, security_ids: Iterable[int | str]
    ) -> dict[int | str, PermissionCheckResult]:
        """Check many ids against a single grant computation.

        Duplicates collapse into one entry. An id that cannot be evaluated is
        denied on its own without affecting the others.
        """
        index = _index(await self.resolver.grant_detail(account))
        results: dict[int | str, PermissionCheckResult] = {}
        for raw in security_ids:
            try:
                security_id = _coerce_id(raw)
            except (TypeError, ValueError):
                log.warning("batch_check_invalid_id", account=account.key, security_id=raw)
                results[str(raw)] = PermissionCheckResult.denied()
                continue
            if security_id not in results:
                results[security_id] = _evaluate(index, security_id)
        return results

    async def permissions_for_system(
        self, account: Account, system_code: str
    ) -> list[EmployeePermission]:
        """Held permissions inside one system, ordered by sort order then name."""
        wanted = system_code.strip().lower()
        permissions = [
            _employee_permission(g)
            for g in await self.resolver.grant_detail(account)
            if g.entry.system is not None and g.entry.system.code.lower() == wanted
        ]
        permissions.sort(key=lambda p: (p.sort_order, p.permission_name))
        return permissions

    async def all_security_ids_for(self, account: Account) -> list[EmployeeSecurityId]:
        """Every held grant across all systems, in catalog order."""
        return [
            EmployeeSecurityId(
                security_id=g.security_id,
                security_name=g.entry.definition.name,
                security_description=g.entry.definition.description or "",
                resource_type=g.entry.definition.resource_type,
                resource_path=g.entry.definition.resource_path or "",
                system_name=g.entry.system_name,
                system_code=g.entry.system_code,
                category=g.entry.definition.category or "",
                assignment_source=g.source,
                display_security_id=g.entry.display_security_id,
            )
            for g in await self.resolver.grant_detail(account)
        ]

    async def access_summary(self, account: Account) -> AccessSummary:
        """Profile, groups, visible systems and permissions grouped per visible system.

        Grants inside hidden systems are left out; system-less grants are kept
        under a group with system_id None.
        """
        grants = await self.resolver.grant_detail(account)
        employee = await self._uow.employees.get_by_account(account.key)
        is_manager = await self.visibility.is_manager_level(account)
        systems = await self.visibility.visible_systems(
            account, grants=grants, is_manager=is_manager
        )
        memberships = await self._uow.groups.list_groups_for(account.key)

        visible_ids = {s.system_id for s in systems}
        grouped: dict[int | None, SystemPermissions] = {}
        for grant in grants:
            system = grant.entry.system
            if system is not None and system.id not in visible_ids:
                continue
            key = system.id if system else None
            bucket = grouped.get(key)
            if bucket is None:
                bucket = grouped[key] = SystemPermissions(
                    system_id=key,
                    system_code=grant.entry.system_code,
                    system_name=grant.entry.system_name,
                )
            bucket.permissions.append(_employee_permission(grant))
        for bucket in grouped.values():
            bucket.permissions.sort(key=lambda p: (p.sort_order, p.permission_name))

        return AccessSummary(
            account=account.key,
            employee=employee,
            is_manager=is_manager,
            groups=[group.name for group, _ in memberships],
            available_systems=systems,
            security_ids=sorted(
                {p.security_id for b in grouped.values() for p in b.permissions}
            ),
            system_permissions=list(grouped.values()),
        )


def _index(grants: list[GrantDetail]) -> dict[int, GrantDetail]:
    return {g.security_id: g for g in grants}


def _evaluate(index: dict[int, GrantDetail], security_id: int) -> PermissionCheckResult:
    grant = index.get(security_id)
    if grant is None:
        return PermissionCheckResult.denied()
    return PermissionCheckResult.from_grant(grant)


def _coerce_id(raw: int | str) -> int:
    if isinstance(raw, bool):
        raise TypeError("boolean is not a security id")
    if isinstance(raw, int):
        return raw
    return int(str(raw).strip())


def _employee_permission(grant: GrantDetail) -> EmployeePermission:
    definition = grant.entry.definition
    return EmployeePermission(
        security_id=grant.security_id,
        permission_name=definition.name,
        description=definition.description or "",
        resource_type=definition.resource_type,
        resource_path=definition.resource_path or "",
        category=definition.category or "",
        display_security_id=grant.entry.display_security_id,
        assignment_source=grant.source,
        sort_order=definition.sort_order,
        assigned_date=grant.assigned_date,
        expiry_date=grant.expiry_date,
        notes=grant.notes,
    )
