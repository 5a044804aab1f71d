"""Grant resolver - effective grants of an account from groups and direct assignments."""

from collections.abc import Callable
from datetime import UTC, datetime

from accessgate.application.dto.permission_dto import GrantDetail
from accessgate.application.ports import UnitOfWork
from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.domain.entities import EmployeeSecurityAssignment
from accessgate.domain.value_objects import Account, AssignmentSource
from accessgate.logging import get_logger

log = get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class GrantResolver:
    """Unions group-derived and direct grants, filtered by the active catalog.

    Group grants come from every active membership of an active group through
    that group's active assignments. Direct grants count while active and
    strictly before their expiry. A security id held both ways is reported
    once, with source DIRECT. Ids missing from the active catalog (unknown,
    deactivated, or owned by a deactivated system) are treated as revoked.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        catalog: SecurityCatalog | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow = uow
        self._catalog = catalog or SecurityCatalog(uow)
        self._clock = clock

    async def effective_grants(self, account: Account) -> set[int]:
        """Set of security ids the account currently holds."""
        return {g.security_id for g in await self.grant_detail(account)}

    async def grant_detail(self, account: Account) -> list[GrantDetail]:
        """Effective grants with provenance, in catalog order."""
        group_ids = await self._uow.groups.active_group_ids_for(account.key)
        from_groups: set[int] = set()
        if group_ids:
            for assignment in await self._uow.assignments.list_group_assignments(group_ids):
                if assignment.is_active and assignment.group_id in group_ids:
                    from_groups.add(assignment.security_id)

        direct = self._effective_direct(
            await self._uow.assignments.list_direct_assignments(account.key)
        )

        granted = from_groups | direct.keys()
        if not granted:
            return []

        entries = await self._catalog.entries_for(granted)
        stale = granted - {e.security_id for e in entries}
        if stale:
            log.warning(
                "catalog_inconsistency",
                account=account.key,
                security_ids=sorted(stale),
            )

        details = []
        for entry in entries:
            assignment = direct.get(entry.security_id)
            if assignment is not None:
                details.append(
                    GrantDetail(
                        security_id=entry.security_id,
                        source=AssignmentSource.DIRECT,
                        entry=entry,
                        assigned_date=assignment.assigned_date,
                        expiry_date=assignment.expiry_date,
                        notes=assignment.notes,
                    )
                )
            else:
                details.append(
                    GrantDetail(
                        security_id=entry.security_id,
                        source=AssignmentSource.GROUP,
                        entry=entry,
                    )
                )
        return details

    def _effective_direct(
        self, assignments: list[EmployeeSecurityAssignment]
    ) -> dict[int, EmployeeSecurityAssignment]:
        now = self._clock()
        effective: dict[int, EmployeeSecurityAssignment] = {}
        for assignment in assignments:
            if not assignment.is_effective(now):
                continue
            current = effective.get(assignment.security_id)
            # Most recent assignment wins for display
            if current is None or assignment.assigned_date > current.assigned_date:
                effective[assignment.security_id] = assignment
        return effective
