"""Pytest fixtures for AccessGate tests."""

from __future__ import annotations

from collections.abc import AsyncIterator, Collection
from contextlib import asynccontextmanager
from datetime import UTC, datetime, timedelta

import pytest

from accessgate.application.dto.system_dto import SystemGroupInfo, SystemStats, SystemUserInfo
from accessgate.domain.entities import (
    Employee,
    EmployeeSecurityAssignment,
    Group,
    GroupMembership,
    GroupSecurityAssignment,
    SecurityDefinition,
    System,
)

NOW = datetime(2026, 3, 1, 9, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


# --- Fake repositories ---


class FakeGroupRepository:
    """In-memory groups and memberships."""

    def __init__(self) -> None:
        self._groups: dict[int, Group] = {}
        self.memberships: list[GroupMembership] = []

    def add_group(self, group: Group) -> Group:
        self._groups[group.id] = group
        return group

    def _active(self, account: str) -> list[GroupMembership]:
        return [m for m in self.memberships if m.account.lower() == account and m.is_active]

    async def active_group_ids_for(self, account: str) -> set[int]:
        return {
            m.group_id
            for m in self._active(account)
            if m.group_id in self._groups and self._groups[m.group_id].is_active
        }

    async def list_groups_for(self, account: str) -> list[tuple[Group, GroupMembership]]:
        rows = [
            (self._groups[m.group_id], m)
            for m in self._active(account)
            if m.group_id in self._groups and self._groups[m.group_id].is_active
        ]
        rows.sort(key=lambda r: r[1].assigned_date, reverse=True)
        return rows

    async def get_by_id(self, group_id: int) -> Group | None:
        return self._groups.get(group_id)

    async def get_by_name(self, name: str) -> Group | None:
        for group in self._groups.values():
            if group.name == name and group.is_active:
                return group
        return None

    async def has_active_membership(self, account: str, group_id: int | None = None) -> bool:
        return any(group_id is None or m.group_id == group_id for m in self._active(account))

    async def add_membership(self, membership: GroupMembership) -> GroupMembership:
        self.memberships.append(membership)
        return membership

    async def revoke_membership(
        self, account: str, group_id: int, removed_by: str, removed_date: datetime
    ) -> bool:
        revoked = False
        for m in self._active(account):
            if m.group_id == group_id:
                m.is_active = False
                m.removed_by = removed_by
                m.removed_date = removed_date
                revoked = True
        return revoked


class FakeCatalogRepository:
    """In-memory systems and security definitions.

    Audit reads join against the group, assignment and employee fakes when given.
    """

    def __init__(
        self,
        groups: FakeGroupRepository | None = None,
        assignments: FakeAssignmentRepository | None = None,
        employees: FakeEmployeeRepository | None = None,
    ) -> None:
        self._systems: dict[int, System] = {}
        self._definitions: dict[int, SecurityDefinition] = {}
        self._groups = groups
        self._assignments = assignments
        self._employees = employees

    def add_system(self, system: System) -> System:
        self._systems[system.id] = system
        return system

    def add_definition(self, definition: SecurityDefinition) -> SecurityDefinition:
        self._definitions[definition.security_id] = definition
        return definition

    async def list_systems(self) -> list[System]:
        return sorted((s for s in self._systems.values() if s.is_active), key=lambda s: s.code)

    async def get_system_by_code(self, code: str) -> System | None:
        for system in self._systems.values():
            if system.code.lower() == code.lower():
                return system
        return None

    async def system_code_exists(self, code: str) -> bool:
        return await self.get_system_by_code(code) is not None

    async def search_systems(self, query: str) -> list[System]:
        q = query.lower()
        return [
            s
            for s in await self.list_systems()
            if q in s.code.lower() or q in s.name.lower() or q in (s.description or "").lower()
        ]

    async def create_system(self, system: System) -> System:
        system.id = max(self._systems, default=0) + 1
        self._systems[system.id] = system
        return system

    async def update_system(self, system: System) -> None:
        self._systems[system.id] = system

    async def deactivate_system(
        self, code: str, modified_by: str, modified_date: datetime
    ) -> bool:
        system = await self.get_system_by_code(code)
        if not system or not system.is_active:
            return False
        system.is_active = False
        system.modified_by = modified_by
        system.modified_date = modified_date
        return True

    async def list_definitions(
        self,
        *,
        security_ids: Collection[int] | None = None,
        system_id: int | None = None,
    ) -> list[SecurityDefinition]:
        return [
            d
            for d in self._definitions.values()
            if d.is_active
            and (security_ids is None or d.security_id in security_ids)
            and (system_id is None or d.system_id == system_id)
        ]

    async def count_definitions_by_system(self) -> dict[int, int]:
        counts: dict[int, int] = {}
        for d in self._definitions.values():
            if d.is_active and d.system_id is not None:
                counts[d.system_id] = counts.get(d.system_id, 0) + 1
        return counts

    async def stats(self) -> SystemStats:
        active = [s for s in self._systems.values() if s.is_active]
        memberships = self._groups.memberships if self._groups else []
        return SystemStats(
            total_systems=len(self._systems),
            active_systems=len(active),
            internal_systems=sum(1 for s in active if s.is_internal),
            external_systems=sum(1 for s in active if not s.is_internal),
            total_security_definitions=sum(1 for d in self._definitions.values() if d.is_active),
            total_users=len({m.account.lower() for m in memberships if m.is_active}),
            total_groups=len(self._groups._groups) if self._groups else 0,
        )

    def _system_grants(self, code: str) -> dict[int, set[int]]:
        """Active group id -> active definition ids of the system it grants."""
        if not (self._groups and self._assignments):
            return {}
        system = next(
            (s for s in self._systems.values() if s.code.lower() == code.lower()), None
        )
        if system is None:
            return {}
        in_system = {
            d.security_id
            for d in self._definitions.values()
            if d.is_active and d.system_id == system.id
        }
        grants: dict[int, set[int]] = {}
        for a in self._assignments.group_assignments:
            group = self._groups._groups.get(a.group_id)
            if a.is_active and a.security_id in in_system and group and group.is_active:
                grants.setdefault(a.group_id, set()).add(a.security_id)
        return grants

    async def list_system_groups(self, code: str) -> list[SystemGroupInfo]:
        grants = self._system_grants(code)
        result = []
        for group_id, ids in grants.items():
            group = self._groups._groups[group_id]
            members = {
                m.account.lower()
                for m in self._groups.memberships
                if m.group_id == group_id and m.is_active
            }
            result.append(
                SystemGroupInfo(group.id, group.name, group.description, len(ids), len(members))
            )
        return sorted(result, key=lambda g: g.group_name)

    async def list_system_users(self, code: str) -> list[SystemUserInfo]:
        grants = self._system_grants(code)
        if not grants:
            return []
        per_account: dict[str, tuple[set[int], set[str]]] = {}
        for m in self._groups.memberships:
            if m.is_active and m.group_id in grants:
                ids, names = per_account.setdefault(m.account.lower(), (set(), set()))
                ids |= grants[m.group_id]
                names.add(self._groups._groups[m.group_id].name)
        result = []
        for account, (ids, names) in per_account.items():
            employee = self._employees._by_account.get(account) if self._employees else None
            result.append(
                SystemUserInfo(
                    account=account,
                    name=employee.name if employee else account,
                    email=(employee.email if employee else None) or "",
                    department=(employee.department if employee else None) or "",
                    permission_count=len(ids),
                    group_names=sorted(names),
                )
            )
        return sorted(result, key=lambda u: u.name)


class FakeAssignmentRepository:
    """In-memory group and direct assignments."""

    def __init__(self) -> None:
        self.group_assignments: list[GroupSecurityAssignment] = []
        self.direct: list[EmployeeSecurityAssignment] = []

    async def list_group_assignments(
        self, group_ids: Collection[int]
    ) -> list[GroupSecurityAssignment]:
        return [a for a in self.group_assignments if a.group_id in group_ids and a.is_active]

    async def list_direct_assignments(self, account: str) -> list[EmployeeSecurityAssignment]:
        return [a for a in self.direct if a.account.lower() == account and a.is_active]

    async def get_active_direct(
        self, account: str, security_id: int
    ) -> EmployeeSecurityAssignment | None:
        for a in await self.list_direct_assignments(account):
            if a.security_id == security_id:
                return a
        return None

    async def create_direct(
        self, assignment: EmployeeSecurityAssignment
    ) -> EmployeeSecurityAssignment:
        self.direct.append(assignment)
        return assignment

    async def revoke_direct(
        self, account: str, security_id: int, revoked_by: str, revoked_date: datetime
    ) -> bool:
        revoked = False
        for a in await self.list_direct_assignments(account):
            if a.security_id == security_id:
                a.is_active = False
                a.revoked_by = revoked_by
                a.revoked_date = revoked_date
                revoked = True
        return revoked


class FakeEmployeeRepository:
    """In-memory employee directory."""

    def __init__(self) -> None:
        self._by_account: dict[str, Employee] = {}

    def add(self, employee: Employee) -> Employee:
        self._by_account[employee.account.lower()] = employee
        return employee

    async def get_by_account(self, account: str) -> Employee | None:
        return self._by_account.get(account)

    async def list_all(self) -> list[Employee]:
        return sorted(self._by_account.values(), key=lambda e: (e.name, e.account.lower()))


# --- Unit of Work ---


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.groups = FakeGroupRepository()
        self.assignments = FakeAssignmentRepository()
        self.employees = FakeEmployeeRepository()
        self.catalog = FakeCatalogRepository(
            groups=self.groups, assignments=self.assignments, employees=self.employees
        )

    async def commit(self) -> None:
        pass

    async def rollback(self) -> None:
        pass


def make_factory(uow: FakeUnitOfWork):
    """Factory that yields the same UoW on every call."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        yield uow

    return _factory


def seed_portal(uow: FakeUnitOfWork) -> FakeUnitOfWork:
    """Two systems, a global definition, one group and two employees.

    HR (id 1): ids 10 (Screen), 20 (Button), 25 (Screen, not granted).
    FIN (id 2, manager-only): ids 40 (Screen), 41 (Controller).
    Global: id 30 (Screen, no system).
    Group 1 "Staff" grants 10 and 20. jdoe is a member and holds 30 directly.
    msmith (Analyst) holds 40 directly.
    """
    hr = uow.catalog.add_system(
        System(id=1, code="HR", name="Human Resources", created_date=NOW)
    )
    fin = uow.catalog.add_system(
        System(id=2, code="FIN", name="Finance", created_date=NOW, requires_manager=True)
    )
    uow.catalog.add_definition(
        SecurityDefinition(10, "Leave Requests", "Screen", system_id=hr.id, category="Leave", sort_order=1)
    )
    uow.catalog.add_definition(
        SecurityDefinition(20, "Approve Leave", "Button", system_id=hr.id, category="Leave", sort_order=2)
    )
    uow.catalog.add_definition(
        SecurityDefinition(25, "Payslips", "Screen", system_id=hr.id, category="Pay", sort_order=1)
    )
    uow.catalog.add_definition(SecurityDefinition(30, "Company News", "Screen"))
    uow.catalog.add_definition(
        SecurityDefinition(40, "Budget Overview", "Screen", system_id=fin.id, sort_order=1)
    )
    uow.catalog.add_definition(
        SecurityDefinition(41, "Budget API", "Controller", system_id=fin.id, sort_order=2)
    )

    uow.groups.add_group(Group(id=1, name="Staff"))
    uow.groups.memberships.append(
        GroupMembership(account="jdoe", group_id=1, assigned_by="admin", assigned_date=NOW)
    )
    uow.assignments.group_assignments += [
        GroupSecurityAssignment(group_id=1, security_id=10),
        GroupSecurityAssignment(group_id=1, security_id=20),
    ]
    uow.assignments.direct += [
        EmployeeSecurityAssignment(
            account="jdoe", security_id=30, assigned_by="admin", assigned_date=NOW
        ),
        EmployeeSecurityAssignment(
            account="msmith",
            security_id=40,
            assigned_by="admin",
            assigned_date=NOW - timedelta(days=1),
            notes="quarter close",
        ),
    ]
    uow.employees.add(Employee(account="jdoe", name="John Doe", job_title="Engineer"))
    uow.employees.add(Employee(account="msmith", name="Mary Smith", job_title="Analyst"))
    return uow


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork for each test."""
    return FakeUnitOfWork()


@pytest.fixture
def portal_uow() -> FakeUnitOfWork:
    """UnitOfWork seeded with the HR/FIN portal scenario."""
    return seed_portal(FakeUnitOfWork())


@pytest.fixture
def uow_factory(portal_uow: FakeUnitOfWork):
    """Factory returning async context manager with the seeded UnitOfWork."""
    return make_factory(portal_uow)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock
