"""Unit tests for SystemVisibilityFilter."""

import pytest

from accessgate.application.services.grant_resolver import GrantResolver
from accessgate.application.services.system_visibility import SystemVisibilityFilter
from accessgate.domain.entities import Employee, EmployeeSecurityAssignment
from accessgate.domain.value_objects import AccessLevel, Account
from accessgate.infrastructure.classification.job_title_classifier import (
    LexicalJobTitleClassifier,
)

from tests.conftest import NOW, FakeUnitOfWork, fixed_clock


def _filter(uow: FakeUnitOfWork) -> SystemVisibilityFilter:
    return SystemVisibilityFilter(
        uow, LexicalJobTitleClassifier(), GrantResolver(uow, clock=fixed_clock)
    )


def _grant(uow: FakeUnitOfWork, account: str, security_id: int) -> None:
    uow.assignments.direct.append(
        EmployeeSecurityAssignment(
            account=account, security_id=security_id, assigned_by="admin", assigned_date=NOW
        )
    )


@pytest.mark.asyncio
async def test_counts_by_resource_type(portal_uow: FakeUnitOfWork) -> None:
    systems = await _filter(portal_uow).visible_systems(Account("jdoe"))

    assert len(systems) == 1
    hr = systems[0]
    assert hr.system_code == "HR"
    assert hr.total_permissions == 2
    assert hr.screen_permissions == 1
    assert hr.button_permissions == 1
    assert hr.controller_permissions == 0
    assert hr.access_level is AccessLevel.PARTIAL


@pytest.mark.asyncio
async def test_full_access_when_every_definition_held(portal_uow: FakeUnitOfWork) -> None:
    _grant(portal_uow, "jdoe", 25)

    systems = await _filter(portal_uow).visible_systems(Account("jdoe"))

    assert systems[0].total_permissions == 3
    assert systems[0].access_level is AccessLevel.FULL


@pytest.mark.asyncio
async def test_manager_gate_hides_system_from_non_manager(portal_uow: FakeUnitOfWork) -> None:
    """msmith (Analyst) holds 40 directly, yet FIN is manager-only."""
    assert await _filter(portal_uow).visible_systems(Account("msmith")) == []


@pytest.mark.asyncio
async def test_manager_sees_gated_system(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.employees.add(Employee(account="msmith", name="Mary Smith", job_title="Manager"))

    systems = await _filter(portal_uow).visible_systems(Account("msmith"))

    assert [s.system_code for s in systems] == ["FIN"]
    assert systems[0].requires_manager is True
    assert systems[0].screen_permissions == 1


@pytest.mark.asyncio
async def test_missing_profile_is_not_manager(portal_uow: FakeUnitOfWork) -> None:
    _grant(portal_uow, "ghost", 41)
    visibility = _filter(portal_uow)

    assert not await visibility.is_manager_level(Account("ghost"))
    assert await visibility.visible_systems(Account("ghost")) == []


@pytest.mark.asyncio
async def test_gate_is_idempotent(portal_uow: FakeUnitOfWork) -> None:
    visibility = _filter(portal_uow)
    assert await visibility.visible_systems(Account("msmith")) == await visibility.visible_systems(
        Account("msmith")
    )


@pytest.mark.asyncio
async def test_system_less_grants_create_no_system(portal_uow: FakeUnitOfWork) -> None:
    _grant(portal_uow, "newbie", 30)
    assert await _filter(portal_uow).visible_systems(Account("newbie")) == []


@pytest.mark.asyncio
async def test_ordered_by_system_name(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.employees.add(Employee(account="jdoe", name="John Doe", job_title="Senior Manager"))
    _grant(portal_uow, "jdoe", 41)

    systems = await _filter(portal_uow).visible_systems(Account("jdoe"))

    assert [s.system_name for s in systems] == ["Finance", "Human Resources"]
