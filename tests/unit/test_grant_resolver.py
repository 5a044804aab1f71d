"""Unit tests for GrantResolver."""

from datetime import timedelta

import pytest
from structlog.testing import capture_logs

from accessgate.application.services.grant_resolver import GrantResolver
from accessgate.domain.entities import EmployeeSecurityAssignment, GroupSecurityAssignment
from accessgate.domain.value_objects import Account, AssignmentSource

from tests.conftest import NOW, FakeUnitOfWork, fixed_clock

JDOE = Account("jdoe")


def _resolver(uow: FakeUnitOfWork) -> GrantResolver:
    return GrantResolver(uow, clock=fixed_clock)


def _direct(security_id: int, **kwargs) -> EmployeeSecurityAssignment:
    kwargs.setdefault("assigned_date", NOW - timedelta(hours=1))
    return EmployeeSecurityAssignment(
        account="jdoe", security_id=security_id, assigned_by="admin", **kwargs
    )


@pytest.mark.asyncio
async def test_union_of_group_and_direct(portal_uow: FakeUnitOfWork) -> None:
    """jdoe holds 10 and 20 through Staff and 30 directly."""
    assert await _resolver(portal_uow).effective_grants(JDOE) == {10, 20, 30}


@pytest.mark.asyncio
async def test_detail_sources_and_catalog_order(portal_uow: FakeUnitOfWork) -> None:
    details = await _resolver(portal_uow).grant_detail(JDOE)

    assert [(d.security_id, d.source) for d in details] == [
        (30, AssignmentSource.DIRECT),
        (10, AssignmentSource.GROUP),
        (20, AssignmentSource.GROUP),
    ]


@pytest.mark.asyncio
async def test_direct_takes_precedence_over_group(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.direct.append(_direct(10, notes="temporary"))

    details = {d.security_id: d for d in await _resolver(portal_uow).grant_detail(JDOE)}

    assert details[10].source is AssignmentSource.DIRECT
    assert details[10].notes == "temporary"
    assert details[20].source is AssignmentSource.GROUP


@pytest.mark.asyncio
async def test_unknown_account_has_no_grants(portal_uow: FakeUnitOfWork) -> None:
    resolver = _resolver(portal_uow)
    assert await resolver.effective_grants(Account("nobody")) == set()
    assert await resolver.grant_detail(Account("nobody")) == []


@pytest.mark.asyncio
async def test_expiry_equal_to_now_is_expired(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.direct.append(_direct(25, expiry_date=NOW))
    assert 25 not in await _resolver(portal_uow).effective_grants(JDOE)


@pytest.mark.asyncio
async def test_expiry_after_now_is_effective(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.direct.append(_direct(25, expiry_date=NOW + timedelta(seconds=1)))

    details = {d.security_id: d for d in await _resolver(portal_uow).grant_detail(JDOE)}

    assert details[25].source is AssignmentSource.DIRECT
    assert details[25].expiry_date == NOW + timedelta(seconds=1)


@pytest.mark.asyncio
async def test_inactive_direct_ignored(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.direct.append(_direct(25, is_active=False))
    assert 25 not in await _resolver(portal_uow).effective_grants(JDOE)


@pytest.mark.asyncio
async def test_revoked_membership_drops_group_grants(portal_uow: FakeUnitOfWork) -> None:
    await portal_uow.groups.revoke_membership("jdoe", 1, "admin", NOW)
    assert await _resolver(portal_uow).effective_grants(JDOE) == {30}


@pytest.mark.asyncio
async def test_inactive_group_grants_nothing(portal_uow: FakeUnitOfWork) -> None:
    (await portal_uow.groups.get_by_id(1)).is_active = False
    assert await _resolver(portal_uow).effective_grants(JDOE) == {30}


@pytest.mark.asyncio
async def test_inactive_group_assignment_ignored(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.group_assignments[0].is_active = False
    assert await _resolver(portal_uow).effective_grants(JDOE) == {20, 30}


@pytest.mark.asyncio
async def test_deactivated_system_drops_its_grants(portal_uow: FakeUnitOfWork) -> None:
    await portal_uow.catalog.deactivate_system("HR", "admin", NOW)
    assert await _resolver(portal_uow).effective_grants(JDOE) == {30}


@pytest.mark.asyncio
async def test_stale_ids_excluded_and_logged(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.group_assignments.append(
        GroupSecurityAssignment(group_id=1, security_id=999)
    )

    with capture_logs() as logs:
        grants = await _resolver(portal_uow).effective_grants(JDOE)

    assert grants == {10, 20, 30}
    warning = next(e for e in logs if e["event"] == "catalog_inconsistency")
    assert warning["log_level"] == "warning"
    assert warning["security_ids"] == [999]


@pytest.mark.asyncio
async def test_duplicate_direct_rows_collapse_to_latest(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.assignments.direct += [
        _direct(25, assigned_date=NOW - timedelta(days=2), notes="old"),
        _direct(25, assigned_date=NOW - timedelta(days=1), notes="new"),
    ]

    details = [d for d in await _resolver(portal_uow).grant_detail(JDOE) if d.security_id == 25]

    assert len(details) == 1
    assert details[0].notes == "new"


@pytest.mark.asyncio
async def test_resolution_is_idempotent(portal_uow: FakeUnitOfWork) -> None:
    resolver = _resolver(portal_uow)
    first = await resolver.grant_detail(JDOE)
    assert await resolver.grant_detail(JDOE) == first
