"""Unit tests for SecurityCatalog."""

import pytest

from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.domain.entities import SecurityDefinition

from tests.conftest import NOW, FakeUnitOfWork


@pytest.mark.asyncio
async def test_default_ordering(portal_uow: FakeUnitOfWork) -> None:
    """System-less first, then by system name, category, sort order."""
    entries = await SecurityCatalog(portal_uow).definitions_for()
    assert [e.security_id for e in entries] == [30, 40, 41, 10, 20, 25]


@pytest.mark.asyncio
async def test_display_security_id(portal_uow: FakeUnitOfWork) -> None:
    entries = {e.security_id: e for e in await SecurityCatalog(portal_uow).definitions_for()}
    assert entries[10].display_security_id == "HR.10"
    assert entries[30].display_security_id == "30"
    assert entries[30].system_code == ""


@pytest.mark.asyncio
async def test_filter_by_system_code_case_insensitive(portal_uow: FakeUnitOfWork) -> None:
    entries = await SecurityCatalog(portal_uow).definitions_for("hr")
    assert [e.security_id for e in entries] == [10, 20, 25]


@pytest.mark.asyncio
async def test_unknown_system_code_is_empty(portal_uow: FakeUnitOfWork) -> None:
    assert await SecurityCatalog(portal_uow).definitions_for("NOPE") == []


@pytest.mark.asyncio
async def test_inactive_definitions_and_systems_hidden(portal_uow: FakeUnitOfWork) -> None:
    portal_uow.catalog.add_definition(
        SecurityDefinition(26, "Old Screen", "Screen", system_id=1, is_active=False)
    )
    await portal_uow.catalog.deactivate_system("FIN", "admin", NOW)

    entries = await SecurityCatalog(portal_uow).definitions_for()

    assert [e.security_id for e in entries] == [30, 10, 20, 25]
    assert await SecurityCatalog(portal_uow).get_system("FIN") is None


@pytest.mark.asyncio
async def test_entries_for_drops_unknown_ids(portal_uow: FakeUnitOfWork) -> None:
    catalog = SecurityCatalog(portal_uow)
    assert [e.security_id for e in await catalog.entries_for({20, 10, 999})] == [10, 20]
    assert await catalog.entries_for(set()) == []


@pytest.mark.asyncio
async def test_list_systems_by_code(portal_uow: FakeUnitOfWork) -> None:
    systems = await SecurityCatalog(portal_uow).list_systems()
    assert [s.code for s in systems] == ["FIN", "HR"]
