"""Security catalog - active definitions joined to their active owning systems."""

from collections.abc import Collection, Iterable

from accessgate.application.dto.permission_dto import CatalogEntry
from accessgate.application.ports import UnitOfWork
from accessgate.domain.entities import SecurityDefinition, System


def catalog_sort_key(entry: CatalogEntry) -> tuple:
    """System name, category, sort order, name. System-less entries first."""
    definition = entry.definition
    return (
        entry.system_name,
        definition.category or "",
        definition.sort_order,
        definition.name,
        definition.security_id,
    )


class SecurityCatalog:
    """Read side of the catalog. Borrows the unit of work of the current query."""

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    async def definitions_for(self, system_code: str | None = None) -> list[CatalogEntry]:
        """Active definitions, optionally restricted to one system, in catalog order."""
        systems = await self._active_systems()
        if system_code is None:
            definitions = await self._uow.catalog.list_definitions()
        else:
            system = _find_by_code(systems.values(), system_code)
            if system is None:
                return []
            definitions = await self._uow.catalog.list_definitions(system_id=system.id)
        return self._join(definitions, systems)

    async def entries_for(self, security_ids: Collection[int]) -> list[CatalogEntry]:
        """Catalog entries for the given ids; inactive or unknown ids are dropped."""
        if not security_ids:
            return []
        systems = await self._active_systems()
        definitions = await self._uow.catalog.list_definitions(security_ids=security_ids)
        return self._join(definitions, systems)

    async def get_system(self, system_code: str) -> System | None:
        """Active system by code (case-insensitive)."""
        return _find_by_code((await self._active_systems()).values(), system_code)

    async def list_systems(self) -> list[System]:
        """Active systems ordered by code."""
        systems = await self._active_systems()
        return sorted(systems.values(), key=lambda s: s.code)

    async def _active_systems(self) -> dict[int, System]:
        return {s.id: s for s in await self._uow.catalog.list_systems() if s.is_active}

    @staticmethod
    def _join(
        definitions: Iterable[SecurityDefinition], systems: dict[int, System]
    ) -> list[CatalogEntry]:
        entries = []
        for definition in definitions:
            if not definition.is_active:
                continue
            if definition.system_id is None:
                entries.append(CatalogEntry(definition=definition))
                continue
            system = systems.get(definition.system_id)
            if system is None:
                continue
            entries.append(CatalogEntry(definition=definition, system=system))
        entries.sort(key=catalog_sort_key)
        return entries


def _find_by_code(systems: Iterable[System], code: str) -> System | None:
    wanted = code.strip().lower()
    for system in systems:
        if system.code.lower() == wanted:
            return system
    return None
