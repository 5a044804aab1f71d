"""Security definitions use case."""

from accessgate.application.dto.permission_dto import CatalogEntry
from accessgate.application.use_cases.permission.base import PermissionQueryUseCase


class ListSecurityDefinitionsUseCase(PermissionQueryUseCase):
    """Active catalog, whole or for one system."""

    async def execute(self, system_code: str | None = None) -> list[CatalogEntry]:
        async with self._engine() as engine:
            return await engine.catalog.definitions_for(system_code)
