"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from accessgate.domain.exceptions import StoreUnavailable
from accessgate.infrastructure.persistence.postgres.assignment_repository import (
    PostgresAssignmentRepository,
)
from accessgate.infrastructure.persistence.postgres.catalog_repository import (
    PostgresCatalogRepository,
)
from accessgate.infrastructure.persistence.postgres.employee_repository import (
    PostgresEmployeeRepository,
)
from accessgate.infrastructure.persistence.postgres.group_repository import (
    PostgresGroupRepository,
)
from accessgate.logging import get_logger

log = get_logger(__name__)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction."""

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self._pool = pool
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        self._groups = PostgresGroupRepository(self._conn)
        self._catalog = PostgresCatalogRepository(self._conn)
        self._assignments = PostgresAssignmentRepository(self._conn)
        self._employees = PostgresEmployeeRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def groups(self) -> PostgresGroupRepository:
        return self._groups

    @property
    def catalog(self) -> PostgresCatalogRepository:
        return self._catalog

    @property
    def assignments(self) -> PostgresAssignmentRepository:
        return self._assignments

    @property
    def employees(self) -> PostgresEmployeeRepository:
        return self._employees

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool) -> object:
    """Create UnitOfWork factory (async context manager).

    Connection failures, pool timeouts and server-side cancellations surface
    as StoreUnavailable so callers never see a partial answer.
    """

    @asynccontextmanager
    async def factory() -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool) as uow:
                try:
                    yield uow
                    await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.OperationalError as e:
            log.error("store_unavailable", error=str(e))
            raise StoreUnavailable("Permission store is unavailable") from e

    return factory
