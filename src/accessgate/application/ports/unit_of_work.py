"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from accessgate.application.ports.repositories import (
    AssignmentRepository,
    CatalogRepository,
    EmployeeRepository,
    GroupRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - one store session, borrowed by every component of a query."""

    @property
    def groups(self) -> GroupRepository: ...

    @property
    def catalog(self) -> CatalogRepository: ...

    @property
    def assignments(self) -> AssignmentRepository: ...

    @property
    def employees(self) -> EmployeeRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...
