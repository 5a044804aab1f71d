"""Scoped store session for one logical query, with timeout."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from accessgate.application.ports import UnitOfWork, UnitOfWorkFactory
from accessgate.domain.exceptions import StoreUnavailable


@asynccontextmanager
async def query_scope(
    unit_of_work_factory: UnitOfWorkFactory, timeout: float | None = None
) -> AsyncIterator[UnitOfWork]:
    """Open a unit of work bounded by timeout seconds (None = unbounded).

    The connection is released on every exit path. Expiry of the timeout
    cancels in-flight store I/O and surfaces as StoreUnavailable.
    """
    try:
        async with asyncio.timeout(timeout):
            async with unit_of_work_factory() as uow:
                yield uow
    except TimeoutError as e:
        raise StoreUnavailable(f"Query exceeded {timeout}s") from e
