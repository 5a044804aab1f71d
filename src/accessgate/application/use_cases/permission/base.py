"""Shared wiring for read-only permission query use cases."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime

from accessgate.application.ports import JobTitleClassifier
from accessgate.application.services.grant_resolver import utc_now
from accessgate.application.services.permission_query import PermissionQueryEngine
from accessgate.application.services.query_scope import query_scope


class PermissionQueryUseCase:
    """Base for queries: each call gets its own unit of work and engine."""

    def __init__(
        self,
        unit_of_work_factory: type,
        job_title_classifier: JobTitleClassifier,
        query_timeout: float | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._classifier = job_title_classifier
        self._timeout = query_timeout
        self._clock = clock

    @asynccontextmanager
    async def _engine(self) -> AsyncIterator[PermissionQueryEngine]:
        async with query_scope(self._uow_factory, self._timeout) as uow:
            yield PermissionQueryEngine(uow, self._classifier, self._clock)
