"""Job title classifier port - manager-level policy."""

from typing import Protocol


class JobTitleClassifier(Protocol):
    """Decides whether a job title counts as manager-level."""

    def is_manager_level(self, job_title: str | None) -> bool: ...
