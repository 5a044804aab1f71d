"""Lexical job title classifier."""

from collections.abc import Iterable

DEFAULT_MANAGER_TITLES = (
    "manager",
    "executive manager",
    "senior manager",
    "division leader",
    "professional",
    "senior division leader",
)


def normalize_title(title: str) -> str:
    """Lower-case and collapse whitespace."""
    return " ".join(title.split()).lower()


class LexicalJobTitleClassifier:
    """Manager-level when the title exactly matches a configured title.

    Matching ignores case and surrounding/repeated whitespace; substrings do
    not match ("assistant manager" is not "manager").
    """

    def __init__(self, titles: Iterable[str] = DEFAULT_MANAGER_TITLES) -> None:
        self._titles = frozenset(normalize_title(t) for t in titles if t.strip())

    def is_manager_level(self, job_title: str | None) -> bool:
        if not job_title or not job_title.strip():
            return False
        return normalize_title(job_title) in self._titles
