"""Access level an account has within a system."""

from enum import StrEnum


class AccessLevel(StrEnum):
    """FULL when every active definition of the system is held."""

    FULL = "Full"
    PARTIAL = "Partial"
