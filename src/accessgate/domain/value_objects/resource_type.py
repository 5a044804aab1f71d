"""Resource types a security definition can protect."""

from enum import StrEnum


class ResourceType(StrEnum):
    """Buckets used for per-system permission counts."""

    SCREEN = "Screen"
    BUTTON = "Button"
    CONTROLLER = "Controller"

    @classmethod
    def from_value(cls, value: str | None) -> "ResourceType | None":
        """Case-insensitive lookup; unknown types return None."""
        if not value:
            return None
        normalized = value.strip().lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member
        return None
