"""Domain exceptions."""


class AccessGateError(Exception):
    """Base exception for accessgate."""

    pass


class InvalidIdentity(AccessGateError):
    """Raw identity string is empty or cannot be parsed into an account."""

    pass


class PermissionDenied(AccessGateError):
    """Account does not hold the permission required for the action."""

    pass


class NotFound(AccessGateError):
    """Requested resource was not found."""

    def __init__(self, resource: str, key: object) -> None:
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class DuplicateSystem(AccessGateError):
    """System with same code already exists."""

    pass


class ValidationError(AccessGateError):
    """Validation failed for input data."""

    pass


class StoreUnavailable(AccessGateError):
    """Backing store failed or timed out; the cause is chained."""

    pass
