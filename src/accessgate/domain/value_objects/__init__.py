"""Domain value objects."""

from accessgate.domain.value_objects.access_level import AccessLevel
from accessgate.domain.value_objects.account import Account
from accessgate.domain.value_objects.assignment_source import AssignmentSource
from accessgate.domain.value_objects.resource_type import ResourceType

__all__ = [
    "AccessLevel",
    "Account",
    "AssignmentSource",
    "ResourceType",
]
