"""Domain entities."""

from accessgate.domain.entities.assignment import (
    EmployeeSecurityAssignment,
    GroupSecurityAssignment,
)
from accessgate.domain.entities.employee import Employee
from accessgate.domain.entities.group import Group, GroupMembership
from accessgate.domain.entities.security_definition import SecurityDefinition
from accessgate.domain.entities.system import System

__all__ = [
    "Employee",
    "EmployeeSecurityAssignment",
    "Group",
    "GroupMembership",
    "GroupSecurityAssignment",
    "SecurityDefinition",
    "System",
]
