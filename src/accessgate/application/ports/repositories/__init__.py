"""Repository ports."""

from accessgate.application.ports.repositories.assignment_repository import (
    AssignmentRepository,
)
from accessgate.application.ports.repositories.catalog_repository import (
    CatalogRepository,
)
from accessgate.application.ports.repositories.employee_repository import (
    EmployeeRepository,
)
from accessgate.application.ports.repositories.group_repository import (
    GroupRepository,
)

__all__ = [
    "AssignmentRepository",
    "CatalogRepository",
    "EmployeeRepository",
    "GroupRepository",
]
