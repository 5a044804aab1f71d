"""Permission query DTOs."""

from dataclasses import dataclass, field
from datetime import datetime

from accessgate.domain.entities import Employee, SecurityDefinition, System
from accessgate.domain.value_objects import AccessLevel, AssignmentSource


@dataclass(frozen=True)
class CatalogEntry:
    """Active security definition joined with its owning system (if any)."""

    definition: SecurityDefinition
    system: System | None = None

    @property
    def security_id(self) -> int:
        return self.definition.security_id

    @property
    def system_code(self) -> str:
        return self.system.code if self.system else ""

    @property
    def system_name(self) -> str:
        return self.system.name if self.system else ""

    @property
    def display_security_id(self) -> str:
        """{system_code}.{security_id}; bare id for system-less definitions."""
        if self.system is None:
            return str(self.definition.security_id)
        return f"{self.system.code}.{self.definition.security_id}"


@dataclass(frozen=True)
class GrantDetail:
    """One effective grant with its provenance."""

    security_id: int
    source: AssignmentSource
    entry: CatalogEntry
    assigned_date: datetime | None = None
    expiry_date: datetime | None = None
    notes: str | None = None


@dataclass(frozen=True)
class PermissionCheckResult:
    """Outcome of checking one security id for an account."""

    has_access: bool
    assignment_source: AssignmentSource
    system_code: str = ""
    system_name: str = ""
    display_security_id: str = ""

    @classmethod
    def denied(cls) -> "PermissionCheckResult":
        return cls(has_access=False, assignment_source=AssignmentSource.NONE)

    @classmethod
    def from_grant(cls, grant: GrantDetail) -> "PermissionCheckResult":
        return cls(
            has_access=True,
            assignment_source=grant.source,
            system_code=grant.entry.system_code,
            system_name=grant.entry.system_name,
            display_security_id=grant.entry.display_security_id,
        )


@dataclass
class SystemAccess:
    """Visible system with the account's permission counts inside it."""

    system_id: int
    system_code: str
    system_name: str
    description: str | None
    icon: str | None
    base_url: str | None
    is_internal: bool
    requires_manager: bool
    total_permissions: int = 0
    screen_permissions: int = 0
    button_permissions: int = 0
    controller_permissions: int = 0
    access_level: AccessLevel = AccessLevel.PARTIAL


@dataclass
class EmployeePermission:
    """Held permission inside one system."""

    security_id: int
    permission_name: str
    description: str
    resource_type: str
    resource_path: str
    category: str
    display_security_id: str
    assignment_source: AssignmentSource
    sort_order: int
    assigned_date: datetime | None = None
    expiry_date: datetime | None = None
    notes: str | None = None


@dataclass
class EmployeeSecurityId:
    """Held permission in the flattened cross-system view."""

    security_id: int
    security_name: str
    security_description: str
    resource_type: str
    resource_path: str
    system_name: str
    system_code: str
    category: str
    assignment_source: AssignmentSource
    display_security_id: str


@dataclass
class SystemPermissions:
    """Permissions held in one system; system is None for global definitions."""

    system_id: int | None
    system_code: str
    system_name: str
    permissions: list[EmployeePermission] = field(default_factory=list)


@dataclass
class AccessSummary:
    """Grouped-by-system view of everything an account can see and do."""

    account: str
    employee: Employee | None
    is_manager: bool
    groups: list[str]
    available_systems: list[SystemAccess]
    security_ids: list[int]
    system_permissions: list[SystemPermissions]


@dataclass
class GroupInfo:
    """Active membership of an account, as shown to administrators."""

    group_id: int
    group_name: str
    group_description: str | None
    assigned_date: datetime
    assigned_by: str
