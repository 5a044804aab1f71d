"""System registry DTOs."""

from dataclasses import dataclass, field


@dataclass
class SystemCreateInput:
    """Input for registering a system."""

    code: str
    name: str
    description: str | None = None
    icon: str | None = None
    base_url: str | None = None
    is_internal: bool = True
    requires_manager: bool = False


@dataclass
class SystemUpdateInput:
    """Input for updating a system's mutable fields."""

    name: str
    description: str | None = None
    icon: str | None = None
    base_url: str | None = None
    is_internal: bool = True
    requires_manager: bool = False


@dataclass
class SystemStats:
    """Registry-wide counters."""

    total_systems: int
    active_systems: int
    internal_systems: int
    external_systems: int
    total_security_definitions: int
    total_users: int
    total_groups: int


@dataclass
class SystemGroupInfo:
    """Active group holding at least one active definition of a system."""

    group_id: int
    group_name: str
    group_description: str | None
    permission_count: int
    member_count: int


@dataclass
class SystemUserInfo:
    """Account with group-derived access to a system.

    Directory fields fall back to the account key and empty strings when the
    account has no employee profile.
    """

    account: str
    name: str
    email: str
    department: str
    permission_count: int
    group_names: list[str] = field(default_factory=list)
