"""Security definition entity - one grantable permission."""

from dataclasses import dataclass


@dataclass
class SecurityDefinition:
    """Permission unit, optionally owned by a system (system_id None = global)."""

    security_id: int
    name: str
    resource_type: str
    system_id: int | None = None
    description: str | None = None
    resource_path: str | None = None
    category: str | None = None
    sort_order: int = 0
    is_active: bool = True
