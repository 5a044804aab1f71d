"""Group and group membership entities."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Group:
    """Group - owns security assignments granted to all active members."""

    id: int
    name: str
    description: str | None = None
    is_active: bool = True


@dataclass
class GroupMembership:
    """Account membership in a group. Revoked by soft-delete, never removed."""

    account: str
    group_id: int
    assigned_by: str
    assigned_date: datetime
    is_active: bool = True
    removed_by: str | None = None
    removed_date: datetime | None = None
