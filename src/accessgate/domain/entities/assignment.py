"""Group and direct security assignments."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class GroupSecurityAssignment:
    """Grants security_id to every active member of group_id."""

    group_id: int
    security_id: int
    is_active: bool = True


@dataclass
class EmployeeSecurityAssignment:
    """Direct grant to an account, optionally time-boxed by expiry_date."""

    account: str
    security_id: int
    assigned_by: str
    assigned_date: datetime
    is_active: bool = True
    expiry_date: datetime | None = None
    notes: str | None = None
    revoked_by: str | None = None
    revoked_date: datetime | None = None

    def is_effective(self, now: datetime) -> bool:
        """Active and not expired. Expiry is exclusive: expiry_date == now is expired."""
        if not self.is_active:
            return False
        return self.expiry_date is None or self.expiry_date > now
