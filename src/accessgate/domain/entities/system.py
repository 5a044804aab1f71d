"""System entity - registered sub-application."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class System:
    """Owning application of security definitions; requires_manager gates visibility."""

    id: int
    code: str
    name: str
    created_date: datetime
    description: str | None = None
    icon: str | None = None
    base_url: str | None = None
    is_internal: bool = True
    requires_manager: bool = False
    is_active: bool = True
    created_by: str | None = None
    modified_date: datetime | None = None
    modified_by: str | None = None
