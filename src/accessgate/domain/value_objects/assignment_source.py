"""Provenance of a resolved grant."""

from enum import StrEnum


class AssignmentSource(StrEnum):
    """Where an effective grant came from. DIRECT wins over GROUP for display."""

    GROUP = "Group"
    DIRECT = "Direct"
    NONE = "None"
