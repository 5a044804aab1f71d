"""Employee directory profile."""

from dataclasses import dataclass


@dataclass
class Employee:
    """Directory record for an account; job_title drives the manager gate."""

    account: str
    name: str
    email: str | None = None
    department: str | None = None
    position: str | None = None
    job_title: str | None = None
