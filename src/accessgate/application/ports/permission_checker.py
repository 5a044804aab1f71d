"""Permission checker port - guards administrative actions."""

from typing import Protocol

from accessgate.domain.value_objects import Account


class PermissionChecker(Protocol):
    """Port for checking whether an account holds a security id."""

    async def check(self, account: Account, security_id: int) -> bool: ...
