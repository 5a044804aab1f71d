"""Permission checker implementation - checks against resolved grants."""

from accessgate.application.services.grant_resolver import GrantResolver
from accessgate.application.services.query_scope import query_scope
from accessgate.domain.value_objects import Account


class AccessGatePermissionChecker:
    """Checks whether an account currently holds a security id."""

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._timeout = query_timeout

    async def check(self, account: Account, security_id: int) -> bool:
        """Check if account holds security_id through any source."""
        async with query_scope(self._uow_factory, self._timeout) as uow:
            grants = await GrantResolver(uow).effective_grants(account)
            return security_id in grants
