"""Core authorization services - catalog, grant resolution, visibility, queries."""

from accessgate.application.services.grant_resolver import GrantResolver
from accessgate.application.services.permission_query import PermissionQueryEngine
from accessgate.application.services.query_scope import query_scope
from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.application.services.system_visibility import SystemVisibilityFilter

__all__ = [
    "GrantResolver",
    "PermissionQueryEngine",
    "SecurityCatalog",
    "SystemVisibilityFilter",
    "query_scope",
]
