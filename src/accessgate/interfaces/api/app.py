"""Falcon ASGI application."""

import falcon
import falcon.asgi
from falcon.asgi import App

from accessgate.domain.exceptions import InvalidIdentity, StoreUnavailable
from accessgate.interfaces.api.resources.employees import (
    EmployeeGrantResource,
    EmployeeGrantsResource,
    EmployeeGroupResource,
    EmployeeGroupsResource,
    EmployeeResource,
    EmployeesResource,
)
from accessgate.interfaces.api.resources.health import HealthResource
from accessgate.interfaces.api.resources.permissions import (
    AccessSummaryResource,
    AvailableSystemsResource,
    BatchCheckAccessResource,
    CheckAccessResource,
    SecurityDefinitionsResource,
    SystemPermissionsResource,
    UserPermissionsResource,
)
from accessgate.interfaces.api.resources.systems import (
    SystemGroupsResource,
    SystemResource,
    SystemSearchResource,
    SystemsResource,
    SystemStatsResource,
    SystemUsersResource,
)
from accessgate.logging import get_logger

log = get_logger(__name__)


async def handle_store_unavailable(req, resp, ex, params) -> None:
    log.error("store_unavailable", error=str(ex), cause=repr(ex.__cause__))
    resp.status = falcon.HTTP_503
    resp.media = {"error": "Permission store unavailable"}


async def handle_invalid_identity(req, resp, ex, params) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": str(ex)}


async def handle_unexpected(req, resp, ex, params) -> None:
    log.exception("unhandled_error", error=str(ex))
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal server error"}


def create_app(
    health_resource: HealthResource,
    available_systems_resource: AvailableSystemsResource,
    check_access_resource: CheckAccessResource,
    batch_check_resource: BatchCheckAccessResource,
    system_permissions_resource: SystemPermissionsResource,
    user_permissions_resource: UserPermissionsResource,
    summary_resource: AccessSummaryResource,
    security_definitions_resource: SecurityDefinitionsResource,
    systems_resource: SystemsResource,
    system_stats_resource: SystemStatsResource,
    system_search_resource: SystemSearchResource,
    system_resource: SystemResource,
    system_groups_resource: SystemGroupsResource,
    system_users_resource: SystemUsersResource,
    employees_resource: EmployeesResource,
    employee_resource: EmployeeResource,
    employee_groups_resource: EmployeeGroupsResource,
    employee_group_resource: EmployeeGroupResource,
    employee_grants_resource: EmployeeGrantsResource,
    employee_grant_resource: EmployeeGrantResource,
    middleware: list | None = None,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])

    app.add_error_handler(Exception, handle_unexpected)
    app.add_error_handler(StoreUnavailable, handle_store_unavailable)
    app.add_error_handler(InvalidIdentity, handle_invalid_identity)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/health/ready", health_resource, suffix="ready")

    app.add_route("/v1/permissions/available-systems", available_systems_resource)
    app.add_route("/v1/permissions/check/{security_id:int}", check_access_resource)
    app.add_route("/v1/permissions/batch-check", batch_check_resource)
    app.add_route("/v1/permissions/system/{system_code}", system_permissions_resource)
    app.add_route("/v1/permissions/user-permissions", user_permissions_resource)
    app.add_route("/v1/permissions/summary", summary_resource)
    app.add_route("/v1/permissions/security-definitions", security_definitions_resource)

    app.add_route("/v1/systems", systems_resource)
    app.add_route("/v1/systems/stats", system_stats_resource)
    app.add_route("/v1/systems/search", system_search_resource)
    app.add_route("/v1/systems/{system_code}", system_resource)
    app.add_route(
        "/v1/systems/{system_code}/security-definitions", security_definitions_resource
    )
    app.add_route("/v1/systems/{system_code}/groups", system_groups_resource)
    app.add_route("/v1/systems/{system_code}/users", system_users_resource)

    app.add_route("/v1/employees", employees_resource)
    app.add_route("/v1/employees/{account}", employee_resource)
    app.add_route("/v1/employees/{account}/groups", employee_groups_resource)
    app.add_route(
        "/v1/employees/{account}/groups/{group_id:int}", employee_group_resource
    )
    app.add_route("/v1/employees/{account}/grants", employee_grants_resource)
    app.add_route(
        "/v1/employees/{account}/grants/{security_id:int}", employee_grant_resource
    )
    return app
