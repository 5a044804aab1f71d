"""Application entry point and composition root."""

import falcon.asgi

from accessgate import __version__
from accessgate.application.use_cases.grant.grant_direct import GrantDirectPermissionUseCase
from accessgate.application.use_cases.grant.revoke_direct import RevokeDirectPermissionUseCase
from accessgate.application.use_cases.membership.add_member import AddGroupMemberUseCase
from accessgate.application.use_cases.membership.list_groups import ListAccountGroupsUseCase
from accessgate.application.use_cases.membership.provision_account import (
    ProvisionAccountUseCase,
)
from accessgate.application.use_cases.membership.remove_member import RemoveGroupMemberUseCase
from accessgate.application.use_cases.permission.batch_check_access import (
    BatchCheckAccessUseCase,
)
from accessgate.application.use_cases.permission.check_access import CheckAccessUseCase
from accessgate.application.use_cases.permission.get_access_summary import (
    GetAccessSummaryUseCase,
)
from accessgate.application.use_cases.permission.get_available_systems import (
    GetAvailableSystemsUseCase,
)
from accessgate.application.use_cases.permission.list_security_definitions import (
    ListSecurityDefinitionsUseCase,
)
from accessgate.application.use_cases.permission.list_security_ids import (
    ListSecurityIdsUseCase,
)
from accessgate.application.use_cases.permission.list_system_permissions import (
    ListSystemPermissionsUseCase,
)
from accessgate.application.use_cases.system.create_system import CreateSystemUseCase
from accessgate.application.use_cases.system.deactivate_system import DeactivateSystemUseCase
from accessgate.application.use_cases.system.update_system import UpdateSystemUseCase
from accessgate.config import Settings, get_settings
from accessgate.infrastructure.auth.keycloak_provider import KeycloakProvider
from accessgate.infrastructure.classification.job_title_classifier import (
    LexicalJobTitleClassifier,
)
from accessgate.infrastructure.permission.permission_checker import (
    AccessGatePermissionChecker,
)
from accessgate.infrastructure.persistence.postgres.connection import create_pool
from accessgate.infrastructure.persistence.postgres.unit_of_work import (
    create_uow_factory,
)
from accessgate.interfaces.api.app import create_app
from accessgate.interfaces.api.middleware.auth import AuthMiddleware
from accessgate.interfaces.api.middleware.cors import CORSMiddleware
from accessgate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
from accessgate.interfaces.api.middleware.request_id import RequestIdMiddleware
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
from accessgate.logging import get_logger, setup_logging

log = get_logger(__name__)


def create_accessgate_app(settings: Settings | None = None) -> falcon.asgi.App:
    """Composition root - build Falcon app with all dependencies."""
    settings = settings or get_settings()
    setup_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        statement_timeout=settings.query_timeout_seconds,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )

    timeout = settings.query_timeout_seconds
    classifier = LexicalJobTitleClassifier(settings.manager_job_titles)
    permission_checker = AccessGatePermissionChecker(uow_factory, query_timeout=timeout)
    query_args = {
        "unit_of_work_factory": uow_factory,
        "job_title_classifier": classifier,
        "query_timeout": timeout,
    }
    admin_args = {
        "unit_of_work_factory": uow_factory,
        "permission_checker": permission_checker,
        "admin_security_id": settings.admin_security_id,
    }

    provision_account = (
        ProvisionAccountUseCase(
            unit_of_work_factory=uow_factory,
            default_group_name=settings.default_group_name,
        )
        if settings.auto_provision
        else None
    )

    app = create_app(
        health_resource=HealthResource(uow_factory),
        available_systems_resource=AvailableSystemsResource(
            GetAvailableSystemsUseCase(**query_args)
        ),
        check_access_resource=CheckAccessResource(CheckAccessUseCase(**query_args)),
        batch_check_resource=BatchCheckAccessResource(BatchCheckAccessUseCase(**query_args)),
        system_permissions_resource=SystemPermissionsResource(
            ListSystemPermissionsUseCase(**query_args)
        ),
        user_permissions_resource=UserPermissionsResource(ListSecurityIdsUseCase(**query_args)),
        summary_resource=AccessSummaryResource(
            GetAccessSummaryUseCase(**query_args), provision_account
        ),
        security_definitions_resource=SecurityDefinitionsResource(
            ListSecurityDefinitionsUseCase(**query_args)
        ),
        systems_resource=SystemsResource(CreateSystemUseCase(**admin_args), uow_factory, timeout),
        system_stats_resource=SystemStatsResource(uow_factory, timeout),
        system_search_resource=SystemSearchResource(uow_factory, timeout),
        system_resource=SystemResource(
            UpdateSystemUseCase(**admin_args),
            DeactivateSystemUseCase(**admin_args),
            uow_factory,
            timeout,
        ),
        system_groups_resource=SystemGroupsResource(uow_factory, timeout),
        system_users_resource=SystemUsersResource(uow_factory, timeout),
        employees_resource=EmployeesResource(uow_factory, timeout),
        employee_resource=EmployeeResource(uow_factory, timeout),
        employee_groups_resource=EmployeeGroupsResource(
            ListAccountGroupsUseCase(**admin_args),
            AddGroupMemberUseCase(**admin_args),
        ),
        employee_group_resource=EmployeeGroupResource(RemoveGroupMemberUseCase(**admin_args)),
        employee_grants_resource=EmployeeGrantsResource(
            GrantDirectPermissionUseCase(**admin_args)
        ),
        employee_grant_resource=EmployeeGrantResource(RevokeDirectPermissionUseCase(**admin_args)),
        middleware=[
            RequestIdMiddleware(),
            CORSMiddleware([o.strip() for o in settings.cors_origins.split(",") if o.strip()]),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(
                keycloak,
                trust_remote_user_header=settings.trust_remote_user_header,
                remote_user_header=settings.remote_user_header,
            ),
        ],
    )
    log.info(
        "app_created",
        version=__version__,
        environment=settings.environment,
        keycloak=keycloak is not None,
        remote_user_header=settings.trust_remote_user_header,
    )
    return app


def run_server() -> None:
    """Run uvicorn server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_accessgate_app(settings), host=settings.host, port=settings.port)


def main() -> None:
    """CLI entry point."""
    print(f"AccessGate v{__version__}")
    run_server()


if __name__ == "__main__":
    main()
