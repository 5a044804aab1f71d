"""Fixtures for API tests."""

import pytest
from falcon.testing import TestClient

from accessgate.application.use_cases.grant.grant_direct import GrantDirectPermissionUseCase
from accessgate.application.use_cases.grant.revoke_direct import (
    RevokeDirectPermissionUseCase,
)
from accessgate.application.use_cases.membership.add_member import AddGroupMemberUseCase
from accessgate.application.use_cases.membership.list_groups import ListAccountGroupsUseCase
from accessgate.application.use_cases.membership.provision_account import (
    ProvisionAccountUseCase,
)
from accessgate.application.use_cases.membership.remove_member import (
    RemoveGroupMemberUseCase,
)
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
from accessgate.application.use_cases.system.deactivate_system import (
    DeactivateSystemUseCase,
)
from accessgate.application.use_cases.system.update_system import UpdateSystemUseCase
from accessgate.domain.entities import Group
from accessgate.domain.value_objects import Account
from accessgate.infrastructure.classification.job_title_classifier import (
    LexicalJobTitleClassifier,
)
from accessgate.interfaces.api.app import create_app
from accessgate.interfaces.api.middleware.auth import RequestUser
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

from tests.conftest import fixed_clock


class AuthBypassMiddleware:
    """Middleware that sets context.user for testing.

    The X-Test-User header picks the account (default jdoe); "anonymous"
    leaves the request unauthenticated.
    """

    async def process_request(self, req, resp):
        name = req.get_header("X-Test-User") or "jdoe"
        if name == "anonymous":
            req.context.user = None
            return
        req.context.user = RequestUser(user_id=name, account=Account.parse(name))


def build_app(uow_factory, permission_checker, middleware=None, query_timeout=None):
    """Falcon ASGI app with every API resource over the given factory."""
    classifier = LexicalJobTitleClassifier()
    query_args = {
        "unit_of_work_factory": uow_factory,
        "job_title_classifier": classifier,
        "clock": fixed_clock,
    }
    admin_args = {
        "unit_of_work_factory": uow_factory,
        "permission_checker": permission_checker,
        "admin_security_id": 1,
        "clock": fixed_clock,
    }
    return create_app(
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
            GetAccessSummaryUseCase(**query_args),
            ProvisionAccountUseCase(uow_factory, "Regular Users", fixed_clock),
        ),
        security_definitions_resource=SecurityDefinitionsResource(
            ListSecurityDefinitionsUseCase(**query_args)
        ),
        systems_resource=SystemsResource(
            CreateSystemUseCase(**admin_args), uow_factory, query_timeout
        ),
        system_stats_resource=SystemStatsResource(uow_factory, query_timeout),
        system_search_resource=SystemSearchResource(uow_factory, query_timeout),
        system_resource=SystemResource(
            UpdateSystemUseCase(**admin_args),
            DeactivateSystemUseCase(**admin_args),
            uow_factory,
            query_timeout,
        ),
        system_groups_resource=SystemGroupsResource(uow_factory, query_timeout),
        system_users_resource=SystemUsersResource(uow_factory, query_timeout),
        employees_resource=EmployeesResource(uow_factory, query_timeout),
        employee_resource=EmployeeResource(uow_factory, query_timeout),
        employee_groups_resource=EmployeeGroupsResource(
            ListAccountGroupsUseCase(uow_factory, permission_checker, 1),
            AddGroupMemberUseCase(**admin_args),
        ),
        employee_group_resource=EmployeeGroupResource(RemoveGroupMemberUseCase(**admin_args)),
        employee_grants_resource=EmployeeGrantsResource(
            GrantDirectPermissionUseCase(**admin_args)
        ),
        employee_grant_resource=EmployeeGrantResource(RevokeDirectPermissionUseCase(**admin_args)),
        middleware=middleware if middleware is not None else [AuthBypassMiddleware()],
    )


@pytest.fixture
def app(portal_uow, uow_factory, mock_permission_checker):
    """Falcon ASGI app over the seeded portal, with a default group for provisioning."""
    portal_uow.groups.add_group(Group(id=3, name="Regular Users"))
    return build_app(uow_factory, mock_permission_checker)


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)
