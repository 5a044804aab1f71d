"""Permission query API resources - the signed-in account's own permissions."""

import falcon.asgi

from accessgate.application.use_cases.membership.provision_account import (
    ProvisionAccountUseCase,
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
from accessgate.interfaces.api import serializers


class AvailableSystemsResource:
    """GET /v1/permissions/available-systems - systems visible to the caller."""

    def __init__(self, get_available_systems: GetAvailableSystemsUseCase) -> None:
        self._get_available_systems = get_available_systems

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        systems = await self._get_available_systems.execute(user.account)
        resp.media = {"items": [serializers.system_access(s) for s in systems]}
        resp.status = falcon.HTTP_200


class CheckAccessResource:
    """GET /v1/permissions/check/{security_id} - check one security id."""

    def __init__(self, check_access: CheckAccessUseCase) -> None:
        self._check_access = check_access

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        security_id: int,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        result = await self._check_access.execute(user.account, security_id)
        resp.media = {"security_id": security_id, **serializers.check_result(result)}
        resp.status = falcon.HTTP_200


class BatchCheckAccessResource:
    """POST /v1/permissions/batch-check - check many security ids at once.

    Body is either a JSON list of ids or {"security_ids": [...]}.
    """

    def __init__(self, batch_check_access: BatchCheckAccessUseCase) -> None:
        self._batch_check_access = batch_check_access

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media(default_when_empty=None)
        if isinstance(body, dict):
            body = body.get("security_ids")
        if not isinstance(body, list):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Expected a list of security ids"}
            return

        results = await self._batch_check_access.execute(user.account, body)
        accessible = sum(1 for r in results.values() if r.has_access)
        resp.media = {
            "results": {str(k): serializers.check_result(r) for k, r in results.items()},
            "total_checked": len(results),
            "accessible_count": accessible,
            "denied_count": len(results) - accessible,
        }
        resp.status = falcon.HTTP_200


class SystemPermissionsResource:
    """GET /v1/permissions/system/{system_code} - caller's permissions in one system."""

    def __init__(self, list_system_permissions: ListSystemPermissionsUseCase) -> None:
        self._list_system_permissions = list_system_permissions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        system_code: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        permissions = await self._list_system_permissions.execute(user.account, system_code)
        resp.media = {
            "system_code": system_code,
            "items": [serializers.employee_permission(p) for p in permissions],
        }
        resp.status = falcon.HTTP_200


class UserPermissionsResource:
    """GET /v1/permissions/user-permissions - every security id the caller holds."""

    def __init__(self, list_security_ids: ListSecurityIdsUseCase) -> None:
        self._list_security_ids = list_security_ids

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        items = await self._list_security_ids.execute(user.account)
        resp.media = {
            "account": user.account.key,
            "items": [serializers.employee_security_id(i) for i in items],
        }
        resp.status = falcon.HTTP_200


class AccessSummaryResource:
    """GET /v1/permissions/summary - profile, groups and grouped permissions.

    When a provisioning use case is wired in, accounts without any membership
    are added to the default group before the summary is built.
    """

    def __init__(
        self,
        get_access_summary: GetAccessSummaryUseCase,
        provision_account: ProvisionAccountUseCase | None = None,
    ) -> None:
        self._get_access_summary = get_access_summary
        self._provision_account = provision_account

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        if self._provision_account is not None:
            await self._provision_account.execute(user.account)

        summary = await self._get_access_summary.execute(user.account)
        resp.media = serializers.access_summary(summary)
        resp.status = falcon.HTTP_200


class SecurityDefinitionsResource:
    """GET /v1/permissions/security-definitions and /v1/systems/{code}/security-definitions."""

    def __init__(self, list_security_definitions: ListSecurityDefinitionsUseCase) -> None:
        self._list_security_definitions = list_security_definitions

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        system_code: str | None = None,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        entries = await self._list_security_definitions.execute(system_code)
        resp.media = {"items": [serializers.catalog_entry(e) for e in entries]}
        resp.status = falcon.HTTP_200
