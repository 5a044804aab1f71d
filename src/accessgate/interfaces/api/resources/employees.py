"""Employee directory and administration API resources."""

from datetime import UTC, datetime

import falcon.asgi

from accessgate.application.services.query_scope import query_scope
from accessgate.application.use_cases.grant.grant_direct import GrantDirectPermissionUseCase
from accessgate.application.use_cases.grant.revoke_direct import RevokeDirectPermissionUseCase
from accessgate.application.use_cases.membership.add_member import AddGroupMemberUseCase
from accessgate.application.use_cases.membership.list_groups import ListAccountGroupsUseCase
from accessgate.application.use_cases.membership.remove_member import RemoveGroupMemberUseCase
from accessgate.domain.exceptions import (
    InvalidIdentity,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from accessgate.domain.value_objects import Account
from accessgate.interfaces.api import serializers


class EmployeesResource:
    """GET /v1/employees - the active employee directory."""

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            employees = await uow.employees.list_all()

        resp.media = {
            "items": [serializers.employee(e) for e in employees],
            "count": len(employees),
        }
        resp.status = falcon.HTTP_200


class EmployeeResource:
    """GET /v1/employees/{account} - one directory profile."""

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
        except InvalidIdentity as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            employee = await uow.employees.get_by_account(target.key)

        if employee is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"Employee not found: {target.key}"}
            return

        resp.media = serializers.employee(employee)
        resp.status = falcon.HTTP_200


def _parse_expiry(raw: object) -> datetime | None:
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise ValueError("expiry_date must be an ISO 8601 string")
    value = datetime.fromisoformat(raw)
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


class EmployeeGroupsResource:
    """GET/POST /v1/employees/{account}/groups - list and add memberships."""

    def __init__(
        self,
        list_groups: ListAccountGroupsUseCase,
        add_member: AddGroupMemberUseCase,
    ) -> None:
        self._list_groups = list_groups
        self._add_member = add_member

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
    ) -> None:
        """List active groups of account."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
        except InvalidIdentity as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            groups = await self._list_groups.execute(user.account, target)
            resp.media = {
                "account": target.key,
                "items": [serializers.group_info(g) for g in groups],
            }
            resp.status = falcon.HTTP_200
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
    ) -> None:
        """Add account to a group."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
            body = await req.get_media()
            group_id = int(body["group_id"])
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (InvalidIdentity, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            membership = await self._add_member.execute(user.account, target, group_id)
            resp.media = {
                "account": membership.account,
                "group_id": membership.group_id,
                "assigned_by": membership.assigned_by,
                "assigned_date": membership.assigned_date.isoformat(),
            }
            resp.status = falcon.HTTP_201
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
        except ValidationError as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}


class EmployeeGroupResource:
    """DELETE /v1/employees/{account}/groups/{group_id} - remove membership."""

    def __init__(self, remove_member: RemoveGroupMemberUseCase) -> None:
        self._remove_member = remove_member

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
        group_id: int,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
        except InvalidIdentity as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            await self._remove_member.execute(user.account, target, group_id)
            resp.status = falcon.HTTP_204
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}


class EmployeeGrantsResource:
    """POST /v1/employees/{account}/grants - grant a security id directly."""

    def __init__(self, grant_direct: GrantDirectPermissionUseCase) -> None:
        self._grant_direct = grant_direct

    async def on_post(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
            body = await req.get_media()
            security_id = int(body["security_id"])
            expiry_date = _parse_expiry(body.get("expiry_date"))
            notes = body.get("notes")
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (InvalidIdentity, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            assignment = await self._grant_direct.execute(
                user.account, target, security_id, expiry_date=expiry_date, notes=notes
            )
            resp.media = serializers.direct_grant(assignment)
            resp.status = falcon.HTTP_201
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}


class EmployeeGrantResource:
    """DELETE /v1/employees/{account}/grants/{security_id} - revoke direct grant."""

    def __init__(self, revoke_direct: RevokeDirectPermissionUseCase) -> None:
        self._revoke_direct = revoke_direct

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        account: str,
        security_id: int,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            target = Account.parse(account)
        except InvalidIdentity as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            await self._revoke_direct.execute(user.account, target, security_id)
            resp.status = falcon.HTTP_204
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
