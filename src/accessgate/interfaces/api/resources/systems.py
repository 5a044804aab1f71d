"""System registry API resources."""

import falcon.asgi

from accessgate.application.dto.system_dto import SystemCreateInput, SystemUpdateInput
from accessgate.application.services.query_scope import query_scope
from accessgate.application.services.security_catalog import SecurityCatalog
from accessgate.application.use_cases.system.create_system import CreateSystemUseCase
from accessgate.application.use_cases.system.deactivate_system import DeactivateSystemUseCase
from accessgate.application.use_cases.system.update_system import UpdateSystemUseCase
from accessgate.domain.exceptions import (
    DuplicateSystem,
    NotFound,
    PermissionDenied,
    ValidationError,
)
from accessgate.interfaces.api import serializers


def _bool(body: dict, key: str, default: bool) -> bool:
    value = body.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"Field {key} must be a boolean")
    return value


class SystemsResource:
    """GET/POST /v1/systems - list and register systems."""

    def __init__(
        self,
        create_system: CreateSystemUseCase,
        unit_of_work_factory: type,
        query_timeout: float | None = None,
    ) -> None:
        self._create_system = create_system
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List active systems."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            systems = await SecurityCatalog(uow).list_systems()

        resp.media = {"items": [serializers.system(s) for s in systems]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Register a system."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            input_data = SystemCreateInput(
                code=body["code"],
                name=body["name"],
                description=body.get("description"),
                icon=body.get("icon"),
                base_url=body.get("base_url"),
                is_internal=_bool(body, "is_internal", True),
                requires_manager=_bool(body, "requires_manager", False),
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            created = await self._create_system.execute(user.account, input_data)
            resp.media = serializers.system(created)
            resp.status = falcon.HTTP_201
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except DuplicateSystem as e:
            resp.status = falcon.HTTP_409
            resp.media = {"error": str(e)}
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}


class SystemStatsResource:
    """GET /v1/systems/stats - registry-wide counters."""

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
            stats = await uow.catalog.stats()

        resp.media = serializers.system_stats(stats)
        resp.status = falcon.HTTP_200


class SystemSearchResource:
    """GET /v1/systems/search?q= - active systems matching code, name or description."""

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        query = (req.get_param("q") or "").strip()
        if not query:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "Search query is required"}
            return

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            systems = await uow.catalog.search_systems(query)

        resp.media = {"query": query, "items": [serializers.system(s) for s in systems]}
        resp.status = falcon.HTTP_200


class SystemResource:
    """GET/PUT/DELETE /v1/systems/{system_code} - get, update, deactivate."""

    def __init__(
        self,
        update_system: UpdateSystemUseCase,
        deactivate_system: DeactivateSystemUseCase,
        unit_of_work_factory: type,
        query_timeout: float | None = None,
    ) -> None:
        self._update_system = update_system
        self._deactivate_system = deactivate_system
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        system_code: str,
    ) -> None:
        """Get active system by code."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            system = await SecurityCatalog(uow).get_system(system_code)

        if system is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"System not found: {system_code}"}
            return

        resp.media = serializers.system(system)
        resp.status = falcon.HTTP_200

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        system_code: str,
    ) -> None:
        """Update system."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            input_data = SystemUpdateInput(
                name=body["name"],
                description=body.get("description"),
                icon=body.get("icon"),
                base_url=body.get("base_url"),
                is_internal=_bool(body, "is_internal", True),
                requires_manager=_bool(body, "requires_manager", False),
            )
        except KeyError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        except (TypeError, ValueError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        try:
            updated = await self._update_system.execute(user.account, system_code, input_data)
            resp.media = serializers.system(updated)
            resp.status = falcon.HTTP_200
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        system_code: str,
    ) -> None:
        """Soft-delete system."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            await self._deactivate_system.execute(user.account, system_code)
            resp.status = falcon.HTTP_204
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
        except NotFound as e:
            resp.status = falcon.HTTP_404
            resp.media = {"error": str(e)}


class SystemGroupsResource:
    """GET /v1/systems/{system_code}/groups - groups granting access to a system.

    Each group carries how many of the system's definitions it grants and how
    many active members it has.
    """

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

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

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            system = await SecurityCatalog(uow).get_system(system_code)
            groups = await uow.catalog.list_system_groups(system.code) if system else []

        if system is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"System not found: {system_code}"}
            return

        resp.media = {
            "system_code": system.code,
            "items": [serializers.system_group(g) for g in groups],
            "count": len(groups),
        }
        resp.status = falcon.HTTP_200


class SystemUsersResource:
    """GET /v1/systems/{system_code}/users - accounts with group-derived access."""

    def __init__(self, unit_of_work_factory: type, query_timeout: float | None = None) -> None:
        self._uow_factory = unit_of_work_factory
        self._query_timeout = query_timeout

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

        async with query_scope(self._uow_factory, self._query_timeout) as uow:
            system = await SecurityCatalog(uow).get_system(system_code)
            users = await uow.catalog.list_system_users(system.code) if system else []

        if system is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"System not found: {system_code}"}
            return

        resp.media = {
            "system_code": system.code,
            "items": [serializers.system_user(u) for u in users],
            "count": len(users),
        }
        resp.status = falcon.HTTP_200
