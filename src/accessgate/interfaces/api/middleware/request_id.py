"""Request id middleware - tags each request and its log lines."""

import uuid

import falcon.asgi
import structlog

from accessgate.logging import get_logger

log = get_logger(__name__)


class RequestIdMiddleware:
    """Binds a request id to the structlog context and echoes it as X-Request-ID."""

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        structlog.contextvars.clear_contextvars()
        request_id = req.get_header("X-Request-ID") or str(uuid.uuid4())
        req.context.request_id = request_id
        structlog.contextvars.bind_contextvars(
            request_id=request_id, method=req.method, path=req.path
        )

    async def process_response(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, resource, req_succeeded
    ) -> None:
        request_id = getattr(req.context, "request_id", None)
        if request_id:
            resp.set_header("X-Request-ID", request_id)
        log.debug("request_completed", status=resp.status, succeeded=req_succeeded)
        structlog.contextvars.clear_contextvars()
