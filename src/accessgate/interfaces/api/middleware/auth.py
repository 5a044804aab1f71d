"""Auth middleware - resolves the request identity to an account."""

from dataclasses import dataclass

import falcon.asgi
import structlog

from accessgate.domain.exceptions import InvalidIdentity
from accessgate.domain.value_objects import Account
from accessgate.logging import get_logger

log = get_logger(__name__)


@dataclass
class RequestUser:
    """User from request context."""

    user_id: str
    account: Account
    email: str | None = None


class AuthMiddleware:
    """Middleware that sets req.context.user from a bearer token or proxy header.

    A Keycloak bearer token wins. Otherwise, when enabled, the identity header
    set by a trusted reverse proxy (DOMAIN\\user) is used. Requests without a
    resolvable identity get req.context.user = None.
    """

    def __init__(
        self,
        keycloak_provider=None,
        trust_remote_user_header: bool = False,
        remote_user_header: str = "X-Remote-User",
    ) -> None:
        self._keycloak = keycloak_provider
        self._trust_header = trust_remote_user_header
        self._header = remote_user_header

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization or the remote-user header."""
        req.context.user = None

        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            if self._keycloak:
                user = await self._keycloak.decode_token(auth[7:])
                if user and user.username:
                    req.context.user = self._resolve(user.username, user.user_id, user.email)
            return

        if self._trust_header:
            raw = req.get_header(self._header)
            if raw:
                req.context.user = self._resolve(raw, raw)

    def _resolve(self, raw: str, user_id: str, email: str | None = None) -> RequestUser | None:
        try:
            account = Account.parse(raw)
        except InvalidIdentity:
            log.warning("identity_rejected", identity=raw)
            return None
        structlog.contextvars.bind_contextvars(account=account.key)
        return RequestUser(user_id=user_id, account=account, email=email)
