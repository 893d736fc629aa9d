"""Auth middleware - extracts the acting ERP user from a bearer token."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context."""

    user_id: int
    username: str | None = None


class AuthMiddleware:
    """Middleware that validates JWT and sets req.context.user.

    Requests without a valid token get ``req.context.user = None`` so that
    mutating resources can reject them. ``fallback_user_id`` is only meant for
    local development and is ignored when a token is present.
    """

    def __init__(self, keycloak_provider=None, fallback_user_id: int | None = None) -> None:
        self._keycloak = keycloak_provider
        self._fallback_user_id = fallback_user_id

    async def process_request(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response
    ) -> None:
        """Extract user from Authorization header."""
        req.context.user = None
        auth = req.get_header("Authorization")
        if auth and auth.startswith("Bearer "):
            if self._keycloak:
                user = self._keycloak.decode_token(auth[7:])
                if user:
                    req.context.user = RequestUser(
                        user_id=user.user_id,
                        username=user.username,
                    )
            return
        if self._fallback_user_id is not None:
            req.context.user = RequestUser(user_id=self._fallback_user_id)
