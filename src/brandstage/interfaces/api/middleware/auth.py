"""Auth middleware - verifies the bearer token and sets req.context.user."""

import falcon.asgi

from brandstage.application.ports import Identity, IdentityProvider
from brandstage.domain.exceptions import AuthenticationError


class AuthMiddleware:
    """Sets req.context.user to the verified Identity, or None without a token.

    A present but invalid token is rejected outright; routes that need a
    caller use current_user().
    """

    def __init__(self, identity_provider: IdentityProvider | None = None) -> None:
        self._identity_provider = identity_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.user = None
        if req.method == "OPTIONS":
            return
        auth = req.get_header("Authorization")
        if not auth:
            return
        if not auth.startswith("Bearer "):
            raise AuthenticationError("Missing or invalid Authorization header")
        if self._identity_provider is None:
            raise AuthenticationError("Authentication is not configured")
        req.context.user = self._identity_provider.verify_token(auth[7:].strip())


def current_user(req: falcon.asgi.Request) -> Identity:
    """The authenticated caller; raises AuthenticationError for anonymous requests."""
    user = getattr(req.context, "user", None)
    if not user:
        raise AuthenticationError("Missing or invalid Authorization header")
    return user
