"""Keycloak OIDC provider - token verification and the claims sink."""

import json
from typing import Any

import structlog
from keycloak import KeycloakAdmin, KeycloakOpenID, KeycloakOpenIDConnection
from keycloak.exceptions import KeycloakError, KeycloakGetError

from brandstage.application.ports import Identity
from brandstage.domain.claims import serialize_claims
from brandstage.domain.exceptions import AuthenticationError

logger = structlog.get_logger()

CLAIMS_ATTRIBUTE = "claims"


class KeycloakProvider:
    """Keycloak OIDC - validates access tokens by introspection."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def verify_token(self, raw_token: str) -> Identity:
        """Return the caller identity or raise AuthenticationError."""
        if not raw_token:
            raise AuthenticationError("Missing authentication token")
        try:
            token_info = self._keycloak.introspect(raw_token)
        except KeycloakError as e:
            logger.warning("token_introspection_failed", error=str(e))
            raise AuthenticationError("Invalid or expired authentication token") from e
        if not token_info.get("active") or not token_info.get("sub"):
            raise AuthenticationError("Invalid or expired authentication token")
        return Identity(
            user_id=token_info["sub"],
            email=token_info.get("email"),
            name=token_info.get("name") or token_info.get("preferred_username"),
        )


class KeycloakClaimsPublisher:
    """Stores the claims payload as a JSON user attribute; Keycloak mappers put it in tokens."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        connection = KeycloakOpenIDConnection(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._admin = KeycloakAdmin(connection=connection)

    async def get_claims(self, user_id: str) -> dict[str, Any] | None:
        """Current claims, or None when the user or attribute is missing."""
        try:
            user = self._admin.get_user(user_id)
        except KeycloakGetError:
            return None
        values = (user.get("attributes") or {}).get(CLAIMS_ATTRIBUTE) or []
        if not values:
            return None
        try:
            claims = json.loads(values[0])
        except (TypeError, ValueError):
            logger.warning("claims_attribute_unreadable", user_id=user_id)
            return None
        return claims if isinstance(claims, dict) else None

    async def set_claims(self, user_id: str, payload: dict[str, Any]) -> None:
        """Overwrite the claims attribute, keeping the user's other attributes."""
        user = self._admin.get_user(user_id)
        attributes = dict(user.get("attributes") or {})
        attributes[CLAIMS_ATTRIBUTE] = [serialize_claims(payload)]
        self._admin.update_user(user_id, {"attributes": attributes})
