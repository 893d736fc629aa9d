"""Keycloak OIDC provider for JWT validation."""

import logging
from dataclasses import dataclass

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

logger = logging.getLogger(__name__)


@dataclass
class OIDCUser:
    """Authenticated user from OIDC token."""

    user_id: int
    subject: str
    username: str | None
    realm_roles: list[str]


class KeycloakProvider:
    """Keycloak OIDC - validates JWT and extracts the ERP user id."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
        user_id_claim: str = "erp_user_id",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )
        self._user_id_claim = user_id_claim

    def decode_token(self, token: str) -> OIDCUser | None:
        """Introspect token, return user info or None if inactive or unmapped."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError:
            logger.warning("Token introspection failed", exc_info=True)
            return None
        if not token_info.get("active"):
            return None

        try:
            user_id = int(token_info.get(self._user_id_claim))
        except (TypeError, ValueError):
            logger.warning(
                "Token for %s has no usable %s claim",
                token_info.get("sub"),
                self._user_id_claim,
            )
            return None
        return OIDCUser(
            user_id=user_id,
            subject=token_info.get("sub", ""),
            username=token_info.get("preferred_username"),
            realm_roles=token_info.get("realm_access", {}).get("roles", []),
        )
