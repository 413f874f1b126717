"""OIDC identity provider adapter for a Keycloak-style realm."""

import logging
from urllib.parse import urlencode

import httpx

from orgsso.config import OidcConfig
from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey
from orgsso.domain.auth.port.identity_provider import IdentityProvider
from orgsso.domain.shared.error import (
    ConfigurationError,
    ProfileFetchError,
    TokenExchangeError,
)

logger = logging.getLogger(__name__)

_REQUIRED_SETTINGS = ("base_url", "realm", "client_id", "client_secret", "redirect_uri")


class OidcIdentityProvider(IdentityProvider):
    """IdentityProvider implementation for an OIDC realm.

    Endpoints live under {base_url}/realms/{realm}/protocol/openid-connect.
    """

    def __init__(self, config: OidcConfig, http_client: httpx.AsyncClient) -> None:
        missing = [name for name in _REQUIRED_SETTINGS if not getattr(config, name)]
        if missing:
            raise ConfigurationError(
                f"OIDC provider is missing required settings: {', '.join(missing)}",
                code="oidc_not_configured",
            )
        self._config = config
        self._http = http_client

    @property
    def provider_name(self) -> ProviderKey:
        return ProviderKey.GENERIC

    def build_authorization_url(self) -> str:
        params = {
            "client_id": self._config.client_id,
            "redirect_uri": self._config.redirect_uri,
            "response_type": "code",
            "scope": self._config.scope,
        }
        return f"{self._config.realm_url}/auth?{urlencode(params)}"

    async def exchange_code_for_token(self, code: str) -> str:
        """Exchange authorization code for an access token."""
        data = {
            "grant_type": "authorization_code",
            "client_id": self._config.client_id,
            "client_secret": self._config.client_secret,
            "code": code,
            "redirect_uri": self._config.redirect_uri,
        }

        try:
            response = await self._http.post(
                f"{self._config.realm_url}/token",
                data=data,
                headers={"Accept": "application/json"},
            )
        except httpx.TimeoutException as e:
            logger.error("OIDC token request timed out: %s", e)
            raise TokenExchangeError("Token request timed out", code="idp_timeout") from e
        except httpx.RequestError as e:
            logger.exception("OIDC token request failed: %s", e)
            raise TokenExchangeError(
                "Failed to connect to identity provider",
                code="idp_unavailable",
            ) from e

        if not response.is_success:
            logger.error(
                "OIDC token exchange failed: status=%d, body=%s",
                response.status_code,
                response.text,
            )
            raise TokenExchangeError(
                f"Token request failed: {response.text}",
                code="token_exchange_failed",
                body=response.text,
            )

        try:
            access_token = response.json().get("access_token")
        except ValueError as e:
            raise TokenExchangeError(
                "Token response is not JSON",
                code="token_exchange_failed",
                body=response.text,
            ) from e

        if not access_token:
            raise TokenExchangeError(
                "Token response missing access_token",
                code="token_exchange_failed",
                body=response.text,
            )
        return access_token

    async def fetch_profile(self, access_token: str) -> ProviderIdentity | None:
        """Fetch email and subject from the userinfo endpoint."""
        if not access_token:
            return None

        try:
            response = await self._http.get(
                f"{self._config.realm_url}/userinfo",
                headers={"Authorization": f"Bearer {access_token}"},
            )
        except httpx.TimeoutException as e:
            logger.error("OIDC userinfo request timed out: %s", e)
            raise ProfileFetchError("User info request timed out", code="idp_timeout") from e
        except httpx.RequestError as e:
            logger.exception("OIDC userinfo request failed: %s", e)
            raise ProfileFetchError(
                "Failed to connect to identity provider",
                code="idp_unavailable",
            ) from e

        if not response.is_success:
            logger.error(
                "OIDC userinfo failed: status=%d, body=%s",
                response.status_code,
                response.text,
            )
            raise ProfileFetchError(
                f"User info request failed: {response.text}",
                code="profile_fetch_failed",
                body=response.text,
            )

        try:
            user_data = response.json()
        except ValueError as e:
            raise ProfileFetchError(
                "User info response is not JSON",
                code="profile_fetch_failed",
                body=response.text,
            ) from e

        # {"sub": "f1b2...", "email": "jane@example.com", "email_verified": true, ...}
        email = user_data.get("email") if isinstance(user_data, dict) else None
        subject = user_data.get("sub") if isinstance(user_data, dict) else None
        if not email or not subject:
            raise ProfileFetchError(
                "User info response missing email or sub",
                code="invalid_user",
                body=response.text,
            )

        return ProviderIdentity(email=email, external_id=subject)

    def build_logout_url(self, post_logout_redirect: str) -> str:
        return f"{self._config.realm_url}/logout?{urlencode({'redirect_uri': post_logout_redirect})}"
