"""Canned identity provider for local development."""

from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey
from orgsso.domain.auth.port.identity_provider import IdentityProvider

MOCK_CODE = "MOCK_CODE"
MOCK_ACCESS_TOKEN = "MOCK_ACCESS_TOKEN"
MOCK_IDENTITY = ProviderIdentity(email="demo@example.com", external_id="mock-user-id")


class MockIdentityProvider(IdentityProvider):
    """IdentityProvider that never leaves the process.

    The authorization URL points straight back at our own callback, so the
    whole login flow runs without an identity provider.
    """

    def __init__(self, callback_url: str = "/auth/generic/callback") -> None:
        self._callback_url = callback_url

    @property
    def provider_name(self) -> ProviderKey:
        return ProviderKey.GENERIC

    def build_authorization_url(self) -> str:
        return f"{self._callback_url}?code={MOCK_CODE}"

    async def exchange_code_for_token(self, code: str) -> str:
        return MOCK_ACCESS_TOKEN

    async def fetch_profile(self, access_token: str) -> ProviderIdentity | None:
        if not access_token:
            return None
        return MOCK_IDENTITY

    def build_logout_url(self, post_logout_redirect: str) -> str:
        return post_logout_redirect
