"""Identity provider port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey
from orgsso.domain.shared.port import Port


class IdentityProvider(Port, Protocol):
    """Port for one external identity provider integration.

    Implementations are adapters in infrastructure/ (OidcIdentityProvider,
    MockIdentityProvider).
    """

    @property
    @abstractmethod
    def provider_name(self) -> ProviderKey:
        """Provider recorded on users authenticated through this strategy."""
        ...

    @abstractmethod
    def build_authorization_url(self) -> str:
        """Build the URL that starts the provider's login page.

        Deterministic, no I/O. Embeds client_id, redirect_uri, scope and
        response_type=code.
        """
        ...

    @abstractmethod
    async def exchange_code_for_token(self, code: str) -> str:
        """Exchange an authorization code for an access token.

        Args:
            code: Authorization code from the provider callback

        Returns:
            The provider access token

        Raises:
            TokenExchangeError: If the token endpoint fails or times out
        """
        ...

    @abstractmethod
    async def fetch_profile(self, access_token: str) -> ProviderIdentity | None:
        """Fetch the user profile for an access token.

        Args:
            access_token: Bearer token from exchange_code_for_token

        Returns:
            ProviderIdentity, or None when access_token is empty

        Raises:
            ProfileFetchError: If the userinfo call fails or lacks email/sub
        """
        ...

    @abstractmethod
    def build_logout_url(self, post_logout_redirect: str) -> str:
        """Build the provider's end-session URL.

        Args:
            post_logout_redirect: Where the provider sends the browser afterwards
        """
        ...
