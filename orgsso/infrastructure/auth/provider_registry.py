"""Provider registry implementation."""

from orgsso.domain.auth.port.identity_provider import IdentityProvider
from orgsso.domain.auth.port.provider_registry import ProviderRegistry


class InMemoryProviderRegistry(ProviderRegistry):
    """In-memory provider registry.

    Stores a mapping of provider names to their implementations.
    Providers are registered at application startup via DI.

    With a fallback name, lookups for unregistered names resolve to that
    provider. This is how a single-provider deployment answers every
    /auth/<name>/ path with its one configured strategy.
    """

    def __init__(
        self,
        providers: dict[str, IdentityProvider] | None = None,
        fallback: str | None = None,
    ) -> None:
        """Initialize registry with optional initial providers.

        Args:
            providers: Optional dict mapping provider names to implementations
            fallback: Registered name to serve for unknown names, if any
        """
        self._providers: dict[str, IdentityProvider] = providers or {}
        self._fallback = fallback

    def get(self, provider: str) -> IdentityProvider | None:
        """Get an identity provider by name."""
        found = self._providers.get(provider)
        if found is None and self._fallback is not None:
            return self._providers.get(self._fallback)
        return found

    def available_providers(self) -> list[str]:
        """Get list of registered provider names."""
        return list(self._providers.keys())

    def register(self, name: str, provider: IdentityProvider) -> None:
        """Register a provider.

        Args:
            name: The provider name
            provider: The provider implementation
        """
        self._providers[name] = provider
