"""Provider registry port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from orgsso.domain.auth.port.identity_provider import IdentityProvider
from orgsso.domain.shared.port import Port


class ProviderRegistry(Port, Protocol):
    """Maps logical provider names to identity provider strategies."""

    @abstractmethod
    def get(self, provider: str) -> IdentityProvider | None:
        """Get an identity provider by name.

        Args:
            provider: The provider name (e.g., "generic")

        Returns:
            The identity provider if available, None otherwise
        """
        ...

    @abstractmethod
    def available_providers(self) -> list[str]:
        """Get list of explicitly registered provider names."""
        ...
