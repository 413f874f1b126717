"""DI provider for auth infrastructure."""

import logging
from typing import AsyncIterable

import httpx
from dishka import provide

from orgsso.config import Config
from orgsso.domain.auth.model.value import ProviderKey
from orgsso.domain.auth.port.identity_provider import IdentityProvider
from orgsso.domain.auth.port.newsletter import NewsletterRegistrar
from orgsso.domain.auth.port.provider_registry import ProviderRegistry
from orgsso.infrastructure.auth.mock import MockIdentityProvider
from orgsso.infrastructure.auth.oidc import OidcIdentityProvider
from orgsso.infrastructure.auth.provider_registry import InMemoryProviderRegistry
from orgsso.infrastructure.newsletter.registrar import (
    HttpNewsletterRegistrar,
    LoggingNewsletterRegistrar,
)
from orgsso.util.di.base import Provider
from orgsso.util.di.scope import Scope

logger = logging.getLogger(__name__)


def http_timeout(config: Config) -> httpx.Timeout:
    """Bounded timeout for all outbound calls (read bound comes from config)."""
    return httpx.Timeout(
        connect=5.0,
        read=config.auth.http_timeout,
        write=5.0,
        pool=5.0,
    )


def build_identity_provider(config: Config, http_client: httpx.AsyncClient) -> IdentityProvider:
    """Construct the strategy selected by `auth.strategy`.

    Raises:
        ConfigurationError: If the live strategy is missing required settings
    """
    if config.auth.strategy == "mock":
        return MockIdentityProvider(callback_url=f"/auth/{ProviderKey.GENERIC}/callback")
    return OidcIdentityProvider(config=config.auth.oidc, http_client=http_client)


class AuthInfraProvider(Provider):
    """DI provider for auth infrastructure adapters."""

    @provide(scope=Scope.APP)
    async def get_auth_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        """Shared HTTP client for outbound calls (connection pooling)."""
        async with httpx.AsyncClient(timeout=http_timeout(config)) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_provider_registry(
        self, config: Config, http_client: httpx.AsyncClient
    ) -> ProviderRegistry:
        """Provide ProviderRegistry with the configured identity provider."""
        registry = InMemoryProviderRegistry(fallback=config.auth.fallback_provider)
        registry.register(ProviderKey.GENERIC.value, build_identity_provider(config, http_client))
        logger.info(
            "Identity providers registered: %s (strategy=%s, fallback=%s)",
            ", ".join(registry.available_providers()),
            config.auth.strategy,
            config.auth.fallback_provider,
        )
        return registry

    @provide(scope=Scope.APP)
    def get_newsletter(
        self, config: Config, http_client: httpx.AsyncClient
    ) -> NewsletterRegistrar:
        if config.newsletter.url:
            return HttpNewsletterRegistrar(url=config.newsletter.url, http_client=http_client)
        return LoggingNewsletterRegistrar()
