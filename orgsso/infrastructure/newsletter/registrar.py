"""Newsletter registration adapters."""

import logging

import httpx

from orgsso.domain.auth.port.newsletter import NewsletterRegistrar
from orgsso.domain.shared.error import ExternalServiceError

logger = logging.getLogger(__name__)


class LoggingNewsletterRegistrar(NewsletterRegistrar):
    """Used when no newsletter endpoint is configured."""

    async def register(self, email: str) -> None:
        logger.info("Newsletter endpoint not configured, skipping registration for %s", email)


class HttpNewsletterRegistrar(NewsletterRegistrar):
    """Posts new addresses to a newsletter service as {"email": ...}."""

    def __init__(self, url: str, http_client: httpx.AsyncClient) -> None:
        self._url = url
        self._http = http_client

    async def register(self, email: str) -> None:
        try:
            response = await self._http.post(self._url, json={"email": email})
        except httpx.RequestError as e:
            raise ExternalServiceError(
                "Failed to connect to newsletter service",
                code="newsletter_unavailable",
            ) from e

        if not response.is_success:
            raise ExternalServiceError(
                f"Newsletter registration failed: {response.status_code}",
                code="newsletter_failed",
                body=response.text,
            )
