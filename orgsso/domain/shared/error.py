"""Error hierarchy for orgsso.

Error layers:
- SSOError: Base class for all orgsso errors
- DomainError: Business rule violations, malformed client input
- InfrastructureError: Misconfiguration and failures of external services

The auth routes render every error as a 500 with the error message.
"""


class SSOError(Exception):
    """Base class for all orgsso errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(SSOError):
    """Base class for domain/business errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class HintDecodeError(DomainError):
    """Organization invite hint could not be decoded.

    Never surfaced to clients: the hint is treated as absent.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message, code="invalid_org_hint")


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(SSOError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected."""


class ExternalServiceError(InfrastructureError):
    """External service (identity provider, newsletter) is unavailable or failed."""

    def __init__(self, message: str, code: str | None = None, body: str | None = None) -> None:
        super().__init__(message, code=code)
        self.body = body


class TokenExchangeError(ExternalServiceError):
    """Authorization code could not be exchanged for an access token."""


class ProfileFetchError(ExternalServiceError):
    """User profile could not be fetched from the identity provider."""
