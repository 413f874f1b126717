"""Auth domain ports."""

from .identity_provider import IdentityProvider
from .newsletter import NewsletterRegistrar
from .provider_registry import ProviderRegistry
from .session_signer import SessionSigner
from .user_store import UserStore

__all__ = [
    "IdentityProvider",
    "NewsletterRegistrar",
    "ProviderRegistry",
    "SessionSigner",
    "UserStore",
]
