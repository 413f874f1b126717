"""Auth domain services."""

from .auth import AuthService
from .token import TokenService

__all__ = ["AuthService", "TokenService"]
