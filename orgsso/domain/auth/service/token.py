"""Token service for session credential creation and validation."""

import logging
import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from orgsso.config import JwtConfig
from orgsso.domain.auth.model.user import User
from orgsso.domain.shared.service import Service

logger = logging.getLogger(__name__)

SESSION_AUDIENCE = "session"


class TokenService(Service):
    """Issues session credentials as JWTs signed with the configured secret.

    Satisfies the SessionSigner port.
    """

    _config: JwtConfig

    def sign(self, user: User) -> str:
        """Create a signed session credential for a user.

        Args:
            user: The user the session belongs to

        Returns:
            Encoded JWT string
        """
        now = datetime.now(UTC)
        expires_at = now + timedelta(days=self._config.expire_days)

        payload = {
            "sub": str(user.id),
            "email": user.email,
            "provider": str(user.provider),
            "provider_id": user.provider_id,
            "aud": SESSION_AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }

        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def validate(self, credential: str) -> dict[str, Any]:
        """Validate and decode a session credential.

        Raises:
            jwt.InvalidTokenError: If the credential is invalid or expired
        """
        return jwt.decode(
            credential,
            self._config.secret,
            algorithms=[self._config.algorithm],
            audience=SESSION_AUDIENCE,
        )
