"""Session signer port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from orgsso.domain.auth.model.user import User
from orgsso.domain.shared.port import Port


class SessionSigner(Port, Protocol):
    """Issues the signed session credential stored in the `auth` cookie."""

    @abstractmethod
    def sign(self, user: User) -> str:
        """Create an opaque signed credential for a user."""
        ...
