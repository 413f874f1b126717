"""Newsletter registration port."""

from abc import abstractmethod
from typing import Protocol

from orgsso.domain.shared.port import Port


class NewsletterRegistrar(Port, Protocol):
    """Subscribes newly provisioned users to the product newsletter."""

    @abstractmethod
    async def register(self, email: str) -> None:
        """Register an email address. Callers treat failures as non-fatal."""
        ...
