"""User store port for the auth domain."""

from abc import abstractmethod
from typing import Protocol

from orgsso.domain.auth.model.user import (
    CreatedOrganization,
    NewAccount,
    OrganizationLink,
    User,
)
from orgsso.domain.auth.model.value import ProviderKey, Role, UserId
from orgsso.domain.shared.port import Port


class UserStore(Port, Protocol):
    """Persistence for users, organizations and memberships.

    Implementations are expected to de-duplicate on (provider, provider_id).
    """

    @abstractmethod
    async def find_by_provider_identity(
        self, provider: ProviderKey, external_id: str
    ) -> User | None:
        """Get the user linked to an external identity."""
        ...

    @abstractmethod
    async def create_organization_and_user(
        self, account: NewAccount, ip: str, user_agent: str
    ) -> CreatedOrganization:
        """Create an organization together with its first (admin) user."""
        ...

    @abstractmethod
    async def add_user_to_organization(
        self,
        user_id: UserId,
        invitation_id: str,
        organization_id: str,
        role: Role,
    ) -> OrganizationLink:
        """Add a user to an existing organization through an invitation."""
        ...
