"""User and organization records owned by the user store."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field

from orgsso.domain.auth.model.value import ProviderKey, UserId


class User(BaseModel):
    """A user account, linked to exactly one external identity.

    Invariants:
    - (provider, provider_id) is unique across users
    - `id` and `created_at` are immutable after creation
    """

    id: UserId
    email: str
    provider: ProviderKey
    provider_id: str
    created_at: datetime

    @classmethod
    def create(cls, email: str, provider: ProviderKey, provider_id: str) -> "User":
        """Create a new user."""
        return cls(
            id=UserId.generate(),
            email=email,
            provider=provider,
            provider_id=provider_id,
            created_at=datetime.now(UTC),
        )


class NewAccount(BaseModel):
    """Fields for creating an organization together with its first user."""

    company: str = ""
    email: str
    provider: ProviderKey
    provider_id: str


class CreatedOrganization(BaseModel):
    """Result of creating an organization and its first user."""

    organization_id: str
    users: list[User] = Field(min_length=1)

    @property
    def owner(self) -> User:
        """The user created together with the organization."""
        return self.users[0]


class OrganizationLink(BaseModel):
    """Result of adding a user to an existing organization."""

    organization_id: str
