"""Value objects for the auth domain."""

from dataclasses import dataclass
from enum import StrEnum
from uuid import UUID, uuid4

from pydantic import RootModel


class UserId(RootModel[UUID]):
    """Unique identifier for a User."""

    @classmethod
    def generate(cls) -> "UserId":
        return cls(uuid4())

    def __str__(self) -> str:
        return str(self.root)

    def __hash__(self) -> int:
        return hash(self.root)


class ProviderKey(StrEnum):
    """Logical identity provider names.

    Only GENERIC has a shipped strategy; the others name providers that can
    be registered through configuration.
    """

    GENERIC = "generic"
    GITHUB = "github"
    GOOGLE = "google"


class Role(StrEnum):
    """Role of a user inside an organization."""

    USER = "USER"
    ADMIN = "ADMIN"


@dataclass(frozen=True)
class ProviderIdentity:
    """Normalized identity returned by a successful profile fetch.

    Encapsulates email + external_id together since they're always used as a pair.
    """

    email: str
    external_id: str  # Provider-specific subject ("sub" claim)

    def __post_init__(self) -> None:
        if not self.email or not self.external_id:
            raise ValueError("ProviderIdentity requires both email and external_id")
