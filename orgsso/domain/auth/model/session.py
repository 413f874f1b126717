"""Per-request values produced by the callback flow. Never persisted."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from orgsso.domain.auth.model.user import OrganizationLink, User
from orgsso.domain.auth.model.value import Role
from orgsso.domain.shared.error import HintDecodeError


@dataclass(frozen=True)
class SessionOutcome:
    """Outcome of resolving an authorization code.

    Exactly one field is set:
    - credential: the identity belongs to an existing user, session is ready
    - provisioning_token: the provider access token, kept for creating the user
    """

    credential: str | None = None
    provisioning_token: str | None = None

    def __post_init__(self) -> None:
        if (self.credential is None) == (self.provisioning_token is None):
            raise ValueError("SessionOutcome needs exactly one of credential, provisioning_token")

    @property
    def is_new_user(self) -> bool:
        return self.provisioning_token is not None


class OrgHint(BaseModel):
    """Pending organization invitation carried across the OAuth redirect.

    Serialized as JSON with camelCase keys:
        {"organizationId": "o1", "role": "USER", "invitationId": "i1"}
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    organization_id: str = Field(alias="organizationId", min_length=1)
    role: Role
    invitation_id: str = Field(alias="invitationId", min_length=1)

    @classmethod
    def parse(cls, raw: str) -> "OrgHint":
        """Parse a serialized hint.

        Raises:
            HintDecodeError: If the payload is not a valid hint object
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise HintDecodeError(f"Malformed organization hint: {e.error_count()} error(s)") from e


@dataclass(frozen=True)
class ProvisioningResult:
    """Result of creating a user (and organization) for a new identity."""

    credential: str
    user: User
    organization_link: OrganizationLink | None = None
