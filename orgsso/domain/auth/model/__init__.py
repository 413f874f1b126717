"""Auth domain models."""

from .session import OrgHint, ProvisioningResult, SessionOutcome
from .user import CreatedOrganization, NewAccount, OrganizationLink, User
from .value import ProviderIdentity, ProviderKey, Role, UserId

__all__ = [
    "CreatedOrganization",
    "NewAccount",
    "OrgHint",
    "OrganizationLink",
    "ProviderIdentity",
    "ProviderKey",
    "ProvisioningResult",
    "Role",
    "SessionOutcome",
    "User",
    "UserId",
]
