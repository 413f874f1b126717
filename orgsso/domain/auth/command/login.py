"""Login commands for the OAuth authentication flow."""

from dataclasses import dataclass

from orgsso.domain.auth.service.auth import AuthService
from orgsso.domain.shared.command import Command, CommandHandler, Result
from orgsso.domain.shared.error import ProfileFetchError
from orgsso.domain.shared.uow import UnitOfWork


class InitiateLogin(Command):
    """Command to start the OAuth login flow."""

    provider: str


class InitiateLoginResult(Result):
    """Result containing authorization URL."""

    authorization_url: str


@dataclass
class InitiateLoginHandler(CommandHandler[InitiateLogin, InitiateLoginResult]):
    """Handler for InitiateLogin command."""

    auth_service: AuthService

    async def run(self, cmd: InitiateLogin) -> InitiateLoginResult:
        """Build the authorization URL of the selected provider."""
        authorization_url = self.auth_service.build_login_redirect_url(cmd.provider)
        return InitiateLoginResult(authorization_url=authorization_url)


class CompleteCallback(Command):
    """Command to complete the OAuth flow with an authorization code."""

    provider: str
    code: str
    client_ip: str
    client_agent: str
    org_cookie: str | None = None  # Serialized OrgHint from the `org` cookie


class CompleteCallbackResult(Result):
    """Result containing the session credential."""

    credential: str
    onboarding: bool  # True when a new user was provisioned
    show_organization_id: str | None = None  # Organization the new user joined


@dataclass
class CompleteCallbackHandler(CommandHandler[CompleteCallback, CompleteCallbackResult]):
    """Handler for CompleteCallback command.

    Provisioning runs inside the unit of work: if any write fails, the
    organization, user and membership rows of this callback are rolled back.
    """

    auth_service: AuthService
    uow: UnitOfWork

    async def run(self, cmd: CompleteCallback) -> CompleteCallbackResult:
        """Log in the existing user, or provision a new one."""
        outcome = await self.auth_service.resolve_callback(cmd.provider, cmd.code)

        if not outcome.is_new_user:
            return CompleteCallbackResult(credential=outcome.credential, onboarding=False)

        org_hint = self.auth_service.decode_org_hint(cmd.org_cookie)

        profile = await self.auth_service.fetch_profile(cmd.provider, outcome.provisioning_token)
        if profile is None:
            raise ProfileFetchError("Invalid user", code="invalid_user")

        async with self.uow:
            provisioned = await self.auth_service.provision_user(
                cmd.provider,
                profile,
                cmd.client_ip,
                cmd.client_agent,
                org_hint,
            )

        link = provisioned.organization_link
        return CompleteCallbackResult(
            credential=provisioned.credential,
            onboarding=True,
            show_organization_id=link.organization_id if link else None,
        )
