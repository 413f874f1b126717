"""Auth service orchestrating the login callback and user provisioning."""

import logging
from urllib.parse import unquote

from orgsso.domain.auth.model.session import OrgHint, ProvisioningResult, SessionOutcome
from orgsso.domain.auth.model.user import NewAccount
from orgsso.domain.auth.model.value import ProviderIdentity
from orgsso.domain.auth.port.identity_provider import IdentityProvider
from orgsso.domain.auth.port.newsletter import NewsletterRegistrar
from orgsso.domain.auth.port.provider_registry import ProviderRegistry
from orgsso.domain.auth.port.session_signer import SessionSigner
from orgsso.domain.auth.port.user_store import UserStore
from orgsso.domain.shared.error import HintDecodeError, NotFoundError, ProfileFetchError
from orgsso.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuthService(Service):
    """Orchestrates the OAuth login flow.

    - build_login_redirect_url: Authorization URL of the selected provider
    - resolve_callback: Code -> token -> profile -> existing user or provisioning token
    - provision_user: Create user + organization for a new identity
    - decode_org_hint: Parse the pending-invitation cookie
    - build_logout_url: Provider end-session URL
    """

    _provider_registry: ProviderRegistry
    _user_store: UserStore
    _session_signer: SessionSigner
    _newsletter: NewsletterRegistrar

    def get_provider(self, provider_key: str) -> IdentityProvider:
        """Look up the strategy for a provider name.

        Raises:
            NotFoundError: If no strategy serves the name
        """
        provider = self._provider_registry.get(provider_key)
        if provider is None:
            raise NotFoundError(
                f"Unknown identity provider: {provider_key}",
                code="unknown_provider",
            )
        return provider

    def build_login_redirect_url(self, provider_key: str) -> str:
        return self.get_provider(provider_key).build_authorization_url()

    def build_logout_url(self, provider_key: str, post_logout_redirect: str) -> str:
        return self.get_provider(provider_key).build_logout_url(post_logout_redirect)

    async def resolve_callback(self, provider_key: str, code: str) -> SessionOutcome:
        """Resolve an authorization code to a session or a provisioning token.

        Args:
            provider_key: The provider name from the callback path
            code: Authorization code from the provider

        Returns:
            SessionOutcome with a credential for an existing user, or the
            access token when the identity has no user yet

        Raises:
            TokenExchangeError: If the code cannot be exchanged
            ProfileFetchError: If the profile cannot be fetched
        """
        provider = self.get_provider(provider_key)

        access_token = await provider.exchange_code_for_token(code)
        profile = await provider.fetch_profile(access_token)
        if profile is None:
            raise ProfileFetchError("Invalid user", code="invalid_user")

        user = await self._user_store.find_by_provider_identity(
            provider.provider_name, profile.external_id
        )
        if user is not None:
            logger.info(
                "Existing user authenticated: user_id=%s, provider=%s",
                user.id,
                provider.provider_name,
            )
            return SessionOutcome(credential=self._session_signer.sign(user))

        logger.info(
            "No user for identity, provisioning required: provider=%s, external_id=%s",
            provider.provider_name,
            profile.external_id,
        )
        return SessionOutcome(provisioning_token=access_token)

    async def fetch_profile(self, provider_key: str, access_token: str) -> ProviderIdentity | None:
        return await self.get_provider(provider_key).fetch_profile(access_token)

    async def provision_user(
        self,
        provider_key: str,
        profile: ProviderIdentity,
        client_ip: str,
        client_agent: str,
        org_hint: OrgHint | None = None,
    ) -> ProvisioningResult:
        """Create a user and organization for a new identity.

        Args:
            provider_key: The provider name from the callback path
            profile: Identity returned by the provider
            client_ip: Address of the browser, recorded by the user store
            client_agent: User-Agent of the browser
            org_hint: Pending invitation to join an existing organization

        Returns:
            ProvisioningResult with the session credential and, when the hint
            was applied, the organization link
        """
        provider = self.get_provider(provider_key)

        created = await self._user_store.create_organization_and_user(
            NewAccount(
                company="",
                email=profile.email,
                provider=provider.provider_name,
                provider_id=profile.external_id,
            ),
            client_ip,
            client_agent,
        )
        user = created.owner

        try:
            await self._newsletter.register(profile.email)
        except Exception as e:
            logger.warning("Newsletter registration failed for user_id=%s: %s", user.id, e)

        organization_link = None
        if org_hint is not None:
            organization_link = await self._user_store.add_user_to_organization(
                user.id,
                org_hint.invitation_id,
                org_hint.organization_id,
                org_hint.role,
            )

        logger.info(
            "New user provisioned: user_id=%s, organization_id=%s, invited_to=%s",
            user.id,
            created.organization_id,
            organization_link.organization_id if organization_link else None,
        )

        return ProvisioningResult(
            credential=self._session_signer.sign(user),
            user=user,
            organization_link=organization_link,
        )

    @staticmethod
    def decode_org_hint(raw: str | None) -> OrgHint | None:
        """Decode the organization hint cookie.

        Browsers store the JSON percent-encoded; plain JSON is accepted too.
        Returns None for an empty or malformed payload; never raises.
        """
        if not raw:
            return None
        try:
            return OrgHint.parse(unquote(raw))
        except HintDecodeError as e:
            logger.debug("Ignoring organization hint: %s", e.message)
            return None
