"""Unit tests for auth command handlers."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from orgsso.domain.auth.command.login import (
    CompleteCallback,
    CompleteCallbackHandler,
    InitiateLogin,
    InitiateLoginHandler,
)
from orgsso.domain.auth.command.logout import Logout, LogoutHandler
from orgsso.domain.auth.model.session import OrgHint, ProvisioningResult, SessionOutcome
from orgsso.domain.auth.model.user import OrganizationLink, User
from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey, Role
from orgsso.domain.auth.service.auth import AuthService
from orgsso.domain.shared.error import NotFoundError, ProfileFetchError
from orgsso.domain.shared.uow import UnitOfWork

PROFILE = ProviderIdentity(email="jane@example.com", external_id="kc-sub-123")


class RecordingUnitOfWork(UnitOfWork):
    def __init__(self) -> None:
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def make_auth_service(outcome: SessionOutcome) -> MagicMock:
    """Create a mock AuthService; decode_org_hint keeps its real behavior."""
    service = MagicMock()
    service.resolve_callback = AsyncMock(return_value=outcome)
    service.fetch_profile = AsyncMock(return_value=PROFILE)
    service.decode_org_hint = AuthService.decode_org_hint
    service.provision_user = AsyncMock(
        return_value=ProvisioningResult(
            credential="new-user-jwt",
            user=User.create(
                email=PROFILE.email, provider=ProviderKey.GENERIC, provider_id="kc-sub-123"
            ),
        )
    )
    return service


def make_command(org_cookie: str | None = None) -> CompleteCallback:
    return CompleteCallback(
        provider="generic",
        code="auth-code",
        client_ip="10.0.0.1",
        client_agent="Mozilla/5.0",
        org_cookie=org_cookie,
    )


class TestInitiateLoginHandler:
    @pytest.mark.asyncio
    async def test_run_returns_authorization_url(self):
        service = MagicMock()
        service.build_login_redirect_url.return_value = "https://sso.example.com/auth?x=1"
        handler = InitiateLoginHandler(auth_service=service)

        result = await handler.run(InitiateLogin(provider="generic"))

        assert result.authorization_url == "https://sso.example.com/auth?x=1"
        service.build_login_redirect_url.assert_called_once_with("generic")


class TestCompleteCallbackHandler:
    """Tests for CompleteCallbackHandler."""

    @pytest.mark.asyncio
    async def test_existing_user_skips_provisioning(self):
        service = make_auth_service(SessionOutcome(credential="existing-jwt"))
        handler = CompleteCallbackHandler(auth_service=service, uow=RecordingUnitOfWork())

        result = await handler.run(make_command())

        assert result.credential == "existing-jwt"
        assert result.onboarding is False
        assert result.show_organization_id is None
        service.fetch_profile.assert_not_called()
        service.provision_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_user_is_provisioned(self):
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        handler = CompleteCallbackHandler(auth_service=service, uow=RecordingUnitOfWork())

        result = await handler.run(make_command())

        assert result.credential == "new-user-jwt"
        assert result.onboarding is True
        assert result.show_organization_id is None
        service.fetch_profile.assert_awaited_once_with("generic", "access-token")
        service.provision_user.assert_awaited_once_with(
            "generic", PROFILE, "10.0.0.1", "Mozilla/5.0", None
        )

    @pytest.mark.asyncio
    async def test_org_cookie_is_decoded_and_passed(self):
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        service.provision_user.return_value = ProvisioningResult(
            credential="new-user-jwt",
            user=User.create(
                email=PROFILE.email, provider=ProviderKey.GENERIC, provider_id="kc-sub-123"
            ),
            organization_link=OrganizationLink(organization_id="o1"),
        )
        handler = CompleteCallbackHandler(auth_service=service, uow=RecordingUnitOfWork())

        result = await handler.run(
            make_command('{"organizationId":"o1","role":"USER","invitationId":"i1"}')
        )

        hint = service.provision_user.await_args.args[4]
        assert hint == OrgHint(organization_id="o1", role=Role.USER, invitation_id="i1")
        assert result.show_organization_id == "o1"

    @pytest.mark.asyncio
    async def test_malformed_org_cookie_is_ignored(self):
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        handler = CompleteCallbackHandler(auth_service=service, uow=RecordingUnitOfWork())

        result = await handler.run(make_command("%7Bbroken"))

        assert result.onboarding is True
        assert service.provision_user.await_args.args[4] is None

    @pytest.mark.asyncio
    async def test_absent_second_profile_fails(self):
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        service.fetch_profile.return_value = None
        handler = CompleteCallbackHandler(auth_service=service, uow=RecordingUnitOfWork())

        with pytest.raises(ProfileFetchError):
            await handler.run(make_command())

        service.provision_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_successful_provisioning_commits(self):
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        uow = RecordingUnitOfWork()
        handler = CompleteCallbackHandler(auth_service=service, uow=uow)

        await handler.run(make_command())

        assert (uow.commits, uow.rollbacks) == (1, 0)

    @pytest.mark.asyncio
    async def test_failed_provisioning_rolls_back(self):
        """A failure after rows were written leaves none of them behind."""
        service = make_auth_service(SessionOutcome(provisioning_token="access-token"))
        service.provision_user.side_effect = NotFoundError(
            "Organization not found: o1", code="organization_not_found"
        )
        uow = RecordingUnitOfWork()
        handler = CompleteCallbackHandler(auth_service=service, uow=uow)

        with pytest.raises(NotFoundError):
            await handler.run(
                make_command('{"organizationId":"o1","role":"USER","invitationId":"i1"}')
            )

        assert (uow.commits, uow.rollbacks) == (0, 1)

    @pytest.mark.asyncio
    async def test_existing_user_does_not_touch_unit_of_work(self):
        service = make_auth_service(SessionOutcome(credential="existing-jwt"))
        uow = RecordingUnitOfWork()
        handler = CompleteCallbackHandler(auth_service=service, uow=uow)

        await handler.run(make_command())

        assert (uow.commits, uow.rollbacks) == (0, 0)


class TestLogoutHandler:
    @pytest.mark.asyncio
    async def test_run_returns_logout_url(self):
        service = MagicMock()
        service.build_logout_url.return_value = "https://sso.example.com/logout?redirect_uri=x"
        handler = LogoutHandler(auth_service=service)

        result = await handler.run(
            Logout(provider="generic", post_logout_redirect="https://app.example.com")
        )

        assert result.logout_url == "https://sso.example.com/logout?redirect_uri=x"
        service.build_logout_url.assert_called_once_with("generic", "https://app.example.com")
