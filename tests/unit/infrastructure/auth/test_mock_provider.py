"""Unit tests for MockIdentityProvider."""

import pytest

from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey
from orgsso.infrastructure.auth.mock import (
    MOCK_ACCESS_TOKEN,
    MOCK_CODE,
    MockIdentityProvider,
)


class TestMockIdentityProvider:
    def test_authorization_url_points_at_local_callback(self):
        provider = MockIdentityProvider(callback_url="/auth/generic/callback")

        assert provider.build_authorization_url() == f"/auth/generic/callback?code={MOCK_CODE}"

    def test_provider_name(self):
        assert MockIdentityProvider().provider_name is ProviderKey.GENERIC

    @pytest.mark.asyncio
    async def test_any_code_yields_fixed_token(self):
        provider = MockIdentityProvider()

        assert await provider.exchange_code_for_token("anything") == MOCK_ACCESS_TOKEN

    @pytest.mark.asyncio
    async def test_profile_is_canned_identity(self):
        profile = await MockIdentityProvider().fetch_profile(MOCK_ACCESS_TOKEN)

        assert profile == ProviderIdentity(email="demo@example.com", external_id="mock-user-id")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_falsy_token_returns_none(self, token):
        assert await MockIdentityProvider().fetch_profile(token) is None

    def test_logout_goes_straight_back(self):
        provider = MockIdentityProvider()

        assert provider.build_logout_url("http://localhost:4200") == "http://localhost:4200"
