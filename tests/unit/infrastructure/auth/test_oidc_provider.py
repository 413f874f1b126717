"""Unit tests for OidcIdentityProvider."""

from urllib.parse import parse_qs, urlsplit

import httpx
import pytest

from orgsso.config import OidcConfig
from orgsso.domain.auth.model.value import ProviderIdentity, ProviderKey
from orgsso.domain.shared.error import (
    ConfigurationError,
    ProfileFetchError,
    TokenExchangeError,
)
from orgsso.infrastructure.auth.oidc import OidcIdentityProvider

REALM_URL = "https://sso.example.com/realms/acme/protocol/openid-connect"


def make_config(**overrides: str) -> OidcConfig:
    values = {
        "base_url": "https://sso.example.com",
        "realm": "acme",
        "client_id": "orgsso-client",
        "client_secret": "s3cret",
        "redirect_uri": "https://api.example.com/auth/generic/callback",
    }
    values.update(overrides)
    return OidcConfig(**values)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def make_provider(handler, **overrides: str) -> tuple[OidcIdentityProvider, RecordingTransport]:
    transport = RecordingTransport(handler)
    client = httpx.AsyncClient(transport=transport)
    return OidcIdentityProvider(config=make_config(**overrides), http_client=client), transport


def never_called(request: httpx.Request) -> httpx.Response:
    raise AssertionError(f"Unexpected request: {request.method} {request.url}")


class TestConstruction:
    @pytest.mark.parametrize(
        "missing", ["base_url", "realm", "client_id", "client_secret", "redirect_uri"]
    )
    def test_missing_setting_fails_before_any_request(self, missing: str):
        transport = RecordingTransport(never_called)
        client = httpx.AsyncClient(transport=transport)

        with pytest.raises(ConfigurationError) as exc_info:
            OidcIdentityProvider(config=make_config(**{missing: ""}), http_client=client)

        assert missing in exc_info.value.message
        assert transport.requests == []

    def test_reports_every_missing_setting(self):
        with pytest.raises(ConfigurationError) as exc_info:
            OidcIdentityProvider(config=OidcConfig(), http_client=httpx.AsyncClient())

        for name in ("base_url", "realm", "client_id", "client_secret", "redirect_uri"):
            assert name in exc_info.value.message

    def test_provider_name_is_generic(self):
        provider, _ = make_provider(never_called)

        assert provider.provider_name is ProviderKey.GENERIC


class TestBuildAuthorizationUrl:
    def test_embeds_client_redirect_scope_and_code_response(self):
        provider, transport = make_provider(never_called)

        url = provider.build_authorization_url()

        parts = urlsplit(url)
        assert f"{parts.scheme}://{parts.netloc}{parts.path}" == f"{REALM_URL}/auth"
        params = parse_qs(parts.query)
        assert params == {
            "client_id": ["orgsso-client"],
            "redirect_uri": ["https://api.example.com/auth/generic/callback"],
            "response_type": ["code"],
            "scope": ["openid profile email"],
        }
        assert transport.requests == []

    def test_is_deterministic(self):
        provider, _ = make_provider(never_called)

        assert provider.build_authorization_url() == provider.build_authorization_url()

    def test_trailing_slash_in_base_url(self):
        provider, _ = make_provider(never_called, base_url="https://sso.example.com/")

        assert provider.build_authorization_url().startswith(f"{REALM_URL}/auth?")


class TestExchangeCodeForToken:
    @pytest.mark.asyncio
    async def test_posts_authorization_code_grant(self):
        provider, transport = make_provider(
            lambda request: httpx.Response(200, json={"access_token": "at-1", "token_type": "Bearer"})
        )

        token = await provider.exchange_code_for_token("code-1")

        assert token == "at-1"
        (request,) = transport.requests
        assert request.method == "POST"
        assert str(request.url) == f"{REALM_URL}/token"
        form = parse_qs(request.content.decode())
        assert form == {
            "grant_type": ["authorization_code"],
            "client_id": ["orgsso-client"],
            "client_secret": ["s3cret"],
            "code": ["code-1"],
            "redirect_uri": ["https://api.example.com/auth/generic/callback"],
        }

    @pytest.mark.asyncio
    async def test_error_response_carries_raw_body(self):
        body = '{"error":"invalid_grant","error_description":"Code not valid"}'
        provider, _ = make_provider(lambda request: httpx.Response(400, text=body))

        with pytest.raises(TokenExchangeError) as exc_info:
            await provider.exchange_code_for_token("stale-code")

        assert exc_info.value.body == body
        assert "invalid_grant" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_missing_access_token(self):
        provider, _ = make_provider(lambda request: httpx.Response(200, json={"token_type": "Bearer"}))

        with pytest.raises(TokenExchangeError):
            await provider.exchange_code_for_token("code-1")

    @pytest.mark.asyncio
    async def test_timeout_is_token_exchange_error(self):
        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider, _ = make_provider(timeout)

        with pytest.raises(TokenExchangeError) as exc_info:
            await provider.exchange_code_for_token("code-1")

        assert exc_info.value.code == "idp_timeout"

    @pytest.mark.asyncio
    async def test_connection_error_is_token_exchange_error(self):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        provider, _ = make_provider(refuse)

        with pytest.raises(TokenExchangeError) as exc_info:
            await provider.exchange_code_for_token("code-1")

        assert exc_info.value.code == "idp_unavailable"


class TestFetchProfile:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("token", ["", None])
    async def test_falsy_token_returns_none_without_request(self, token):
        provider, transport = make_provider(never_called)

        assert await provider.fetch_profile(token) is None
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_returns_email_and_subject(self):
        provider, transport = make_provider(
            lambda request: httpx.Response(
                200,
                json={"sub": "kc-sub-123", "email": "jane@example.com", "email_verified": True},
            )
        )

        profile = await provider.fetch_profile("at-1")

        assert profile == ProviderIdentity(email="jane@example.com", external_id="kc-sub-123")
        (request,) = transport.requests
        assert request.method == "GET"
        assert str(request.url) == f"{REALM_URL}/userinfo"
        assert request.headers["Authorization"] == "Bearer at-1"

    @pytest.mark.asyncio
    async def test_error_response_raises(self):
        provider, _ = make_provider(lambda request: httpx.Response(401, text="invalid token"))

        with pytest.raises(ProfileFetchError) as exc_info:
            await provider.fetch_profile("expired")

        assert exc_info.value.body == "invalid token"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [{"sub": "kc-sub-123"}, {"email": "jane@example.com"}, {}, {"sub": "", "email": ""}],
    )
    async def test_missing_identity_fields_raise(self, body):
        provider, _ = make_provider(lambda request: httpx.Response(200, json=body))

        with pytest.raises(ProfileFetchError) as exc_info:
            await provider.fetch_profile("at-1")

        assert exc_info.value.code == "invalid_user"

    @pytest.mark.asyncio
    async def test_timeout_is_profile_fetch_error(self):
        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        provider, _ = make_provider(timeout)

        with pytest.raises(ProfileFetchError):
            await provider.fetch_profile("at-1")


class TestBuildLogoutUrl:
    def test_encodes_redirect_uri(self):
        provider, _ = make_provider(never_called)

        url = provider.build_logout_url("https://app.example.com/")

        assert url == (
            f"{REALM_URL}/logout?redirect_uri=https%3A%2F%2Fapp.example.com%2F"
        )
