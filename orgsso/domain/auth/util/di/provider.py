"""DI provider for auth domain."""

from dishka import from_context, provide
from starlette.requests import Request

from orgsso.config import Config
from orgsso.domain.auth.command.login import CompleteCallbackHandler, InitiateLoginHandler
from orgsso.domain.auth.command.logout import LogoutHandler
from orgsso.domain.auth.port.newsletter import NewsletterRegistrar
from orgsso.domain.auth.port.provider_registry import ProviderRegistry
from orgsso.domain.auth.port.user_store import UserStore
from orgsso.domain.auth.service.auth import AuthService
from orgsso.domain.auth.service.token import TokenService
from orgsso.util.di.base import Provider
from orgsso.util.di.scope import Scope


class AuthProvider(Provider):
    """DI provider for auth domain services and handlers."""

    request = from_context(provides=Request, scope=Scope.UOW)

    # Command Handlers
    initiate_login_handler = provide(InitiateLoginHandler, scope=Scope.UOW)
    complete_callback_handler = provide(CompleteCallbackHandler, scope=Scope.UOW)
    logout_handler = provide(LogoutHandler, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        """Provide TokenService."""
        return TokenService(_config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    def get_auth_service(
        self,
        provider_registry: ProviderRegistry,
        user_store: UserStore,
        token_service: TokenService,
        newsletter: NewsletterRegistrar,
    ) -> AuthService:
        """Provide AuthService."""
        return AuthService(
            _provider_registry=provider_registry,
            _user_store=user_store,
            _session_signer=token_service,
            _newsletter=newsletter,
        )
