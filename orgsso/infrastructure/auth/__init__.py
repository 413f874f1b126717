"""Auth infrastructure - identity provider adapters and DI provider.

Import modules directly:
    from orgsso.infrastructure.auth.di import AuthInfraProvider
    from orgsso.infrastructure.auth.oidc import OidcIdentityProvider
"""

__all__: list[str] = []
