from dishka import AsyncContainer, make_async_container

from orgsso.config import Config
from orgsso.domain.auth.util.di import AuthProvider
from orgsso.infrastructure.auth.di import AuthInfraProvider
from orgsso.infrastructure.persistence.di import PersistenceProvider
from orgsso.util.di.base import ConfigProvider
from orgsso.util.di.scope import Scope


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        AuthInfraProvider(),
        AuthProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
