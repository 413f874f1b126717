"""Base class for orgsso DI providers."""

from dishka import Provider as DishkaProvider
from dishka import from_context

from orgsso.config import Config
from orgsso.util.di.scope import Scope


class Provider(DishkaProvider):
    """Base for all orgsso DI providers."""


class ConfigProvider(Provider):
    """Exposes the Config passed as container context."""

    config = from_context(provides=Config, scope=Scope.APP)
