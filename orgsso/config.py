import logging
import os
import sys
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource


class YamlConfigSettingsSource(PydanticBaseSettingsSource):
    """Load settings from YAML file specified by ORGSSO_CONFIG_FILE env var."""

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Get the value for a field from the YAML config."""
        yaml_data = self._load_yaml_config()
        field_value = yaml_data.get(field_name)
        return field_value, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return all settings from YAML file."""
        return self._load_yaml_config()

    def _load_yaml_config(self) -> dict[str, Any]:
        config_file = os.environ.get("ORGSSO_CONFIG_FILE")
        if config_file:
            path = Path(config_file)
            if path.exists():
                return yaml.safe_load(path.read_text()) or {}
        return {}


class Frontend(BaseModel):
    """Frontend configuration (nested in Config, uses env_nested_delimiter)."""

    url: str = "http://localhost:4200"
    # Local development: plain cookies, credentials echoed as response headers
    not_secured: bool = False


class Server(BaseModel):
    """Server configuration (nested in Config, uses env_nested_delimiter)."""

    name: str = "orgsso"
    version: str = "0.1.0"
    description: str = "Login with an OIDC identity provider and provision organizations"


class DatabaseConfig(BaseModel):
    """Database configuration (nested in Config, uses env_nested_delimiter)."""

    url: str = "sqlite+aiosqlite:///~/.orgsso/orgsso.db"
    echo: bool = False
    create_tables: bool = True  # Create missing tables on startup


class LoggingConfig(BaseModel):
    """Logging configuration (nested in Config, uses env_nested_delimiter)."""

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    @property
    def file(self) -> str | None:
        """Get log file path from ORGSSO_LOG_FILE env var."""
        return os.environ.get("ORGSSO_LOG_FILE")


# =============================================================================
# Authentication Configuration
# =============================================================================


class OidcConfig(BaseModel):
    """OIDC realm configuration (Keycloak-style URL layout).

    All fields except `scope` are required by the live provider; empty
    strings are reported as missing when the provider is constructed.
    """

    base_url: str = ""  # e.g. https://sso.example.com
    realm: str = ""
    client_id: str = ""
    client_secret: str = ""
    redirect_uri: str = ""  # Must match the client's registered redirect URI
    scope: str = "openid profile email"

    @property
    def realm_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/realms/{self.realm}/protocol/openid-connect"


class JwtConfig(BaseModel):
    """Session credential signing configuration."""

    secret: str = ""  # Must be set in production
    algorithm: str = "HS256"
    expire_days: int = 365


class AuthConfig(BaseModel):
    """Authentication configuration."""

    strategy: Literal["live", "mock"] = "live"
    # Provider served for names without their own registration. Keeps the
    # single-provider deployment working for any /auth/<name>/ path; set to
    # null to make unknown names fail.
    fallback_provider: str | None = "generic"
    http_timeout: float = 10.0  # Seconds, applied to token and userinfo calls
    oidc: OidcConfig = OidcConfig()
    jwt: JwtConfig = JwtConfig()


class NewsletterConfig(BaseModel):
    """Newsletter registration endpoint. Registrations are only logged when unset."""

    url: str | None = None


class Config(BaseSettings):
    server: Server = Server()
    frontend: Frontend = Frontend()
    database: DatabaseConfig = DatabaseConfig()
    logging: LoggingConfig = LoggingConfig()
    auth: AuthConfig = AuthConfig()
    newsletter: NewsletterConfig = NewsletterConfig()

    model_config = {
        "env_prefix": "ORGSSO_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",  # Allows ORGSSO_AUTH__OIDC__REALM override
    }

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML config.

        Priority (highest to lowest):
        1. init_settings - values passed to Config()
        2. env_settings - environment variables
        3. dotenv_settings - .env file
        4. yaml_settings - ORGSSO_CONFIG_FILE yaml
        5. file_secret_settings - secrets from files
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def configure_logging(config: LoggingConfig) -> None:
    """Configure Python logging based on config.

    Should be called early in application startup so all loggers pick up
    the configuration.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(config.format, datefmt=config.date_format)

    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_path)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(config.level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    logging.debug("Logging configured: level=%s, file=%s", config.level, config.file)
