import logging
from contextlib import asynccontextmanager

import logfire
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from orgsso.application.api.v1.routes import auth, health
from orgsso.application.di import create_container
from orgsso.config import Config, configure_logging
from orgsso.domain.auth.port.provider_registry import ProviderRegistry
from orgsso.infrastructure.persistence.database import create_tables
from orgsso.util.di.fastapi import setup_dishka

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = app.state.dishka_container
    config = await container.get(Config)

    if config.database.create_tables:
        engine = await container.get(AsyncEngine)
        await create_tables(engine)

    # Constructs the identity provider now: a misconfigured live strategy
    # fails startup instead of the first login.
    registry = await container.get(ProviderRegistry)
    logger.info("Identity providers ready: %s", ", ".join(registry.available_providers()))

    yield

    await container.close()


def create_app(config: Config | None = None) -> FastAPI:
    """Create FastAPI application."""
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()  # type: ignore[call-arg]

    configure_logging(config.logging)
    logger.info("Starting %s v%s", config.server.name, config.server.version)

    app_instance = FastAPI(
        title=config.server.name,
        description=config.server.description,
        version=config.server.version,
        lifespan=lifespan,
    )

    # Instrument FastAPI and outbound httpx calls for tracing
    logfire.instrument_httpx()
    logfire.instrument_fastapi(app_instance)

    container = create_container(config)
    setup_dishka(container, app_instance)

    app_instance.include_router(health.router)
    app_instance.include_router(auth.router)

    # Global exception handler - logs all unhandled exceptions
    @app_instance.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled exception on %s %s",
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
        )

    return app_instance
