"""
Main FastAPI application entry point.
Configures the application, error handlers and routes.

Run with ``uvicorn accounts.main:create_app --factory`` or ``python -m accounts``.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from accounts.api.error_handlers import register_error_handlers
from accounts.api.routes import auth, health, users
from accounts.core.config import Settings, load_settings
from accounts.core.logging import get_logger, setup_logging
from accounts.db.session import build_engine, create_tables

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler.
    Runs startup and shutdown logic.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")

    logger.info("Creating database tables...")
    create_tables(app.state.engine)

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    app.state.engine.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; loaded from the environment when omitted

    Raises:
        pydantic.ValidationError: If required configuration is missing or
            malformed, before anything is served
    """
    if settings is None:
        settings = load_settings()

    setup_logging(settings)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url=f"{settings.API_V1_PREFIX}/docs",
        redoc_url=f"{settings.API_V1_PREFIX}/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = build_engine(settings)

    register_error_handlers(app)

    app.include_router(health.router, prefix=settings.API_V1_PREFIX)
    app.include_router(auth.router, prefix=settings.API_V1_PREFIX)
    app.include_router(users.router, prefix=settings.API_V1_PREFIX)

    return app
