"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures exception handlers and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import psycopg
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import MigrationRunner
from src.api.dependencies import get_pool
from src.api.errors import ErrorResponder, register_error_handlers
from src.api.routes import router
from src.config.logging import configure_logging
from src.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "auth",
        "description": "Account signup - create an account and its athlete, coach or academy profile",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Creates database connection pool on startup (when configured)
    - Runs migrations on startup, retrying on later requests if the
      database was unreachable
    - Closes connection pool on shutdown

    An unreachable database does not prevent startup: requests are
    answered with 503 until it comes back, and the first request after
    that applies the pending migrations.
    """
    settings: Settings = app.state.settings
    configure_logging(settings)

    logger.info("Starting application (environment=%s)...", settings.environment.value)

    if settings.database_url is None:
        logger.warning("DATABASE_URL is not set; signup requests will be rejected")
        yield
        return

    logger.info("Connecting to database...")
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
        kwargs={"connect_timeout": settings.connect_timeout},
        open=False,
    )
    pool.open(wait=False)

    if settings.run_migrations:
        logger.info("Running database migrations...")
        migrator = MigrationRunner(pool)
        try:
            migrator.ensure()
        except psycopg.OperationalError as e:
            logger.error("Database unreachable, migrations deferred to first request: %s", e)
        app.state.migrator = migrator

    # Store pool in app state for dependency injection
    app.state.pool = pool

    logger.info("Application startup complete")

    try:
        yield
    finally:
        logger.info("Shutting down application...")
        app.state.pool = None
        app.state.migrator = None
        pool.close()
        logger.info("Database connection pool closed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings (tests); defaults to environment settings

    Returns:
        Configured FastAPI instance
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="signup-service",
        description="Account Signup API - creates accounts with athlete, coach or academy profiles",
        version="0.1.0",
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    application.state.settings = settings
    application.state.error_responder = ErrorResponder(environment=settings.environment)
    application.state.pool = None
    application.state.migrator = None

    register_error_handlers(application)
    application.include_router(router, prefix="/api")

    @application.get("/health", response_model=None)
    def health_check(request: Request) -> dict[str, str] | JSONResponse:
        """
        Health check endpoint with database validation.

        Returns 200 OK if application and database are healthy, otherwise
        the classified error response (500 misconfigured, 503 unreachable).
        """
        try:
            pool = get_pool(request)
            with pool.connection() as conn:
                conn.execute("SELECT 1")
        except Exception as e:
            return request.app.state.error_responder.respond(e, context="HEALTH")

        return {"status": "healthy"}

    return application


app = create_app()
