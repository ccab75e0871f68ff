"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from collections.abc import Callable

from fastapi import Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import MigrationRunner, PostgresAccountRepository
from src.api.errors import ErrorResponder
from src.domain.exceptions import DatabaseNotConfigured
from src.domain.registration import RegistrationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    It is None when no database URL is configured. Migrations deferred at
    startup are applied here before the pool is handed out.

    Raises:
        DatabaseNotConfigured: If no pool was created
        psycopg.OperationalError: If pending migrations cannot reach the database
    """
    pool = getattr(request.app.state, "pool", None)
    if pool is None:
        raise DatabaseNotConfigured("DATABASE_URL is not set")

    migrator: MigrationRunner | None = getattr(request.app.state, "migrator", None)
    if migrator is not None:
        migrator.ensure()
    return pool


def get_repository(request: Request) -> PostgresAccountRepository:
    """Create repository with connection pool from app state."""
    return PostgresAccountRepository(get_pool(request))


def get_registration_service(request: Request) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Construction is lazy: the route calls this inside its error boundary
    so a missing database configuration is classified like any other
    failure.
    """
    return RegistrationService(
        repository=get_repository(request),
        bcrypt_cost=request.app.state.settings.bcrypt_cost,
    )


def get_error_responder(request: Request) -> ErrorResponder:
    """Get the error responder configured for this deployment."""
    return request.app.state.error_responder


def get_service_provider(request: Request) -> Callable[[], RegistrationService]:
    """Return a zero-argument factory for the registration service."""
    return lambda: get_registration_service(request)
