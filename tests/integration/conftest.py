"""
Shared fixtures for integration tests.

Requires PostgreSQL (``docker compose up -d db``) and DATABASE_URL.
Tests that need the database are skipped when it is not reachable.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from tests.database import clean_tables, open_test_pool


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests."""
    pool = open_test_pool()
    yield pool
    pool.close()


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresAccountRepository:
    """Create repository instance for each test."""
    return PostgresAccountRepository(pool)


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean account tables before each test."""
    clean_tables(pool)
    yield
