"""
Shared fixtures for adversarial tests.

Provides common test infrastructure for concurrent signup attacks.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool

from tests.database import clean_tables, open_test_pool

# Module-level marker for all adversarial tests
pytestmark = pytest.mark.adversarial


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool sized for concurrent attackers."""
    pool = open_test_pool(max_size=20)
    yield pool
    pool.close()


@pytest.fixture(autouse=True)
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean account tables before each test."""
    clean_tables(pool)
    yield
