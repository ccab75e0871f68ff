"""
Adversarial tests for race condition attack prevention.

Verifies that concurrent signups for the same email are handled
atomically, preventing attackers from exploiting the gap between the
duplicate check and the insert to:
- Create duplicate accounts
- Leave accounts without profiles
- Surface raw database errors to clients

Defense: the duplicate check is only a fast path. The unique constraint
on accounts.email decides every race; losers roll back their whole
transaction and are reported as 409 ConflictError.
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any
from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresAccountRepository
from src.api.main import create_app
from src.config.settings import Settings
from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.ports import SignupRequest
from src.domain.registration import RegistrationService
from tests.database import PROFILE_TABLES, count_orphans, count_rows

# Apply adversarial marker to all tests in this module
pytestmark = pytest.mark.adversarial


def build_app(pool: ConnectionPool) -> FastAPI:
    app = create_app(Settings(_env_file=None, database_url="postgresql://unused", bcrypt_cost=4))
    app.state.pool = pool
    return app


class TestConcurrentSignupAttacks:
    """
    Adversarial tests simulating concurrent signup attacks.

    These tests submit the same email from many threads at once hoping to
    register it more than once.
    """

    def test_two_concurrent_signups_one_201_one_409(
        self, pool: ConnectionPool, signup_payload: dict[str, Any]
    ) -> None:
        """Same email submitted twice concurrently: exactly one 201, one 409."""
        app = build_app(pool)
        barrier = threading.Barrier(2)

        def submit() -> int:
            barrier.wait()
            return TestClient(app).post("/api/register", json=signup_payload).status_code

        with ThreadPoolExecutor(max_workers=2) as executor:
            statuses = list(executor.map(lambda _: submit(), range(2)))

        assert sorted(statuses) == [201, 409]
        assert count_rows(pool, "accounts", "jo@x.com") == 1

    def test_high_volume_signup_attack(
        self, pool: ConnectionPool, signup_payload: dict[str, Any]
    ) -> None:
        """Many concurrent attempts: one success, all others conflict, no orphans."""
        app = build_app(pool)
        num_attackers = 10
        barrier = threading.Barrier(num_attackers)

        def submit() -> int:
            barrier.wait()
            return TestClient(app).post("/api/register", json=signup_payload).status_code

        with ThreadPoolExecutor(max_workers=num_attackers) as executor:
            statuses = list(executor.map(lambda _: submit(), range(num_attackers)))

        assert statuses.count(201) == 1, f"Race condition: {statuses}"
        assert statuses.count(409) == num_attackers - 1
        assert count_rows(pool, "accounts", "jo@x.com") == 1
        assert count_orphans(pool) == 0

    def test_race_past_duplicate_check_caught_by_constraint(
        self, pool: ConnectionPool, signup_request: SignupRequest
    ) -> None:
        """
        Force every attacker past the duplicate check.

        With email_exists always False, only the unique constraint stands
        between attackers and duplicate accounts.
        """
        num_attackers = 5
        barrier = threading.Barrier(num_attackers)
        results: list[str] = []
        results_lock = threading.Lock()

        def attack() -> None:
            service = RegistrationService(
                repository=PostgresAccountRepository(pool), bcrypt_cost=4
            )
            barrier.wait()
            try:
                service.register(signup_request)
                outcome = "created"
            except EmailAlreadyRegistered:
                outcome = "conflict"
            with results_lock:
                results.append(outcome)

        with patch.object(PostgresAccountRepository, "email_exists", return_value=False):
            with ThreadPoolExecutor(max_workers=num_attackers) as executor:
                futures = [executor.submit(attack) for _ in range(num_attackers)]
                for f in futures:
                    f.result()

        assert results.count("created") == 1
        assert results.count("conflict") == num_attackers - 1
        total_profiles = sum(count_rows(pool, table, "jo@x.com") for table in PROFILE_TABLES)
        assert total_profiles == 1

    def test_concurrent_different_emails_all_succeed(
        self, pool: ConnectionPool, signup_payload: dict[str, Any]
    ) -> None:
        app = build_app(pool)

        def submit(i: int) -> int:
            payload = {**signup_payload, "email": f"user{i}@x.com"}
            return TestClient(app).post("/api/register", json=payload).status_code

        with ThreadPoolExecutor(max_workers=5) as executor:
            statuses = list(executor.map(submit, range(5)))

        assert statuses == [201] * 5
        assert count_orphans(pool) == 0
