"""
PostgreSQL repository adapter - Implements AccountRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Transaction Design - Account + Profile Atomicity:
------------------------------------------------
create_account() writes two rows: one in ``accounts`` and one in the
profile table selected by the account's role. Both inserts run inside a
single ``conn.transaction()`` block on a connection borrowed from the
pool:

1. **Commit**: only when the block exits normally, after both inserts.

2. **Rollback**: any exception raised between BEGIN and COMMIT (a failed
   profile insert, a unique violation, a dropped connection) rolls back
   the whole unit. No reader ever sees an account without its profile.

3. **Release**: ``pool.connection()`` returns the connection to the pool
   on every exit path, including exceptions.

Uniqueness: the ``accounts_email_key`` constraint is the authority when
two signups race past the duplicate check. Its violation is translated to
EmailAlreadyRegistered after the rollback.
"""

import logging
import threading
from pathlib import Path
from typing import Any, assert_never

from psycopg import Cursor
from psycopg.errors import UniqueViolation
from psycopg_pool import ConnectionPool

from src.domain.exceptions import EmailAlreadyRegistered
from src.domain.ports import Account, AccountStatus, Role, SignupRequest
from src.domain.profiles import AcademyProfile, AthleteProfile, CoachProfile, Profile

logger = logging.getLogger(__name__)

EMAIL_UNIQUE_CONSTRAINT = "accounts_email_key"


class PostgresAccountRepository:
    """
    Implements AccountRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def email_exists(self, email: str) -> bool:
        """
        Check whether an account already uses this email.

        Args:
            email: Normalized email address (lowercase, stripped)

        Returns:
            True if an account row exists for the email
        """
        sql = "SELECT 1 FROM accounts WHERE email = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (email,))
            return cursor.fetchone() is not None

    def create_account(
        self, signup: SignupRequest, password_hash: str, profile: Profile
    ) -> Account:
        """
        Insert account and profile rows in one transaction.

        Args:
            signup: Validated signup request
            password_hash: bcrypt-hashed password from domain layer
            profile: Profile variant matching signup.role

        Returns:
            Created Account (password hash is never selected back)

        Raises:
            EmailAlreadyRegistered: If accounts_email_key is violated
        """
        try:
            with (
                self._pool.connection() as conn,
                conn.transaction(),
                conn.cursor() as cursor,
            ):
                account = self._insert_account(cursor, signup, password_hash)
                self._insert_profile(cursor, account, profile)
        except UniqueViolation as e:
            if e.diag.constraint_name != EMAIL_UNIQUE_CONSTRAINT:
                raise
            logger.info("Signup lost unique-email race: %s", signup.email)
            raise EmailAlreadyRegistered(signup.email) from e

        return account

    def _insert_account(
        self, cursor: Cursor[Any], signup: SignupRequest, password_hash: str
    ) -> Account:
        # email_verified_at is set at creation: accounts are auto-verified
        sql = """
            INSERT INTO accounts
                (name, email, phone, date_of_birth, password_hash, role, status, email_verified_at)
            VALUES (%s, %s, %s, %s, %s, %s, %s, NOW())
            RETURNING id, name, email, phone, date_of_birth, role, status,
                      email_verified_at, created_at
        """
        cursor.execute(
            sql,
            (
                signup.name,
                signup.email,
                signup.phone,
                signup.date_of_birth,
                password_hash,
                signup.role.value,
                AccountStatus.ACTIVE.value,
            ),
        )
        row = cursor.fetchone()
        if row is None:
            raise RuntimeError("INSERT ... RETURNING produced no row")

        return Account(
            id=row[0],
            name=row[1],
            email=row[2],
            phone=row[3],
            date_of_birth=row[4],
            role=Role(row[5]),
            status=AccountStatus(row[6]),
            email_verified_at=row[7],
            created_at=row[8],
        )

    def _insert_profile(self, cursor: Cursor[Any], account: Account, profile: Profile) -> None:
        match profile:
            case AthleteProfile():
                cursor.execute(
                    """
                    INSERT INTO athlete_profiles
                        (account_id, primary_sport, secondary_sports, positions)
                    VALUES (%s, %s, %s, %s)
                    """,
                    (
                        account.id,
                        profile.primary_sport,
                        list(profile.secondary_sports),
                        list(profile.positions),
                    ),
                )
            case CoachProfile():
                cursor.execute(
                    """
                    INSERT INTO coach_profiles (account_id, specialization, qualifications)
                    VALUES (%s, %s, %s)
                    """,
                    (account.id, list(profile.specialization), list(profile.qualifications)),
                )
            case AcademyProfile():
                cursor.execute(
                    """
                    INSERT INTO academy_profiles
                        (account_id, name, type, sports, age_groups, facilities)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    """,
                    (
                        account.id,
                        profile.name,
                        profile.type,
                        list(profile.sports),
                        list(profile.age_groups),
                        list(profile.facilities),
                    ),
                )
            case _:
                assert_never(profile)


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        sql_content = sql_file.read_text()

        # pool.connection() commits on clean exit
        with pool.connection() as conn:
            conn.execute(sql_content)

        logger.info(f"Migration complete: {sql_file.name}")


class MigrationRunner:
    """
    Runs migrations until one attempt succeeds.

    A failed attempt (database unreachable at startup) is retried on the
    next call, so the schema appears as soon as the database does.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        self._pool = pool
        self._lock = threading.Lock()
        self._done = False

    @property
    def done(self) -> bool:
        return self._done

    def ensure(self) -> None:
        """
        Apply migrations if no attempt has succeeded yet.

        Raises:
            psycopg.OperationalError: If the database is still unreachable
        """
        if self._done:
            return
        with self._lock:
            if self._done:
                return
            run_migrations(self._pool)
            self._done = True
