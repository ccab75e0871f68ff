"""Repository adapters - Database implementations."""

from .postgres import MigrationRunner, PostgresAccountRepository, run_migrations

__all__ = ["MigrationRunner", "PostgresAccountRepository", "run_migrations"]
