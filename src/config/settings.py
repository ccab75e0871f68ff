"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Deployment environment. Only changes user-facing message wording."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database configuration (no default: a missing URL is reported to clients)
    database_url: str | None = None
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool
    pool_timeout: float = 5.0  # Seconds to wait for a pooled connection
    connect_timeout: int = 5  # Seconds for the driver to establish a connection
    run_migrations: bool = True

    environment: Environment = Environment.DEVELOPMENT
    log_level: str = "INFO"

    # Security settings
    bcrypt_cost: int = 10  # bcrypt work factor


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
