"""
Domain exceptions - Semantic error types for registration.

This module defines domain-specific exceptions that communicate
business rule violations without leaking infrastructure details.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class EmailAlreadyRegistered(RegistrationError):
    """An account with this email already exists."""

    pass


class DatabaseNotConfigured(RegistrationError):
    """No database connection string is configured."""

    pass
