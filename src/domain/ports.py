"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the types the domain exchanges with infrastructure
and the interfaces (ports) that adapters implement.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

if TYPE_CHECKING:
    from .profiles import Profile


class Role(str, Enum):
    """Account role. Immutable after creation; selects the profile variant."""

    ATHLETE = "ATHLETE"
    COACH = "COACH"
    ACADEMY = "ACADEMY"


class AccountStatus(str, Enum):
    """Account lifecycle status. Signup always creates ACTIVE accounts."""

    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    DEACTIVATED = "DEACTIVATED"


@dataclass(frozen=True)
class SignupRequest:
    """Validated signup submission. Request-scoped, never persisted as-is."""

    name: str
    email: str
    password: str
    date_of_birth: date
    role: Role
    phone: str | None = None

    def __repr__(self) -> str:
        # Keep the plaintext password out of logs and tracebacks
        return (
            f"SignupRequest(name={self.name!r}, email={self.email!r}, "
            f"phone={self.phone!r}, date_of_birth={self.date_of_birth!r}, "
            f"role={self.role.value!r}, password='***')"
        )


@dataclass(frozen=True)
class Account:
    """
    Persisted account as returned to callers.

    Deliberately has no password hash field: the digest never leaves
    the repository.
    """

    id: UUID
    name: str
    email: str
    phone: str | None
    date_of_birth: date
    role: Role
    status: AccountStatus
    email_verified_at: datetime
    created_at: datetime


class AccountRepository(Protocol):
    """Port interface for account persistence."""

    def email_exists(self, email: str) -> bool:
        """
        Check whether an account already uses this email.

        Args:
            email: Normalized email address

        Returns:
            True if an account exists, False otherwise
        """
        ...

    def create_account(
        self, signup: SignupRequest, password_hash: str, profile: "Profile"
    ) -> Account:
        """
        Atomically create an account and its role-specific profile.

        Both rows are written in one transaction: either both exist
        afterwards or neither does.

        Args:
            signup: Validated signup request
            password_hash: bcrypt hashed password
            profile: Default-populated profile matching signup.role

        Returns:
            The created Account (without password hash)

        Raises:
            EmailAlreadyRegistered: If the email unique constraint fires
        """
        ...
