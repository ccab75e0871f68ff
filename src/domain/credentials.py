"""
Credential handling - password hashing and strength scoring.

Hashing uses bcrypt (salted, cost factor >= 10). Plaintext passwords are
never logged, stored or returned by anything in this module.
"""

import re
from dataclasses import dataclass

import bcrypt

MIN_PASSWORD_LENGTH = 8
# bcrypt only accepts the first 72 bytes; longer inputs raise ValueError
MAX_PASSWORD_BYTES = 72
DEFAULT_BCRYPT_COST = 10

_STRENGTH_LABELS = {0: "weak", 1: "weak", 2: "weak", 3: "medium", 4: "strong", 5: "very-strong"}


@dataclass(frozen=True)
class PasswordStrength:
    """Password strength score (0-5) and its label."""

    score: int
    strength: str

    @property
    def is_strong(self) -> bool:
        return self.score >= 4


def check_password_strength(password: str) -> PasswordStrength:
    """
    Score a password against five criteria.

    One point each for: minimum length, a lowercase letter, an uppercase
    letter, a digit, and a non-alphanumeric character.
    """
    criteria = (
        len(password) >= MIN_PASSWORD_LENGTH,
        re.search(r"[a-z]", password) is not None,
        re.search(r"[A-Z]", password) is not None,
        re.search(r"\d", password) is not None,
        re.search(r"[^A-Za-z0-9]", password) is not None,
    )
    score = sum(criteria)
    return PasswordStrength(score=score, strength=_STRENGTH_LABELS[score])


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_COST) -> str:
    """Hash password using bcrypt with the given cost factor."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash (constant-time)."""
    return bcrypt.checkpw(password.encode(), password_hash.encode())
