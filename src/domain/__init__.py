"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for account signup. It
defines its own port interfaces for infrastructure abstraction, ensuring
true hexagonal architecture decoupling.
"""

from .credentials import check_password_strength, hash_password, verify_password
from .exceptions import DatabaseNotConfigured, EmailAlreadyRegistered, RegistrationError
from .ports import Account, AccountRepository, AccountStatus, Role, SignupRequest
from .profiles import AcademyProfile, AthleteProfile, CoachProfile, Profile, build_profile
from .registration import RegistrationService

__all__ = [
    "AcademyProfile",
    "Account",
    "AccountRepository",
    "AccountStatus",
    "AthleteProfile",
    "CoachProfile",
    "DatabaseNotConfigured",
    "EmailAlreadyRegistered",
    "Profile",
    "RegistrationError",
    "RegistrationService",
    "Role",
    "SignupRequest",
    "build_profile",
    "check_password_strength",
    "hash_password",
    "verify_password",
]
