"""
Registration domain service - account signup orchestration.

Signup Flow
===========

    validated SignupRequest
        -> duplicate check        (EmailAlreadyRegistered, no hashing done)
        -> bcrypt hash
        -> build role profile
        -> create account + profile in one transaction

The flow short-circuits at the first failure. The duplicate check is not
transactional with the insert; when two signups race for the same email
the repository's unique constraint decides and the loser also surfaces as
EmailAlreadyRegistered.

Accounts are created ACTIVE with the email marked verified at creation
time. There is no confirmation step yet.
"""

import logging
from dataclasses import dataclass

from .credentials import DEFAULT_BCRYPT_COST, hash_password
from .exceptions import EmailAlreadyRegistered
from .ports import Account, AccountRepository, SignupRequest
from .profiles import build_profile

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user signup.

    Orchestrates duplicate detection, password hashing, profile
    selection and the atomic account creation.
    """

    repository: AccountRepository
    bcrypt_cost: int = DEFAULT_BCRYPT_COST

    def register(self, signup: SignupRequest) -> Account:
        """
        Create an account and its role-specific profile.

        Args:
            signup: Validated signup request (email already normalized)

        Returns:
            The created Account, without password hash

        Raises:
            EmailAlreadyRegistered: If the email is already in use
        """
        if self.repository.email_exists(signup.email):
            raise EmailAlreadyRegistered(signup.email)

        password_hash = hash_password(signup.password, rounds=self.bcrypt_cost)
        profile = build_profile(signup.role, signup.name)

        account = self.repository.create_account(signup, password_hash, profile)
        logger.info("New user registered: %s (%s)", account.email, account.role.value)
        return account
