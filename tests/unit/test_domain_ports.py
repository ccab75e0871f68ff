"""
Unit tests for domain ports, profiles and exceptions.

Tests verify:
- Role and status enums
- Role to profile dispatch with its defaults
- Exceptions are properly structured
- Domain purity (zero framework imports)
"""

import subprocess
from dataclasses import FrozenInstanceError, fields
from enum import Enum

import pytest

from src.domain.exceptions import (
    DatabaseNotConfigured,
    EmailAlreadyRegistered,
    RegistrationError,
)
from src.domain.ports import Account, AccountStatus, Role
from src.domain.profiles import AcademyProfile, AthleteProfile, CoachProfile, build_profile


class TestRoleEnum:
    """Tests for Role enum."""

    def test_role_is_str_enum(self) -> None:
        assert issubclass(Role, Enum)
        assert issubclass(Role, str)

    def test_role_values(self) -> None:
        assert {role.value for role in Role} == {"ATHLETE", "COACH", "ACADEMY"}


class TestAccountStatusEnum:
    """Tests for AccountStatus enum."""

    def test_active_status(self) -> None:
        assert AccountStatus.ACTIVE.value == "ACTIVE"

    def test_account_has_no_password_field(self) -> None:
        """Account objects cannot carry the password digest."""
        names = {field.name for field in fields(Account)}
        assert "password" not in names
        assert "password_hash" not in names


class TestBuildProfile:
    """Tests for role to profile dispatch."""

    def test_athlete_profile_defaults(self) -> None:
        profile = build_profile(Role.ATHLETE, "Jo")
        assert profile == AthleteProfile(primary_sport="Soccer", secondary_sports=(), positions=())

    def test_coach_profile_defaults(self) -> None:
        profile = build_profile(Role.COACH, "Jo")
        assert profile == CoachProfile(specialization=(), qualifications=())

    def test_academy_profile_copies_account_name(self) -> None:
        profile = build_profile(Role.ACADEMY, "Lions FC")
        assert isinstance(profile, AcademyProfile)
        assert profile.name == "Lions FC"
        assert profile.type == "Academy"
        assert profile.sports == ()
        assert profile.age_groups == ()
        assert profile.facilities == ()

    @pytest.mark.parametrize(
        ("role", "variant"),
        [
            (Role.ATHLETE, AthleteProfile),
            (Role.COACH, CoachProfile),
            (Role.ACADEMY, AcademyProfile),
        ],
    )
    def test_each_role_maps_to_one_variant(self, role: Role, variant: type) -> None:
        assert type(build_profile(role, "Jo")) is variant

    def test_profiles_are_immutable(self) -> None:
        profile = build_profile(Role.ATHLETE, "Jo")
        with pytest.raises(FrozenInstanceError):
            profile.primary_sport = "Tennis"  # type: ignore[misc]


class TestExceptions:
    """Tests for domain exceptions."""

    def test_email_already_registered_is_registration_error(self) -> None:
        assert issubclass(EmailAlreadyRegistered, RegistrationError)

    def test_database_not_configured_is_registration_error(self) -> None:
        assert issubclass(DatabaseNotConfigured, RegistrationError)

    def test_email_already_registered_carries_email(self) -> None:
        assert "jo@x.com" in str(EmailAlreadyRegistered("jo@x.com"))


class TestDomainPurity:
    """Tests for domain purity - zero framework imports."""

    @pytest.mark.parametrize(
        "pattern",
        ["from fastapi", "import fastapi", "from pydantic", "from psycopg", "import psycopg"],
    )
    def test_no_framework_imports_in_domain(self, pattern: str) -> None:
        result = subprocess.run(
            ["grep", "-r", pattern, "src/domain/"],
            capture_output=True,
            text=True,
        )
        assert result.returncode != 0, f"Framework import found: {result.stdout}"
