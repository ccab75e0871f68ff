"""
Role-specific profiles.

Each account owns exactly one profile whose shape is selected by the
account's role. ``Profile`` is a closed union over the three variants;
``build_profile`` is the only place a role is mapped to a variant.
"""

from dataclasses import dataclass
from typing import assert_never

from .ports import Role

DEFAULT_PRIMARY_SPORT = "Soccer"
DEFAULT_ACADEMY_TYPE = "Academy"


@dataclass(frozen=True)
class AthleteProfile:
    """Athlete profile. Sport defaults are refined later during onboarding."""

    primary_sport: str = DEFAULT_PRIMARY_SPORT
    secondary_sports: tuple[str, ...] = ()
    positions: tuple[str, ...] = ()


@dataclass(frozen=True)
class CoachProfile:
    specialization: tuple[str, ...] = ()
    qualifications: tuple[str, ...] = ()


@dataclass(frozen=True)
class AcademyProfile:
    """Academy profile. ``name`` is copied from the owning account."""

    name: str
    type: str = DEFAULT_ACADEMY_TYPE
    sports: tuple[str, ...] = ()
    age_groups: tuple[str, ...] = ()
    facilities: tuple[str, ...] = ()


Profile = AthleteProfile | CoachProfile | AcademyProfile


def build_profile(role: Role, account_name: str) -> Profile:
    """Build the default-populated profile for a role."""
    match role:
        case Role.ATHLETE:
            return AthleteProfile()
        case Role.COACH:
            return CoachProfile()
        case Role.ACADEMY:
            return AcademyProfile(name=account_name)
        case _:
            assert_never(role)
