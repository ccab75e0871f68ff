"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- Valid signup payloads
- Validated domain signup requests
"""

from datetime import date
from typing import Any

import pytest

from src.domain.ports import Role, SignupRequest
from tests.factories import STRONG_PASSWORD


@pytest.fixture
def signup_payload() -> dict[str, Any]:
    """Raw JSON payload as the signup form submits it."""
    return {
        "name": "Jo",
        "email": "jo@x.com",
        "password": STRONG_PASSWORD,
        "dateOfBirth": "2000-01-01",
        "role": "ATHLETE",
    }


@pytest.fixture
def signup_request() -> SignupRequest:
    """Validated signup request for the athlete scenario."""
    return SignupRequest(
        name="Jo",
        email="jo@x.com",
        password=STRONG_PASSWORD,
        date_of_birth=date(2000, 1, 1),
        role=Role.ATHLETE,
    )
