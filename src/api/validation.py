"""
Signup input validation.

Turns an untrusted JSON payload into a trusted domain SignupRequest.
Any schema violation rejects the whole request with pydantic's
ValidationError; the error responder decides what the client sees.
"""

from typing import Any

from src.api.models import SignupPayload
from src.domain.ports import SignupRequest


def validate_signup(payload: Any) -> SignupRequest:
    """
    Validate and normalize a raw signup payload.

    Args:
        payload: Decoded JSON body (any shape)

    Returns:
        Validated SignupRequest with normalized email

    Raises:
        pydantic.ValidationError: If any field is missing or invalid
    """
    data = SignupPayload.model_validate(payload)
    return SignupRequest(
        name=data.name,
        email=data.email,
        phone=data.phone,
        password=data.password,
        date_of_birth=data.date_of_birth,
        role=data.role,
    )
