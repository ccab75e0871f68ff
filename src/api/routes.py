"""
API routes - Account signup endpoint.

This module defines the HTTP endpoints:
- POST /api/register - Create an account and its role profile

Every failure in the handler is caught at one boundary and handed to the
ErrorResponder; nothing below this module produces HTTP responses.
"""

from collections.abc import Callable
from typing import Any

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_error_responder, get_service_provider
from src.api.errors import ErrorResponder
from src.api.models import AccountResponse, ErrorResponse, RegisterResponse, SignupPayload
from src.api.validation import validate_signup
from src.domain.registration import RegistrationService

router = APIRouter(tags=["auth"])

_SIGNUP_EXAMPLE = {
    "name": "Jo",
    "email": "jo@example.com",
    "phone": "+1 555 0100",
    "password": "Str0ng!Pass",
    "dateOfBirth": "2000-01-01",
    "role": "ATHLETE",
}


def _signup_body_schema() -> dict[str, Any]:
    """
    JSON schema of the signup body for the OpenAPI document.

    The handler takes a raw dict so malformed bodies reach the responder;
    the documented schema comes from SignupPayload with its enum refs inlined.
    """
    schema = SignupPayload.model_json_schema(by_alias=True)
    defs = schema.pop("$defs", {})
    for field, prop in schema["properties"].items():
        ref = prop.get("$ref")
        if ref is not None:
            extra = {key: value for key, value in prop.items() if key != "$ref"}
            schema["properties"][field] = {**defs[ref.rsplit("/", 1)[-1]], **extra}
    return schema


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid signup data"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse, "description": "Misconfiguration or internal error"},
        503: {"model": ErrorResponse, "description": "Database unreachable"},
    },
    summary="Register a new user",
    description="Create an account and its role-specific profile in one transaction.",
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": _signup_body_schema()}},
            "required": True,
        }
    },
)
def register(
    payload: dict[str, Any] = Body(..., examples=[_SIGNUP_EXAMPLE]),
    service_provider: Callable[[], RegistrationService] = Depends(get_service_provider),
    responder: ErrorResponder = Depends(get_error_responder),
) -> RegisterResponse | JSONResponse:
    """
    Register a new user.

    - **name**, **email**, **password**, **dateOfBirth**, **role** are required
    - **phone** is optional

    Returns the created account without its password hash.
    """
    try:
        service = service_provider()
        signup = validate_signup(payload)
        account = service.register(signup)
    except Exception as e:
        return responder.respond(e, context="REGISTER_API")

    return RegisterResponse(
        message="Account created successfully",
        user=AccountResponse.from_account(account),
    )
