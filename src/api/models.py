"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

import re
import unicodedata
from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from src.domain.credentials import (
    MAX_PASSWORD_BYTES,
    MIN_PASSWORD_LENGTH,
    check_password_strength,
)
from src.domain.ports import Account, AccountStatus, Role

_PHONE_PATTERN = re.compile(r"^\+?[0-9 ()\-]{7,20}$")


class SignupPayload(BaseModel):
    """Request model for account signup."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr
    phone: str | None = Field(default=None, description="Optional phone number")
    password: str = Field(
        ...,
        min_length=MIN_PASSWORD_LENGTH,
        description="Password (min 8 characters, mixed case, digit and symbol)",
    )
    date_of_birth: date = Field(..., alias="dateOfBirth", description="ISO date (YYYY-MM-DD)")
    role: Role

    @field_validator("name", "email", mode="before")
    @classmethod
    def strip_whitespace(cls, value: object) -> object:
        return value.strip() if isinstance(value, str) else value

    @field_validator("name", mode="after")
    @classmethod
    def reject_control_characters(cls, value: str) -> str:
        if any(unicodedata.category(char) == "Cc" for char in value):
            raise ValueError("name must not contain control characters")
        return value

    @field_validator("email", mode="after")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        """Lowercase the whole address so lookups match the unique index."""
        return value.strip().lower()

    @field_validator("phone", mode="before")
    @classmethod
    def blank_phone_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("phone", mode="after")
    @classmethod
    def validate_phone(cls, value: str | None) -> str | None:
        if value is not None and not _PHONE_PATTERN.match(value):
            raise ValueError("phone must contain 7-20 digits, spaces or + - ( )")
        return value

    @field_validator("password", mode="after")
    @classmethod
    def validate_password_strength(cls, value: str) -> str:
        if len(value.encode()) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        if not check_password_strength(value).is_strong:
            raise ValueError(
                "password must mix upper and lower case letters, digits and symbols"
            )
        return value

    @field_validator("date_of_birth", mode="after")
    @classmethod
    def validate_date_of_birth(cls, value: date) -> date:
        if value > date.today():
            raise ValueError("date of birth cannot be in the future")
        return value


class AccountResponse(BaseModel):
    """Public view of an account (no password hash)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    name: str
    email: str
    phone: str | None
    date_of_birth: date
    role: Role
    status: AccountStatus
    email_verified_at: datetime
    created_at: datetime

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            name=account.name,
            email=account.email,
            phone=account.phone,
            date_of_birth=account.date_of_birth,
            role=account.role,
            status=account.status,
            email_verified_at=account.email_verified_at,
            created_at=account.created_at,
        )


class RegisterResponse(BaseModel):
    """Response model for successful signup."""

    success: bool = True
    message: str
    user: AccountResponse


class ErrorResponse(BaseModel):
    """Standard error response model. Clients pattern-match on errorKind."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = False
    error_kind: str
    message: str
    status_code: int
