"""
Error classification and HTTP error responses.

Every failure raised while handling a request ends up here. The responder
maps it to one of five stable error kinds, logs the full detail
server-side, and returns a sanitized JSON body:

    {"success": false, "errorKind": "...", "message": "...", "statusCode": N}

Classification priority:
    1. DatabaseNotConfigured                    -> ConfigurationError      500
    2. psycopg.OperationalError (incl. pool     -> ServiceUnavailableError 503
       timeouts, refused connections, query
       timeouts)
    3. pydantic / request validation failures   -> ValidationError         400
    4. EmailAlreadyRegistered / UniqueViolation -> ConflictError           409
    5. anything else                            -> InternalError           500

Only the 503 message depends on the deployment environment; status code
and error kind are identical in development and production.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

import psycopg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from psycopg.errors import UniqueViolation
from pydantic import ValidationError as PydanticValidationError

from src.api.models import ErrorResponse
from src.config.settings import Environment
from src.domain.exceptions import DatabaseNotConfigured, EmailAlreadyRegistered

logger = logging.getLogger(__name__)

CONFIGURATION_MESSAGE = "Database configuration is missing. Please contact support."
UNAVAILABLE_DEV_MESSAGE = "Database is not running. Start it with: docker compose up -d db"
UNAVAILABLE_PROD_MESSAGE = "Service temporarily unavailable. Please try again in a moment."
VALIDATION_MESSAGE = "Please check your input and try again"
CONFLICT_MESSAGE = "An account with this email already exists"
INTERNAL_MESSAGE = "Something went wrong. Please try again later."


class ErrorKind(str, Enum):
    """Stable error tags returned to clients."""

    CONFIGURATION = "ConfigurationError"
    SERVICE_UNAVAILABLE = "ServiceUnavailableError"
    VALIDATION = "ValidationError"
    CONFLICT = "ConflictError"
    INTERNAL = "InternalError"


@dataclass(frozen=True)
class ClassifiedError:
    kind: ErrorKind
    status_code: int
    message: str


def _field_errors(exc: Exception) -> list[str]:
    """Field locations and messages, without the submitted values."""
    if isinstance(exc, PydanticValidationError):
        errors: Any = exc.errors(include_input=False, include_url=False)
    elif isinstance(exc, RequestValidationError):
        errors = exc.errors()
    else:
        return [str(exc)]
    return [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in errors
    ]


@dataclass(frozen=True)
class ErrorResponder:
    """
    Classifies exceptions and renders error responses.

    The deployment environment is injected at construction so both
    wordings can be exercised without touching process state.
    """

    environment: Environment = Environment.DEVELOPMENT

    def classify(self, exc: BaseException) -> ClassifiedError:
        """Map an exception to its error kind, status code and client message."""
        if isinstance(exc, DatabaseNotConfigured):
            return ClassifiedError(
                ErrorKind.CONFIGURATION,
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                CONFIGURATION_MESSAGE,
            )

        if isinstance(exc, psycopg.OperationalError):
            message = (
                UNAVAILABLE_PROD_MESSAGE
                if self.environment == Environment.PRODUCTION
                else UNAVAILABLE_DEV_MESSAGE
            )
            return ClassifiedError(
                ErrorKind.SERVICE_UNAVAILABLE,
                status.HTTP_503_SERVICE_UNAVAILABLE,
                message,
            )

        if isinstance(exc, (PydanticValidationError, RequestValidationError)):
            return ClassifiedError(
                ErrorKind.VALIDATION,
                status.HTTP_400_BAD_REQUEST,
                VALIDATION_MESSAGE,
            )

        if isinstance(exc, (EmailAlreadyRegistered, UniqueViolation)):
            return ClassifiedError(
                ErrorKind.CONFLICT,
                status.HTTP_409_CONFLICT,
                CONFLICT_MESSAGE,
            )

        return ClassifiedError(
            ErrorKind.INTERNAL,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_MESSAGE,
        )

    def respond(self, exc: Exception, context: str = "API") -> JSONResponse:
        """
        Log the failure with full detail and return the sanitized response.

        Args:
            exc: The exception raised while handling the request
            context: Short tag identifying the call site in logs

        Returns:
            JSONResponse carrying the ErrorResponse body
        """
        classified = self.classify(exc)

        if classified.kind == ErrorKind.VALIDATION:
            logger.warning(
                "[%s] %s: %s",
                context,
                classified.kind.value,
                "; ".join(_field_errors(exc)),
            )
        elif classified.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "[%s] %s (%s): %s",
                context,
                classified.kind.value,
                type(exc).__name__,
                exc,
                exc_info=exc,
            )
        else:
            logger.warning(
                "[%s] %s (%s): %s",
                context,
                classified.kind.value,
                type(exc).__name__,
                exc,
            )

        body = ErrorResponse(
            error_kind=classified.kind.value,
            message=classified.message,
            status_code=classified.status_code,
        )
        return JSONResponse(
            status_code=classified.status_code,
            content=body.model_dump(by_alias=True),
        )


def register_error_handlers(app: FastAPI) -> None:
    """
    Route framework-level failures through the app's ErrorResponder.

    Covers failures raised before a route body runs (malformed JSON,
    non-object bodies) so clients always receive the JSON error shape.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return request.app.state.error_responder.respond(exc, context="REQUEST_VALIDATION")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        return request.app.state.error_responder.respond(exc, context="UNHANDLED")
