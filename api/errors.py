"""
Exception handlers.

Maps the shared exception categories to HTTP status codes so routes can
raise domain errors and never build error responses themselves.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.dependencies import get_container
from shared.exceptions import (
    AIGateError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    RateLimitedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first; the first match decides the status
STATUS_BY_CATEGORY: list[tuple[type[AIGateError], int]] = [
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (RateLimitedError, 429),
    (ExternalServiceError, 500),
]

# Field labels that differ from the capitalised field name
FIELD_LABELS = {
    "plan": "Subscription plan",
}


def status_for(exc: AIGateError) -> int:
    for category, status_code in STATUS_BY_CATEGORY:
        if isinstance(exc, category):
            return status_code
    return 500


def format_validation_error(error: dict[str, Any]) -> str:
    """Turn one pydantic error into a client-facing sentence.

    Missing fields read "<Field> is required"; messages raised by our own
    validators are passed through without pydantic's "Value error, " prefix.
    """
    loc = [part for part in error.get("loc", ()) if part != "body"]
    field = str(loc[-1]) if loc else ""

    if error.get("type") == "missing":
        if not field:
            return "Request body is required"
        label = FIELD_LABELS.get(field, field.replace("_", " ").capitalize())
        return f"{label} is required"

    message = error.get("msg", "Invalid value")
    if error.get("type") == "value_error":
        return message.removeprefix("Value error, ")
    return f"{field}: {message}" if field else message


async def aigate_error_handler(request: Request, exc: AIGateError) -> JSONResponse:
    status_code = status_for(exc)
    headers: dict[str, str] = {}

    if status_code == 401:
        headers["WWW-Authenticate"] = "Bearer"
    if isinstance(exc, RateLimitedError) and exc.retry_after is not None:
        headers["Retry-After"] = str(exc.retry_after)

    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.code} ({status_code}) on {request.method} {request.url.path}")

    return JSONResponse(status_code=status_code, content=exc.to_dict(), headers=headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [format_validation_error(error) for error in exc.errors()]
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=400,
        content={"message": "Validation failed", "errors": errors},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)

    settings = get_container().settings
    content: dict[str, Any] = {"message": "Internal server error", "error": "INTERNAL_ERROR"}
    if settings.debug or settings.is_development:
        content["detail"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register the handlers on an application."""
    app.add_exception_handler(AIGateError, aigate_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
