"""Translate domain errors into HTTP responses.

This is the only place that knows which status code each domain error maps
to. Payload shape: ``{"message": str}``, plus ``"errors": [{"field", "message"}]``
for validation failures.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from domain.model.errors import (
    DomainError,
    DuplicateError,
    NotFoundError,
    StorageUnavailableError,
    UnauthorizedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"

# Checked in order; first isinstance match wins
_STATUS_BY_ERROR: list[tuple[type[DomainError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (DuplicateError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (StorageUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: DomainError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _field_errors(errors: dict[str, str]) -> list[dict]:
    # Domain errors name attributes; clients know the camelCase wire names
    return [{"field": to_camel(field), "message": message} for field, message in errors.items()]


def domain_error_response(error: DomainError) -> JSONResponse:
    status_code = status_for(error)
    headers = None

    if status_code == status.HTTP_500_INTERNAL_SERVER_ERROR:
        body = {"message": INTERNAL_ERROR_MESSAGE}
    else:
        body = {"message": error.message}
    if isinstance(error, ValidationError):
        body["errors"] = _field_errors(error.errors)
    if isinstance(error, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    if status_for(exc) >= 500:
        logger.error(
            "Request failed",
            exc_info=exc,
            extra={"path": request.url.path, "error": exc.message},
        )
    return domain_error_response(exc)


async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed bodies in the same shape as domain validation errors."""
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append({
            "field": ".".join(location) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Validation error", "errors": errors},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": INTERNAL_ERROR_MESSAGE},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
