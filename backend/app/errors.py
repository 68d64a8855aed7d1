"""Domain errors and the handlers that turn them into JSON responses."""
from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Request locations that carry no meaning for the client.
_LOCATION_PREFIXES = {"body", "query", "path"}


class EmployeeError(Exception):
    """Base class for errors raised by the employee services."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class EmployeeNotFound(EmployeeError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Employee not found"


class InvalidEmployeeId(EmployeeError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid employee ID"


class DuplicateEmail(EmployeeError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Employee with this email already exists"


def error_body(message: str, errors: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"message": message}
    if errors is not None:
        body["errors"] = errors
    return body


def field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic error entries into `{field, message}` pairs."""

    flattened = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
        flattened.append({"field": ".".join(location), "message": error.get("msg", "Invalid value")})
    return flattened


async def employee_error_handler(request: Request, exc: EmployeeError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = field_errors(exc)
    logger.info("Rejected %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder(error_body("Validation failed", errors)),
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Server error"),
    )


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error while handling %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Server error"),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers that shape every error as `{message, errors?}`."""

    app.add_exception_handler(EmployeeError, employee_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)
