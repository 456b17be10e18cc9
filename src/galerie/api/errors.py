"""HTTP error envelope and exception translation.

Every error leaves the API as ``{"error": "<message>"}``. Routes raise the
AppError subclasses below; database, storage and framework exceptions are
translated by the handlers registered in register_exception_handlers().
Original database and storage errors are logged and never echoed to clients.
"""

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from galerie.services.exceptions import StorageError

logger = structlog.get_logger()

UNIQUE_VIOLATION = "23505"
HTTP_422_UNPROCESSABLE = 422

# pydantic error types that mean "the client sent something unparseable"
_BAD_REQUEST_ERROR_TYPES = {"json_invalid", "uuid_parsing", "uuid_type", "uuid_version"}


class AppError(Exception):
    """Base for errors that map directly onto an HTTP status."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BadRequest(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class Unauthorized(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class ValidationFailed(AppError):
    status_code = HTTP_422_UNPROCESSABLE
    default_message = "Validation error"


class InternalError(AppError):
    pass


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def is_unique_violation(error: IntegrityError) -> bool:
    """Detect unique-constraint violations on PostgreSQL and SQLite."""
    orig = error.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION:
        return True
    return "unique constraint" in str(orig).lower()


def describe_validation_error(exc: RequestValidationError) -> tuple[int, str]:
    """Pick the status and message for a request validation failure.

    Malformed JSON and unparseable UUIDs are 400; everything else is 422 with
    the first failing field.
    """
    errors = exc.errors()
    if not errors:
        return HTTP_422_UNPROCESSABLE, ValidationFailed.default_message

    first = errors[0]
    if any(error.get("type") in _BAD_REQUEST_ERROR_TYPES for error in errors):
        if first.get("type") == "json_invalid":
            return status.HTTP_400_BAD_REQUEST, "Invalid JSON body"
        return status.HTTP_400_BAD_REQUEST, "Invalid UUID"

    location = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    message = first.get("msg", ValidationFailed.default_message)
    if location:
        message = f"{'.'.join(location)}: {message}"
    return HTTP_422_UNPROCESSABLE, message


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, error=exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    status_code, message = describe_validation_error(exc)
    logger.info("request.invalid", path=request.url.path, status=status_code, error=message)
    return error_response(status_code, message)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    if is_unique_violation(exc):
        logger.info("db.unique_violation", path=request.url.path, error=str(exc.orig))
        return error_response(status.HTTP_409_CONFLICT, Conflict.default_message)
    logger.error(
        "db.integrity_error",
        path=request.url.path,
        error=str(exc.orig),
        error_type=type(exc.orig).__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error(
        "db.error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Database error")


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    message = "Failed to delete file" if exc.operation == "delete" else "Failed to upload file"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_error",
        path=request.url.path,
        error=str(exc),
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every translation rule to the application."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, database_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StorageError, storage_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
