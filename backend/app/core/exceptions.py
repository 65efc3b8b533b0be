"""
Application exceptions and the global exception handlers.
Every error leaves the API in the same envelope: {"status": "error", "message", "details"?}.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
from typing import Any, List, Optional

from app.core.config import settings


logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""
    def __init__(self, message: str, status_code: int = 500, details: Any = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(AppException):
    """Malformed, missing or out-of-range input. Details hold one entry per field."""
    def __init__(self, message: str = "Validation error", details: Optional[List[dict]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, details)


class UnauthenticatedError(AppException):
    """Missing or invalid credentials."""
    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenError(AppException):
    """Authenticated, but not allowed to perform the operation."""
    def __init__(self, message: str = "Not authorized to perform this action"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(AppException):
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ConflictError(AppException):
    """Uniqueness or state-transition violation."""
    def __init__(self, message: str, details: Any = None):
        super().__init__(message, status.HTTP_409_CONFLICT, details)


def _error_body(message: str, details: Any = None) -> dict:
    body = {"status": "error", "message": message}
    if details is not None:
        body["details"] = details
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle custom application exceptions."""
    logger.warning(
        f"Application exception: {exc.message}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
            "details": exc.details,
        },
    )

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.details),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions."""
    logger.warning(
        f"HTTP exception: {exc.detail}",
        extra={
            "status_code": exc.status_code,
            "path": request.url.path,
        },
    )

    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


def _field_from_loc(loc: tuple) -> Optional[str]:
    """Drop the location prefix (body/query/path) and return the offending field name."""
    parts = [str(part) for part in loc[1:] if not isinstance(part, int)]
    return ".".join(parts) if parts else None


def _clean_message(message: str) -> str:
    prefix = "Value error, "
    if message.startswith(prefix):
        return message[len(prefix):]
    return message


def serialize_validation_errors(errors: list) -> list:
    """Flatten Pydantic errors into [{"field", "message"}], keeping every entry."""
    return [
        {
            "field": _field_from_loc(tuple(error.get("loc", ()))),
            "message": _clean_message(str(error.get("msg", "Invalid value"))),
        }
        for error in errors
    ]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors."""
    errors = exc.errors()
    details = serialize_validation_errors(errors)

    in_query = any(tuple(error.get("loc", ()))[:1] == ("query",) for error in errors)
    message = "Invalid query parameters" if in_query else "Validation error"

    logger.warning(
        f"Validation error: {details}",
        extra={
            "path": request.url.path,
            "errors": details,
        },
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message, details),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(
        f"Unhandled exception: {str(exc)}",
        extra={
            "path": request.url.path,
            "exception_type": type(exc).__name__,
        },
    )

    body = _error_body("Internal server error")
    if settings.is_development:
        body["error"] = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
