"""
Global exception handlers and custom exception classes.

Every failure leaves the API as ``{"error": ..., "details": ...}``; request
validation failures carry a list of ``{"path", "message"}`` entries.
"""
from typing import Any, List, Optional, Union
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
import logging

# Set up logging
logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds in front of the offending field
_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, error: str, details: Optional[Any] = None):
        super().__init__(error)
        self.status_code = status_code
        self.error = error
        self.details = details


class ValidationException(AppException):
    """Raised when a payload is well-formed JSON but semantically invalid."""
    def __init__(self, error: str = "Validation failed", details: Optional[Any] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, error, details)


class NotFoundException(AppException):
    """
    Raised when a referenced entity does not exist.

    When ``field`` is given, the response names the payload field that held
    the dangling reference.
    """
    def __init__(self, error: str = "Resource not found", field: Optional[str] = None):
        details = f"{field} does not reference an existing record" if field else None
        super().__init__(status.HTTP_404_NOT_FOUND, error, details)
        self.field = field


class ConflictException(AppException):
    """Raised when a unique field (e.g. email) is already taken."""
    def __init__(self, error: str = "Conflict", details: Optional[Any] = None):
        super().__init__(status.HTTP_409_CONFLICT, error, details)


class PreconditionException(AppException):
    """Raised when an operation is refused because of the current data state."""
    def __init__(self, error: str, details: Optional[Any] = None):
        super().__init__(status.HTTP_400_BAD_REQUEST, error, details)


class InternalServerException(AppException):
    """Raised when the store fails unexpectedly; the transaction is rolled back."""
    def __init__(self, error: str = "Internal server error", details: Optional[Any] = None):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, error, details)


def error_body(error: str, details: Optional[Any] = None) -> dict:
    """Build the JSON body shared by every error response."""
    body = {"error": error}
    if details is not None:
        body["details"] = details
    return body


def format_validation_errors(errors: List[dict]) -> List[dict]:
    """
    Convert pydantic error dictionaries into ``{"path", "message"}`` entries.

    Args:
        errors: Output of ``exc.errors()``

    Returns:
        List of field-level messages with dotted paths
    """
    formatted = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _LOCATION_SOURCES:
            loc = loc[1:]
        formatted.append({
            "path": ".".join(str(part) for part in loc),
            "message": err.get("msg", "Invalid value"),
        })
    return formatted


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.error} ({exc.details})")
    else:
        logger.info(f"Request rejected on {request.method} {request.url.path}: {exc.status_code} {exc.error}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error, exc.details)
    )


async def validation_exception_handler(request: Request, exc: Union[RequestValidationError, ValidationError]):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: 400 response with field-level validation details
    """
    details = format_validation_errors(exc.errors())
    logger.info(f"Validation error on {request.method} {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", details)
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Last-resort handler so unexpected failures still use the error shape.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error", str(exc))
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
