"""
Global exception handlers and custom exception classes.

Every application error carries two layers of information: a public message
that is safe to send to clients, and an internal reason/detail pair that is
only ever logged.
"""
from typing import Optional

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

# Set up logging
logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.

    Attributes:
        status_code: HTTP status returned to the client
        public_message: Message rendered in the response body
        reason: Short machine-readable cause, logged only
        detail: Free-form internal context, logged only
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(
        self,
        public_message: Optional[str] = None,
        *,
        reason: Optional[str] = None,
        detail: Optional[str] = None,
    ):
        self.public_message = public_message or self.default_message
        self.reason = reason
        self.detail = detail
        super().__init__(self.public_message)

    @property
    def kind(self) -> str:
        return type(self).__name__

    def __repr__(self):
        return f"<{self.kind}(reason={self.reason!r}, message={self.public_message!r})>"


class InvalidCredentials(AppException):
    """Raised when a login attempt fails, whatever the cause."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid username or password"


class Unauthenticated(AppException):
    """Raised when a request carries no usable identity."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication failed"


class Forbidden(AppException):
    """Raised when the caller's role does not allow the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Permission denied"


class NotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class DuplicateAccount(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Username or email already registered"


class RequestInvalid(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request data"


class InternalServerError(AppException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        f"{exc.kind} on {request.method} {request.url.path}: "
        f"reason={exc.reason} detail={exc.detail}"
    )
    return error_response(exc.status_code, exc.public_message)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """
    Handler for framework-level HTTP errors (unknown routes, wrong methods).
    """
    logger.warning(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Bad input is a client fault, so it is reported as 400 with a generic
    message; the field-level errors stay in the log.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
    return error_response(RequestInvalid.status_code, RequestInvalid.default_message)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Handler for anything no other handler claimed. The error is logged with
    its traceback; the client only sees the generic server error.
    """
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return error_response(InternalServerError.status_code, InternalServerError.default_message)


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
