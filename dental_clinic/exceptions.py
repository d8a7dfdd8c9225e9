"""
Global exception handlers and custom exception classes.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
import logging

from .core.context import ContextMissingError

# Set up logging
logger = logging.getLogger(__name__)


class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail


class NotFoundException(AppException):
    """
    Raised when an entity is absent, soft-deleted, or owned by another tenant.

    The three cases share one response so callers cannot probe for other
    tenants' records.
    """
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class NotLinkedException(AppException):
    """Raised when unlinking a user that has no staff profile attached."""
    def __init__(self, detail: str = "User is not linked to a staff profile"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class AlreadyLinkedException(AppException):
    """Raised when either side of a link already points to another partner."""
    def __init__(self, detail: str = "User or staff profile is already linked"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.

    These are client-correctable conditions, so they are logged as warnings
    rather than server errors.

    Args:
        request: The request that caused the exception
        exc: The exception instance

    Returns:
        JSONResponse: Standardized error response
    """
    logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail}
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.

    Args:
        request: The request that caused the exception
        exc: The validation exception instance

    Returns:
        JSONResponse: Standardized error response with validation details
    """
    logger.info(f"Validation error on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "detail": "Validation error",
            "errors": jsonable_errors(exc)
        }
    )


async def context_missing_handler(request: Request, exc: ContextMissingError):
    """
    Handler for tenant-scoped code running outside an authenticated request.

    This is a wiring defect, never a client error: it is logged with its
    stack trace and answered with a 500.
    """
    logger.exception(f"Request context missing while handling {request.method} {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"}
    )


def jsonable_errors(exc: RequestValidationError):
    """Strip non-serializable context (e.g. exception instances) from validation errors."""
    return [
        {key: value for key, value in error.items() if key != "ctx"}
        for error in exc.errors()
    ]


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ContextMissingError, context_missing_handler)
