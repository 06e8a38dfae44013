"""
Centralized error handling and user-friendly error messages.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from .result import CONFLICT, INTERNAL_ERROR, NOT_FOUND, UNAUTHENTICATED, VALIDATION_ERROR, Err

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base application error."""
    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: dict | None = None,
        headers: dict | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    """Missing or malformed input."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class UnauthenticatedError(AppError):
    """Missing, invalid or expired credentials."""
    def __init__(self, message: str = "Unauthorized access", details: dict | None = None):
        super().__init__(
            message,
            status_code=401,
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Resource not found", details: dict | None = None):
        super().__init__(message, status_code=404, details=details)


class ConflictError(AppError):
    """Duplicate email or duplicate application. The public API reports these as 400."""
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, status_code=400, details=details)


class InternalError(AppError):
    """Persistence or unexpected failure."""
    def __init__(self, message: str = "Internal server error", details: dict | None = None):
        super().__init__(message, status_code=500, details=details)


# User-friendly error messages
ERROR_MESSAGES = {
    # Authentication
    "invalid_credentials": "Invalid email or password",
    "email_exists": "User already exists",
    "weak_password": "Password must be at least 6 characters",
    "unauthorized": "Not authorized, token missing or invalid",

    # Jobs
    "job_id_required": "Job ID is required",
    "job_not_found": "Job not found",
    "invalid_job_data": "JobTitle, Location, and Description are required",

    # Applications
    "already_applied": "You have already applied for this job",

    # General
    "server_error": "Something went wrong on our end. Please try again later.",
    "database_error": "Database connection issue. Please try again later.",
    "validation_error": "Please check your input and try again.",
}

_ERRORS_BY_CODE = {
    VALIDATION_ERROR: ValidationError,
    UNAUTHENTICATED: UnauthenticatedError,
    NOT_FOUND: NotFoundError,
    CONFLICT: ConflictError,
    INTERNAL_ERROR: InternalError,
}


def get_error_message(error_key: str, default: str | None = None) -> str:
    """Get a user-friendly error message."""
    return ERROR_MESSAGES.get(error_key, default or ERROR_MESSAGES["server_error"])


def to_app_error(err: Err) -> AppError:
    """Map a failed core result onto its HTTP-facing error."""
    error_cls = _ERRORS_BY_CODE.get(err.code, InternalError)
    return error_cls(err.message, details=err.details)


def raise_for_error(err: Err) -> None:
    raise to_app_error(err)


def handle_database_error(error: Exception, operation: str = "") -> AppError:
    """Handle database errors with user-friendly messages."""
    logger.error(f"Database error during {operation}: {error}")

    error_str = str(error).lower()

    if "duplicate" in error_str or "unique" in error_str:
        return ConflictError("This record already exists. Please check your input.")

    if "foreign key" in error_str:
        return ValidationError("Invalid reference. The related record may have been deleted.")

    if "connection" in error_str or "operational" in error_str:
        return AppError(get_error_message("database_error"), status_code=503)

    return InternalError(get_error_message("server_error"), details={"error": str(error)})


def create_error_response(
    status_code: int,
    message: str,
    details: dict | None = None,
    headers: dict | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content = {
        "success": False,
        "error": message,
    }

    if details:
        content["details"] = details

    return JSONResponse(
        status_code=status_code,
        content=content,
        headers=headers,
    )


async def app_error_handler(request: Request, exc: AppError):
    return create_error_response(exc.status_code, exc.message, exc.details, exc.headers)


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTPException with user-friendly messages."""
    return create_error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON bodies are a plain 400, same as missing fields."""
    logger.info("Request validation failed on %s: %s", request.url.path, exc.errors())
    fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
    return create_error_response(
        400,
        get_error_message("validation_error"),
        details={"fields": [f for f in fields if f]},
    )


async def sqlalchemy_operational_error_handler(request: Request, exc: OperationalError):
    """Handle database operational errors."""
    logger.exception("Database OperationalError: %s", exc)
    root = getattr(exc, "orig", None)
    return create_error_response(
        503,
        get_error_message("database_error"),
        details={"error": str(root) if root else str(exc)},
    )


async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    """Handle general database errors."""
    logger.exception("Database SQLAlchemyError: %s", exc)
    return create_error_response(500, get_error_message("database_error"), details={"error": str(exc)})


async def global_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors globally. The message is returned, the traceback only logged."""
    logger.exception("Unhandled exception: %s", exc)
    return create_error_response(500, get_error_message("server_error"), details={"error": str(exc)})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(OperationalError, sqlalchemy_operational_error_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
