"""Centralized error handling.

Every failure leaving the API is shaped into the same envelope used for
successful responses, with ``status`` set to ``"error"``. Domain errors carry
their own ``kind`` which decides the HTTP status; database and unexpected
errors are logged with request context and reported without internals.
"""

import logging
from uuid import UUID, uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from handbook.core.response import error_content
from handbook.exceptions import DomainError, ErrorKind


logger = logging.getLogger(__name__)


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.MISSING_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_PARAMETER: status.HTTP_400_BAD_REQUEST,
    ErrorKind.DATA_INTEGRITY: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.AUTHENTICATION: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.AUTHORIZATION: status.HTTP_403_FORBIDDEN,
}

# Client-facing summaries for kinds whose detail stays server side
GENERIC_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.DATA_INTEGRITY: "Stored progress data is corrupted",
    ErrorKind.STORE_UNAVAILABLE: "Data store is unavailable",
}


def format_error_response(status_code: int, message: str, error: str | None = None) -> JSONResponse:
    """Format a consistent error envelope."""
    return JSONResponse(status_code=status_code, content=error_content(message, error))


async def handle_domain_errors(request: Request, exc: DomainError) -> JSONResponse:
    """Map a tagged domain error onto its HTTP status."""
    status_code = STATUS_BY_KIND.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")

    return format_error_response(status_code, GENERIC_MESSAGES.get(exc.kind, exc.message), exc.message)


async def handle_validation_errors(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request body/path/query validation failures."""
    logger.info(f"Validation error on {request.method} {request.url.path}", extra={"error": str(exc)})

    fields = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        fields.append(f"{field}: {error['msg']}")

    return format_error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Invalid input data",
        "; ".join(fields),
    )


async def handle_http_errors(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap routing errors (unknown path, wrong method) in the envelope."""
    logger.info(f"HTTP {exc.status_code} on {request.method} {request.url.path}: {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_content(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_database_errors(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Handle database errors that escaped the store layer."""
    logger.exception(
        f"Database error on {request.method} {request.url.path}: {exc}",
        extra={"error_type": type(exc).__name__},
        exc_info=(type(exc), exc, exc.__traceback__),
    )

    if isinstance(exc, OperationalError):
        return format_error_response(status.HTTP_503_SERVICE_UNAVAILABLE, "Database connection error")

    return format_error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "A database error occurred")


async def handle_unexpected_errors(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; never exposes internal details."""
    error_id = uuid4()
    log_error_context(request, exc, error_id)

    return format_error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred",
        f"Internal error (reference {error_id})",
    )


def log_error_context(request: Request, exc: Exception, error_id: UUID | None = None) -> None:
    """Log comprehensive error context for debugging."""
    context = {
        "error_id": str(error_id) if error_id else None,
        "method": request.method,
        "path": request.url.path,
        "query_params": dict(request.query_params),
        "client_host": request.client.host if request.client else "unknown",
        "error_type": type(exc).__name__,
        "error_message": str(exc),
    }

    safe_headers = {
        k: v for k, v in request.headers.items() if k.lower() not in ["authorization", "cookie", "x-api-key"]
    }
    context["headers"] = safe_headers

    logger.error("Request failed", extra=context, exc_info=exc)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all envelope-producing handlers to the app."""
    app.add_exception_handler(DomainError, handle_domain_errors)
    app.add_exception_handler(RequestValidationError, handle_validation_errors)
    app.add_exception_handler(StarletteHTTPException, handle_http_errors)
    app.add_exception_handler(SQLAlchemyError, handle_database_errors)
    app.add_exception_handler(Exception, handle_unexpected_errors)
