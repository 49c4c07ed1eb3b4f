"""
Exception handlers for the application.
"""
import logging
import sqlite3

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from tasklist.monitoring import get_request_id
from tasklist.exceptions.errors import (
    ServiceError,
    StoreError,
    to_http_status,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal server error"


def _request_context(request: Request) -> dict:
    return {
        "path": request.url.path,
        "method": request.method,
        "request_id": getattr(request.state, "request_id", None) or get_request_id() or '-',
    }


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.
    """
    context = _request_context(request)
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
        extra={**context, "error_type": type(exc).__name__}
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": INTERNAL_ERROR,
            "error_type": type(exc).__name__,
            "details": str(exc),
            **context,
        }
    )


async def sqlite_exception_handler(request: Request, exc: sqlite3.Error) -> JSONResponse:
    """
    Handler for SQLite errors that escaped the repository layer.
    """
    context = _request_context(request)
    logger.error(
        f"Database error in {request.method} {request.url.path}: {exc}",
        exc_info=True,
        extra={**context, "error_type": type(exc).__name__}
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": INTERNAL_ERROR,
            "error_type": type(exc).__name__,
            "details": str(exc),
            **context,
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors as 400 Bad Request.
    """
    context = _request_context(request)
    errors = []
    for error in exc.errors():
        field = " -> ".join(str(loc) for loc in error["loc"])
        errors.append(f"{field}: {error['msg']}")

    logger.warning(
        f"Validation error in {request.method} {request.url.path}: {', '.join(errors)}",
        extra=context
    )
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request",
            "error_type": "ValidationError",
            "details": "; ".join(errors),
            "errors": errors,
            **context,
        }
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """
    Handler for ServiceError exceptions.

    4xx errors are logged at WARNING, store failures at ERROR. Store
    failures use a generic message with the underlying error text as details.
    """
    context = _request_context(request)
    if not exc.request_id:
        exc.request_id = context["request_id"]

    status_code = to_http_status(exc)
    log_level = logging.WARNING if status_code < 500 else logging.ERROR
    logger.log(
        log_level,
        f"Service error in {request.method} {request.url.path}: {exc.message}",
        extra={**context, "error_type": exc.__class__.__name__}
    )

    content = exc.to_dict()
    if isinstance(exc, StoreError):
        content["error"] = INTERNAL_ERROR
        content["details"] = exc.details or exc.message
    content.update(context)
    return JSONResponse(status_code=status_code, content=content)


def setup_exception_handlers(app):
    """
    Register exception handlers with the FastAPI app.
    """
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(sqlite3.Error, sqlite_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
