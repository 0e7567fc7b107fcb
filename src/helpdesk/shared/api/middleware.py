"""
Shared API Middleware
======================

Request tracing middleware and the exception handlers that turn
application errors into JSON responses.
"""

import time
import uuid
from datetime import datetime, timezone
from typing import Callable

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from helpdesk.config import settings
from helpdesk.core import (
    AccessDeniedException,
    ApplicationException,
    ResourceNotFoundException,
    StoreUnavailableException,
    ValidationException,
)
from helpdesk.shared.infrastructure.logging import (
    bind_request_context,
    get_logger,
    reset_request_context,
)

logger = get_logger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
DEPARTMENT_HEADER = "X-User-Department"


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Gives each request a correlation id and binds it, with the caller
    department, to every log record written while the request runs.

    Must be the outermost middleware so the others log under the same id.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id

        token = bind_request_context(correlation_id, request.headers.get(DEPARTMENT_HEADER))
        try:
            response = await call_next(request)
        finally:
            reset_request_context(token)

        response.headers[CORRELATION_HEADER] = correlation_id
        return response


class ResponseTimeMiddleware(BaseHTTPMiddleware):
    """Adds the handler latency as a response header."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Response-Time"] = f"{time.perf_counter() - start_time:.3f}s"
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """One line when a request starts and one when it ends or fails."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        logger.info("Request started", extra={"method": request.method, "path": request.url.path})

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "error": str(e),
                    "response_time_ms": int((time.perf_counter() - start_time) * 1000)
                }
            )
            raise

        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": int((time.perf_counter() - start_time) * 1000)
            }
        )
        return response


def _error_body(request: Request, exc: ApplicationException, detail: str) -> dict:
    return {
        "success": False,
        "detail": detail,
        "error_type": type(exc).__name__,
        "correlation_id": getattr(request.state, "correlation_id", "unknown"),
        "details": exc.details,
    }


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """
    Maps application exceptions to HTTP responses.

    AccessDenied -> 403, NotFound -> 404, Validation -> 422,
    StoreUnavailable -> 503, anything else -> 500.
    """
    if isinstance(exc, AccessDeniedException):
        status_code, detail = status.HTTP_403_FORBIDDEN, "Access denied"
    elif isinstance(exc, ResourceNotFoundException):
        status_code, detail = status.HTTP_404_NOT_FOUND, exc.message
    elif isinstance(exc, ValidationException):
        status_code, detail = 422, exc.message
    elif isinstance(exc, StoreUnavailableException):
        status_code, detail = status.HTTP_503_SERVICE_UNAVAILABLE, "Failed to load data"
    else:
        status_code, detail = status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message

    logger.warning(
        "Request rejected",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "path": request.url.path,
            "status_code": status_code,
            "error_type": type(exc).__name__,
            "error_message": exc.message,
        }
    )
    return JSONResponse(status_code=status_code, content=_error_body(request, exc, detail))


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for unhandled exceptions.

    Returns consistent error responses for all exceptions.
    """
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": correlation_id,
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    )

    # Exception text only leaves the process in development
    is_dev = settings.environment == "development"

    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "detail": "Internal server error",
            "correlation_id": correlation_id,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "debug_info": str(exc) if is_dev else None
        }
    )
