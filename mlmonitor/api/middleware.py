"""API middleware - CORS, request logging, and error handling.

Provides helper functions and middleware classes to configure cross-origin
resource sharing, structured request logging (via structlog), and
conversion of ``MLMonitorError`` subclasses into JSON ``ErrorResponse``
bodies.

# ─── MIDDLEWARE EXECUTION ORDER ────────────────────────────────────────
#
# Starlette middleware is a stack (LIFO - last added, first executed):
#
#   In main.py:
#     app.add_middleware(ErrorHandlingMiddleware)   # added 1st → inner
#     app.add_middleware(RequestLoggingMiddleware)   # added 2nd → outer
#
#   Request flow:
#     Client → RequestLogging → ErrorHandling → route handler
#
# So RequestLoggingMiddleware sees the final status code, including the
# one chosen by ErrorHandlingMiddleware.
#
# Status mapping (from ``MLMonitorError.http_status``):
#   PayloadValidationError → 400, NotFoundError → 404, everything else → 500.
# Request bodies FastAPI cannot decode also map to 400 via
# ``validation_exception_handler``.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from mlmonitor.api.schemas import ErrorResponse
from mlmonitor.utils.errors import FlagUpdateError, MLMonitorError
from mlmonitor.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware; defaults to ``["*"]`` for development."""
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ---------------------------------------------------------------------------
# Request Logging
# ---------------------------------------------------------------------------


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every HTTP request with method, path, status code, and duration."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None

        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = response.status_code if response else 500
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                status=status_code,
                duration_ms=duration_ms,
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


def error_response(exc: MLMonitorError) -> JSONResponse:
    """Build the JSON response for an application error."""
    body = ErrorResponse(
        error=type(exc).__name__,
        detail=exc.message,
        feedback_id=exc.feedback_id if isinstance(exc, FlagUpdateError) else None,
    )
    return JSONResponse(status_code=exc.http_status, content=body.model_dump())


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catch ``MLMonitorError`` subclasses and return structured JSON errors.

    The full cause is logged server-side; the client only sees the error
    class name and message.  Non-application exceptions bubble up to
    FastAPI's default 500 handler.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except MLMonitorError as exc:
            log = _logger.warning if exc.http_status < 500 else _logger.error
            log(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                store=exc.store_name,
                status=exc.http_status,
                path=str(request.url.path),
            )
            return error_response(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Answer undecodable or mistyped request bodies with 400."""
    _logger.warning(
        "request_validation_failed",
        path=str(request.url.path),
        errors=len(exc.errors()),
    )
    body = ErrorResponse(
        error="PayloadValidationError",
        detail="Invalid JSON",
    )
    return JSONResponse(status_code=400, content=body.model_dump())


def configure_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
