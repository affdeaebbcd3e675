"""API middleware: CORS, request logging and error handling.

Starlette middleware is a stack (last added, first executed).  ``main.py``
adds ``ErrorHandlingMiddleware`` first and ``RequestLoggingMiddleware``
second, so the request flows

    Client → RequestLogging → ErrorHandling → route handler

and the logging middleware sees the final status code, including the one
chosen by the error handler.
"""

from __future__ import annotations

import time

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from cineassist.api.schemas import ErrorResponse
from cineassist.utils.errors import CatalogProviderError, CineAssistError, InvalidQueryError
from cineassist.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------


def configure_cors(app: FastAPI, *, allowed_origins: list[str] | None = None) -> None:
    """Add CORS middleware to the FastAPI application.

    Parameters
    ----------
    app:
        The FastAPI application instance.
    allowed_origins:
        Explicit list of allowed origins.  Defaults to ``["*"]``.
    """
    origins = allowed_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        # Browsers reject credentials together with a wildcard origin.
        allow_credentials=origins != ["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
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
            _logger.info(
                "http_request",
                method=request.method,
                path=str(request.url.path),
                query=str(request.url.query) or None,
                status=response.status_code if response else 500,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )


# ---------------------------------------------------------------------------
# Error Handling
# ---------------------------------------------------------------------------


def error_response(exc: Exception) -> JSONResponse:
    """Map an exception onto the JSON error body and HTTP status sent to clients.

    ========================  ===========================================
    InvalidQueryError         400, message as ``detail``
    CatalogProviderError      upstream status, upstream body in ``details``
    other CineAssistError     500, message as ``detail``
    anything else             500, generic message
    ========================  ===========================================
    """
    if isinstance(exc, InvalidQueryError):
        status_code = 400
        body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
    elif isinstance(exc, CatalogProviderError):
        status_code = exc.status_code if 400 <= exc.status_code < 600 else 502
        body = ErrorResponse(error=type(exc).__name__, detail=exc.message, details=exc.payload)
    elif isinstance(exc, CineAssistError):
        status_code = 500
        body = ErrorResponse(error=type(exc).__name__, detail=exc.message)
    else:
        status_code = 500
        body = ErrorResponse(error="InternalServerError", detail="Erro interno do servidor.")
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Convert exceptions into structured JSON errors.

    Stack traces of unexpected exceptions are logged server-side only and
    never leaked to the client.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await call_next(request)
        except CineAssistError as exc:
            _logger.warning(
                "application_error",
                error_type=type(exc).__name__,
                message=exc.message,
                provider=exc.provider_name,
                path=str(request.url.path),
            )
            return error_response(exc)
        except Exception as exc:
            _logger.exception(
                "unhandled_error",
                error_type=type(exc).__name__,
                path=str(request.url.path),
            )
            return error_response(exc)
