"""cineAssist API layer: routes, schemas, and middleware."""

from cineassist.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from cineassist.api.routes import router
from cineassist.api.schemas import (
    AssistantRequest,
    AssistantStatusResponse,
    ErrorResponse,
    HealthResponse,
)

__all__ = [
    "ErrorHandlingMiddleware",
    "RequestLoggingMiddleware",
    "configure_cors",
    "router",
    "AssistantRequest",
    "AssistantStatusResponse",
    "ErrorResponse",
    "HealthResponse",
]
