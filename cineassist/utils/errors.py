"""Custom exception hierarchy for cineAssist.

All application exceptions inherit from :class:`CineAssistError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "tmdb", "openai") caused the failure.

The hierarchy follows the error taxonomy of the request paths:

    CineAssistError  (base -- catch-all for any cineAssist error)
    +-- InvalidQueryError      (missing/invalid input, rejected before any upstream call)
    +-- CatalogProviderError   (non-success response from the movie catalog)
    +-- LLMError               (any text-completion call failure)
    +-- ConfigurationError     (startup / missing credentials)

The API middleware maps each class to an HTTP status: validation errors
become 400, catalog errors keep the upstream status code, everything else
is a 500.
"""

from __future__ import annotations

from typing import Any


class CineAssistError(Exception):
    """Base exception for all cineAssist errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[tmdb] Upstream returned 401``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Input validation
# ---------------------------------------------------------------------------

class InvalidQueryError(CineAssistError):
    """Raised when a required request parameter is missing or malformed.

    Always raised before any upstream call is issued.
    """

    def __init__(
        self,
        message: str = "Invalid or missing query",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# External service / provider errors
# ---------------------------------------------------------------------------

class CatalogProviderError(CineAssistError):
    """Raised when the movie catalog answers with a non-success status.

    ``status_code`` and ``payload`` mirror the upstream response so the
    API layer can propagate them to the client unchanged.  Transport
    failures (DNS, connection reset, timeout) use ``status_code=502``.
    """

    def __init__(
        self,
        message: str = "Movie catalog request failed",
        provider_name: str | None = None,
        status_code: int = 502,
        payload: Any = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._status_code = status_code
        self._payload = payload

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def payload(self) -> Any:
        return self._payload


class LLMError(CineAssistError):
    """Raised when an LLM API call fails or returns an unusable response."""

    def __init__(
        self,
        message: str = "LLM API call failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(CineAssistError):
    """Raised when configuration is invalid or missing (e.g. no TMDB key)."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
