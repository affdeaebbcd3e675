"""Utility modules for cineAssist.

- **errors**: exception hierarchy rooted at CineAssistError; the API
  middleware maps each subclass to an HTTP status.
- **logging**: structlog setup with a dual-renderer pattern: console
  output in development, structured JSON in production.
"""

from cineassist.utils.errors import (
    CatalogProviderError,
    CineAssistError,
    ConfigurationError,
    InvalidQueryError,
    LLMError,
)
from cineassist.utils.logging import configure_logging, get_logger

__all__ = [
    "CatalogProviderError",
    "CineAssistError",
    "ConfigurationError",
    "InvalidQueryError",
    "LLMError",
    "configure_logging",
    "get_logger",
]
