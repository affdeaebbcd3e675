"""Abstract base class for cache providers.

Key-value store with time-boxed expiry used for upstream catalog
responses and cascade results.  The in-memory implementation lives in
``cineassist/providers/cache``; a shared backend (Redis, memcached) can
replace it without touching the services.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ICacheProvider(ABC):
    """Contract for key-value cache services.

    All operations are async so network-backed stores fit the same
    interface without blocking the event loop.
    """

    @abstractmethod
    async def get(self, key: str) -> Any | None:
        """Return the value stored under *key*, or ``None`` if missing or expired."""

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store *value* under *key*.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.
        ttl:
            Time-to-live in seconds; ``None`` uses the backend's default.
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove *key*; no-op when absent."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Return ``True`` if *key* is present and not expired."""
