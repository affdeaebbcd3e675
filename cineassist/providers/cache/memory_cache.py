"""In-memory cache provider using cachetools.TLRUCache.

Entries expire after a time-to-live (five minutes by default, matching
the catalog response policy) and the cache never holds more than
``max_size`` entries.  Not shared across processes.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any, NamedTuple

import structlog
from cachetools import TLRUCache

from cineassist.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)

_DEFAULT_TTL_SECONDS = 300


class _Entry(NamedTuple):
    value: Any
    ttl: int


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL cache with optional per-entry time-to-live.

    Parameters
    ----------
    max_size:
        Maximum number of entries held at once.
    ttl:
        Default time-to-live in seconds for entries stored without one.
    timer:
        Clock used for expiry; injectable for tests.
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl: int = _DEFAULT_TTL_SECONDS,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = ttl
        self._cache: TLRUCache[str, _Entry] = TLRUCache(
            maxsize=max_size,
            ttu=lambda _key, entry, now: now + entry.ttl,
            timer=timer,
        )

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> Any | None:
        entry = self._cache.get(key)
        if entry is None:
            logger.debug("cache_miss", key=key)
            return None
        logger.debug("cache_hit", key=key)
        return entry.value

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._cache[key] = _Entry(value, ttl if ttl is not None else self._default_ttl)
        logger.debug("cache_set", key=key)

    async def delete(self, key: str) -> None:
        self._cache.pop(key, None)
        logger.debug("cache_delete", key=key)

    async def exists(self, key: str) -> bool:
        return key in self._cache
