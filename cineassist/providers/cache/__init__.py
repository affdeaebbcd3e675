"""Cache providers.

In-memory TTL cache used to avoid repeating identical TMDB requests and
cascade runs within the five-minute freshness window.  For multi-worker
deployments, swap in a shared backend implementing ICacheProvider.
"""

from cineassist.providers.cache.memory_cache import MemoryCacheProvider

__all__ = ["MemoryCacheProvider"]
