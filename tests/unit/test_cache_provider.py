"""Unit tests for the in-memory TTL cache provider."""

from __future__ import annotations

import pytest

from cineassist.providers.cache.memory_cache import MemoryCacheProvider


class _FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_set_then_get(memory_cache: MemoryCacheProvider) -> None:
    await memory_cache.set("movie:603", {"id": 603})
    assert await memory_cache.get("movie:603") == {"id": 603}
    assert await memory_cache.exists("movie:603") is True


@pytest.mark.asyncio
async def test_missing_key(memory_cache: MemoryCacheProvider) -> None:
    assert await memory_cache.get("nope") is None
    assert await memory_cache.exists("nope") is False


@pytest.mark.asyncio
async def test_delete(memory_cache: MemoryCacheProvider) -> None:
    await memory_cache.set("popular:day", [1, 2])
    await memory_cache.delete("popular:day")
    await memory_cache.delete("popular:day")
    assert await memory_cache.get("popular:day") is None


@pytest.mark.asyncio
async def test_default_ttl_expiry() -> None:
    clock = _FakeClock()
    cache = MemoryCacheProvider(max_size=10, ttl=300, timer=clock)
    await cache.set("k", "v")

    clock.now += 299
    assert await cache.get("k") == "v"
    clock.now += 2
    assert await cache.get("k") is None


@pytest.mark.asyncio
async def test_per_entry_ttl() -> None:
    clock = _FakeClock()
    cache = MemoryCacheProvider(max_size=10, ttl=300, timer=clock)
    await cache.set("short", 1, ttl=10)
    await cache.set("long", 2)

    clock.now += 11
    assert await cache.get("short") is None
    assert await cache.get("long") == 2


@pytest.mark.asyncio
async def test_max_size_is_enforced() -> None:
    cache = MemoryCacheProvider(max_size=2, ttl=300, timer=_FakeClock())
    await cache.set("a", 1)
    await cache.set("b", 2)
    await cache.set("c", 3)

    present = [key for key in ("a", "b", "c") if await cache.exists(key)]
    assert len(present) == 2
    assert "c" in present
