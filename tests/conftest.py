"""Shared pytest fixtures for the cineAssist test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from cineassist.interfaces.catalog_provider import ICatalogProvider
from cineassist.interfaces.llm_provider import ILLMProvider
from cineassist.models.movie import CatalogPage
from cineassist.providers.cache.memory_cache import MemoryCacheProvider
from cineassist.utils.logging import configure_logging


def _detail_record(movie_id: int, language: str = "pt-BR", append_fields: tuple[str, ...] = ()) -> dict[str, Any]:
    return {
        "id": movie_id,
        "title": f"Filme {movie_id}",
        "overview": f"Sinopse do filme {movie_id}.",
        "poster_path": f"/poster{movie_id}.jpg",
        "release_date": f"{1990 + movie_id % 30}-06-15",
        "vote_average": 7.0 + (movie_id % 3) / 10,
    }


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_logging():
    """Restore the default stdout logging after each test.

    Tests that capture output may point logging at a stream that is
    closed once they finish.
    """
    yield
    configure_logging()


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def empty_page() -> CatalogPage:
    return CatalogPage(results=[], page=1, total_pages=1, total_results=0)


@pytest.fixture
def mock_catalog(empty_page: CatalogPage) -> MagicMock:
    """A catalog whose search endpoints all return nothing.

    Tests override individual methods with the results they need.
    ``get_details`` echoes a small synthetic record for any id.
    """
    catalog = MagicMock(spec=ICatalogProvider)
    catalog.search_movies = AsyncMock(return_value=empty_page)
    catalog.search_multi = AsyncMock(return_value=empty_page)
    catalog.search_collection = AsyncMock(return_value=empty_page)
    catalog.get_collection_parts = AsyncMock(return_value=[])
    catalog.discover = AsyncMock(return_value=empty_page)
    catalog.get_details = AsyncMock(side_effect=_detail_record)
    catalog.trending = AsyncMock(return_value=empty_page)
    catalog.raw_get = AsyncMock(return_value={})
    catalog.get_provider_name.return_value = "tmdb"
    catalog.is_available.return_value = True
    return catalog


@pytest.fixture
def make_movies():
    """Factory for raw search items with ids ``start .. start+count-1``."""

    def _make(count: int, start: int = 1, **extra: Any) -> list[dict[str, Any]]:
        return [
            {"id": movie_id, "title": f"Filme {movie_id}", "popularity": float(count - i), **extra}
            for i, movie_id in enumerate(range(start, start + count))
        ]

    return _make


# ---------------------------------------------------------------------------
# LLM fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm() -> MagicMock:
    """An available completion provider that answers with a short sentence."""
    llm = MagicMock(spec=ILLMProvider)
    llm.complete = AsyncMock(return_value="Que tal Filme 1? Ótima escolha para hoje.")
    llm.get_provider_name.return_value = "openai"
    llm.is_available.return_value = True
    return llm


# ---------------------------------------------------------------------------
# Cache fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def memory_cache() -> MemoryCacheProvider:
    return MemoryCacheProvider(max_size=100, ttl=300)
