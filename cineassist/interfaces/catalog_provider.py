"""Abstract base class for movie-catalog service providers.

Defines the contract the search core uses to talk to an upstream movie
catalog (TMDB in production).  Every method is a remote call against a
paginated upstream API; the core treats the provider as a black box and
only reads ``id``, ``popularity`` and ``media_type`` from result items.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from cineassist.models.movie import CatalogPage, DiscoverFilters


class ICatalogProvider(ABC):
    """Contract for paginated movie search, discovery and detail lookups.

    Implementations raise :class:`~cineassist.utils.errors.CatalogProviderError`
    for any non-success upstream response, carrying the upstream status code
    and payload.
    """

    @abstractmethod
    async def search_movies(self, query: str, language: str, page: int = 1) -> CatalogPage:
        """Keyword search restricted to movies.

        Parameters
        ----------
        query:
            Free-text search string.
        language:
            Locale tag for localized titles/overviews (e.g. ``"pt-BR"``).
        page:
            1-based upstream page number.
        """

    @abstractmethod
    async def search_multi(self, query: str, language: str, page: int = 1) -> CatalogPage:
        """Search movies, people and TV shows at once.

        Items carry a ``media_type`` key; callers filter what they need.
        """

    @abstractmethod
    async def search_collection(self, query: str, language: str, page: int = 1) -> CatalogPage:
        """Search movie collections (franchises) by name."""

    @abstractmethod
    async def get_collection_parts(self, collection_id: int, language: str) -> list[dict[str, Any]]:
        """Return the member movies of a collection, in upstream order.

        An unknown collection yields an empty list rather than an error.
        """

    @abstractmethod
    async def discover(self, filters: DiscoverFilters, language: str, page: int = 1) -> CatalogPage:
        """Run a filtered discovery query built from *filters*."""

    @abstractmethod
    async def get_details(
        self,
        movie_id: int,
        language: str,
        append_fields: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        """Fetch the full record of one movie.

        Parameters
        ----------
        movie_id:
            Upstream movie identifier.
        language:
            Locale tag for localized fields.
        append_fields:
            Sub-resources to embed in the same response (``credits``,
            ``videos``, ``reviews``, ...).
        """

    @abstractmethod
    async def trending(self, language: str, window: str = "day") -> CatalogPage:
        """Return the trending movies for the given time *window* (``day``/``week``)."""

    @abstractmethod
    async def raw_get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Issue a read-only GET against an arbitrary catalog *path* and return the JSON body."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for logs and error messages (e.g. ``"tmdb"``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider has the credentials it needs."""
