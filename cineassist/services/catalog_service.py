"""Cached catalog reads for the movie detail page and the home page.

Every read goes through the TTL cache first.  Keys:

    movie:<id>                      movie detail with credits, images, videos
    popular:day                     trending movies of the day
    tmdb:<path>?<sorted params>     read-only passthrough
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from cineassist.interfaces.cache_provider import ICacheProvider
from cineassist.interfaces.catalog_provider import ICatalogProvider
from cineassist.models.movie import CatalogPage
from cineassist.utils.errors import CatalogProviderError, InvalidQueryError
from cineassist.utils.logging import get_logger

_DETAIL_APPEND_FIELDS: tuple[str, ...] = ("credits", "images", "videos")


class CatalogService:
    """Read-through cache in front of an :class:`ICatalogProvider`."""

    def __init__(
        self,
        catalog: ICatalogProvider,
        cache: ICacheProvider,
        locale: str = "pt-BR",
        ttl: int = 300,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._locale = locale
        self._ttl = ttl
        self._logger = get_logger(__name__)

    async def movie_details(self, movie_id: int) -> dict[str, Any]:
        """Return the full record for *movie_id*.

        Raises
        ------
        InvalidQueryError
            If *movie_id* is not a positive integer.
        CatalogProviderError
            With ``status_code=404`` when the movie does not exist.
        """
        if movie_id < 1:
            raise InvalidQueryError(message="O id do filme deve ser um inteiro positivo.")

        cache_key = f"movie:{movie_id}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        try:
            details = await self._catalog.get_details(movie_id, self._locale, _DETAIL_APPEND_FIELDS)
        except CatalogProviderError as exc:
            if exc.status_code == 404:
                raise CatalogProviderError(
                    message="Filme não encontrado.",
                    provider_name=exc.provider_name,
                    status_code=404,
                    payload=exc.payload,
                ) from exc
            raise

        await self._cache.set(cache_key, details, ttl=self._ttl)
        return details

    async def popular(self) -> CatalogPage:
        """Return today's trending movies."""
        cache_key = "popular:day"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        page = await self._catalog.trending(self._locale, window="day")
        await self._cache.set(cache_key, page, ttl=self._ttl)
        return page

    async def passthrough(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Forward a read-only GET to the catalog and cache the JSON body."""
        path = (path or "").strip("/")
        if not path:
            raise InvalidQueryError(message="Caminho TMDB ausente.")

        query = {key: value for key, value in (params or {}).items() if key != "api_key"}
        cache_key = f"tmdb:{path}?{urlencode(sorted(query.items()))}"
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return cached

        self._logger.debug("tmdb_passthrough", path=path, params=sorted(query))
        body = await self._catalog.raw_get(path, query)
        await self._cache.set(cache_key, body, ttl=self._ttl)
        return body
