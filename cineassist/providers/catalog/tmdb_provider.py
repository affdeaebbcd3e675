"""The Movie Database (TMDB) v3 REST provider implementing ICatalogProvider.

All calls are plain GET requests authenticated with the ``api_key`` query
parameter.  The ``httpx.AsyncClient`` is injected so the application can
share one connection pool, and so tests can hand in a mock.

Error contract: any non-2xx response becomes a
:class:`CatalogProviderError` carrying the upstream status code and JSON
body; transport failures become a 502.  No retries here; the cascade
decides what an error means for the request.
"""

from __future__ import annotations

from typing import Any

import httpx

from cineassist.config.settings import Settings
from cineassist.interfaces.catalog_provider import ICatalogProvider
from cineassist.models.movie import CatalogPage, DiscoverFilters
from cineassist.utils.errors import CatalogProviderError, ConfigurationError
from cineassist.utils.logging import get_logger

_PROVIDER_NAME = "tmdb"


class TMDBCatalogProvider(ICatalogProvider):
    """Movie catalog backed by the TMDB v3 API.

    Parameters
    ----------
    http_client:
        Shared ``httpx.AsyncClient`` (timeouts are configured on the client).
    settings:
        Application settings; provides the API key and base URL.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._api_key = settings.tmdb_api_key
        self._base_url = settings.tmdb_base_url.rstrip("/")
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        if not self._api_key:
            raise ConfigurationError(
                message="TMDB_API_KEY is not configured",
                provider_name=_PROVIDER_NAME,
            )

        url = f"{self._base_url}/{path.lstrip('/')}"
        query = {**(params or {}), "api_key": self._api_key}
        try:
            response = await self._http.get(url, params=query)
        except httpx.HTTPError as exc:
            self._logger.warning("tmdb_request_failed", path=path, error=str(exc))
            raise CatalogProviderError(
                message=f"TMDB request to {path} failed: {exc}",
                provider_name=_PROVIDER_NAME,
                status_code=502,
            ) from exc

        if not 200 <= response.status_code < 300:
            try:
                payload = response.json()
            except ValueError:
                payload = response.text
            self._logger.warning("tmdb_http_error", path=path, status=response.status_code)
            raise CatalogProviderError(
                message=f"TMDB returned {response.status_code} for {path}",
                provider_name=_PROVIDER_NAME,
                status_code=response.status_code,
                payload=payload,
            )
        return response.json()

    @staticmethod
    def _to_page(data: dict[str, Any]) -> CatalogPage:
        results = data.get("results") or []
        return CatalogPage(
            results=results,
            page=data.get("page") or 1,
            total_pages=max(1, data.get("total_pages") or 1),
            total_results=data.get("total_results") or len(results),
        )

    # -- ICatalogProvider implementation ---------------------------------------

    async def search_movies(self, query: str, language: str, page: int = 1) -> CatalogPage:
        data = await self._get(
            "search/movie", {"query": query, "language": language, "page": page}
        )
        return self._to_page(data)

    async def search_multi(self, query: str, language: str, page: int = 1) -> CatalogPage:
        data = await self._get(
            "search/multi", {"query": query, "language": language, "page": page}
        )
        return self._to_page(data)

    async def search_collection(self, query: str, language: str, page: int = 1) -> CatalogPage:
        data = await self._get(
            "search/collection", {"query": query, "language": language, "page": page}
        )
        return self._to_page(data)

    async def get_collection_parts(self, collection_id: int, language: str) -> list[dict[str, Any]]:
        try:
            data = await self._get(f"collection/{collection_id}", {"language": language})
        except CatalogProviderError as exc:
            if exc.status_code == 404:
                return []
            raise
        return list(data.get("parts") or [])

    async def discover(self, filters: DiscoverFilters, language: str, page: int = 1) -> CatalogPage:
        params = {**filters.to_query_params(), "language": language, "page": page}
        data = await self._get("discover/movie", params)
        return self._to_page(data)

    async def get_details(
        self,
        movie_id: int,
        language: str,
        append_fields: tuple[str, ...] = (),
    ) -> dict[str, Any]:
        params: dict[str, Any] = {"language": language}
        if append_fields:
            params["append_to_response"] = ",".join(append_fields)
        return await self._get(f"movie/{movie_id}", params)

    async def trending(self, language: str, window: str = "day") -> CatalogPage:
        data = await self._get(f"trending/movie/{window}", {"language": language})
        return self._to_page(data)

    async def raw_get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        # The caller's params never override the server-side credential.
        safe_params = {k: v for k, v in (params or {}).items() if k != "api_key"}
        return await self._get(path, safe_params)

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._api_key)
