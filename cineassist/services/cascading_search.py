"""Cascading movie search with ordered fallback strategies.

Tries a fixed sequence of catalog strategies and keeps the first one
that returns anything:

    KEYWORD_PRIMARY   keyword search in the primary locale (pt-BR)
    KEYWORD_FALLBACK  keyword search in the fallback locale (en-US)
    MULTI             movies/people/shows search, movie entries only
    COLLECTION        franchise lookup, parts ranked by popularity
    DISCOVER          filtered discovery built by the filter extractor

When the filter extractor recognises a genre the query is descriptive
("drama cerebral") rather than a title, so the keyword stages are
skipped and discovery runs directly.

Architecture: Fallback Chain Pattern
-------------------------------------
Each stage is awaited before the next one is considered; there is no
fan-out.  A stage whose catalog call fails counts as empty and the chain
moves on.  Only when *every* attempted stage failed is the last provider
error re-raised, so a real upstream outage still reaches the client with
its status code instead of masquerading as "no results".

Assistant batches additionally enrich the selected slice with full
movie records, fetched one id at a time in slice order.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from cineassist.interfaces.cache_provider import ICacheProvider
from cineassist.interfaces.catalog_provider import ICatalogProvider
from cineassist.models.movie import (
    CascadeResult,
    CatalogPage,
    DiscoverFilters,
    RawSearchResult,
    SearchOutcome,
    SearchStage,
)
from cineassist.services.filter_extractor import extract_filters
from cineassist.services.result_aggregator import dedupe_by_id
from cineassist.utils.errors import CatalogProviderError, InvalidQueryError
from cineassist.utils.logging import get_logger

# Sub-resources embedded in each detail fetch for assistant batches.
DETAIL_APPEND_FIELDS: tuple[str, ...] = (
    "credits",
    "images",
    "videos",
    "release_dates",
    "external_ids",
    "keywords",
    "translations",
    "recommendations",
    "similar",
    "reviews",
)

_CASCADE_ORDER: tuple[SearchStage, ...] = (
    SearchStage.KEYWORD_PRIMARY,
    SearchStage.KEYWORD_FALLBACK,
    SearchStage.MULTI,
    SearchStage.COLLECTION,
    SearchStage.DISCOVER,
)

_StageFn = Callable[[str, DiscoverFilters], Awaitable[list[RawSearchResult]]]


class CascadingSearchEngine:
    """Runs the search cascade against an :class:`ICatalogProvider`.

    Parameters
    ----------
    catalog:
        Upstream movie catalog.
    cache:
        Optional cache for whole cascade results, keyed by normalised query.
    primary_locale / fallback_locale:
        Locales for the first and second keyword attempts.
    max_pages:
        Upstream pages gathered per stage before giving up on more.
    cache_ttl:
        Lifetime of cached cascade results, in seconds.
    filter_extractor:
        Free text → discovery filters; injectable for tests.
    """

    def __init__(
        self,
        catalog: ICatalogProvider,
        cache: ICacheProvider | None = None,
        primary_locale: str = "pt-BR",
        fallback_locale: str = "en-US",
        max_pages: int = 3,
        cache_ttl: int = 300,
        filter_extractor: Callable[[str], DiscoverFilters] = extract_filters,
    ) -> None:
        self._catalog = catalog
        self._cache = cache
        self._primary_locale = primary_locale
        self._fallback_locale = fallback_locale
        self._max_pages = max(1, max_pages)
        self._cache_ttl = cache_ttl
        self._extract_filters = filter_extractor
        self._logger = get_logger(__name__)
        self._strategies: dict[SearchStage, _StageFn] = {
            SearchStage.KEYWORD_PRIMARY: self._keyword_primary,
            SearchStage.KEYWORD_FALLBACK: self._keyword_fallback,
            SearchStage.MULTI: self._multi,
            SearchStage.COLLECTION: self._collection,
            SearchStage.DISCOVER: self._discover,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @staticmethod
    def stages_for(filters: DiscoverFilters) -> tuple[SearchStage, ...]:
        """Return the stages to try, in order, for a query with *filters*."""
        if filters.genre_id is not None:
            return (SearchStage.DISCOVER,)
        return _CASCADE_ORDER

    async def run_cascade(self, query: str) -> CascadeResult:
        """Return the results of the first non-empty stage for *query*.

        Raises
        ------
        InvalidQueryError
            If *query* is blank.
        CatalogProviderError
            If every attempted stage failed upstream.
        """
        query = (query or "").strip()
        if not query:
            raise InvalidQueryError(message="O parâmetro 'query' é obrigatório para a busca.")

        cache_key = f"cascade:{query.lower()}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                self._logger.debug("cascade_cache_hit", query=query)
                return cached

        result = await self._run_stages(query)

        if self._cache is not None:
            await self._cache.set(cache_key, result, ttl=self._cache_ttl)
        return result

    async def search(self, base_query: str, batch_index: int, page_size: int) -> SearchOutcome:
        """Select batch *batch_index* of the cascade results and enrich it.

        The slice is ``[batch_index * page_size, batch_index * page_size + page_size)``
        over the deduplicated cascade list.  An empty slice triggers one
        last discovery run unless discovery already produced the list.
        Detail fetches are sequential and a failure propagates.
        """
        if batch_index < 0:
            raise InvalidQueryError(message="O parâmetro 'batch_index' deve ser maior ou igual a 0.")
        if page_size < 1:
            raise InvalidQueryError(message="O parâmetro 'page_size' deve ser maior ou igual a 1.")

        cascade = await self.run_cascade(base_query)
        start = batch_index * page_size
        top_slice = dedupe_by_id(cascade.results)[start:start + page_size]
        filters_used = cascade.filters_used

        if not top_slice and filters_used is None:
            filters_used = self._extract_filters(base_query)
            self._logger.info(
                "cascade_batch_exhausted",
                query=base_query,
                batch_index=batch_index,
                stage=cascade.stage.value if cascade.stage else None,
            )
            try:
                discovered = await self._discover(base_query, filters_used)
            except CatalogProviderError as exc:
                self._logger.warning("cascade_last_resort_failed", query=base_query, error=str(exc))
                discovered = []
            top_slice = dedupe_by_id(discovered)[start:start + page_size]

        detailed: list[dict[str, Any]] = []
        for item in top_slice:
            detailed.append(
                await self._catalog.get_details(
                    item["id"], self._primary_locale, DETAIL_APPEND_FIELDS
                )
            )

        return SearchOutcome(
            top_slice=top_slice,
            detailed_results=detailed,
            filters_used=filters_used,
        )

    # ------------------------------------------------------------------
    # Cascade driver
    # ------------------------------------------------------------------

    async def _run_stages(self, query: str) -> CascadeResult:
        filters = self._extract_filters(query)
        stages = self.stages_for(filters)
        last_error: CatalogProviderError | None = None
        failures = 0

        for stage in stages:
            try:
                results = await self._strategies[stage](query, filters)
            except CatalogProviderError as exc:
                failures += 1
                last_error = exc
                self._logger.warning(
                    "cascade_stage_failed",
                    stage=stage.value,
                    query=query,
                    status=exc.status_code,
                )
                continue

            if results:
                self._logger.info(
                    "cascade_stage_accepted",
                    stage=stage.value,
                    query=query,
                    results=len(results),
                )
                return CascadeResult(
                    stage=stage,
                    results=results,
                    filters_used=filters if stage is SearchStage.DISCOVER else None,
                )
            self._logger.debug("cascade_stage_empty", stage=stage.value, query=query)

        if last_error is not None and failures == len(stages):
            raise last_error

        self._logger.info("cascade_exhausted", query=query)
        return CascadeResult(stage=None, results=[], filters_used=filters)

    async def _collect_pages(
        self, fetch: Callable[[int], Awaitable[CatalogPage]]
    ) -> list[RawSearchResult]:
        """Concatenate upstream pages 1..N, stopping at the last page or ``max_pages``.

        Only a page-1 failure propagates; a later page failing keeps the
        pages already gathered.
        """
        results: list[RawSearchResult] = []
        page = 1
        while True:
            try:
                catalog_page = await fetch(page)
            except CatalogProviderError as exc:
                if page == 1:
                    raise
                self._logger.warning("cascade_page_failed", page=page, error=str(exc))
                return results
            results.extend(catalog_page.results)
            if not catalog_page.results or page >= min(catalog_page.total_pages, self._max_pages):
                return results
            page += 1

    # ------------------------------------------------------------------
    # Stage strategies
    # ------------------------------------------------------------------

    async def _keyword_primary(self, query: str, filters: DiscoverFilters) -> list[RawSearchResult]:
        return await self._collect_pages(
            lambda page: self._catalog.search_movies(query, self._primary_locale, page)
        )

    async def _keyword_fallback(self, query: str, filters: DiscoverFilters) -> list[RawSearchResult]:
        return await self._collect_pages(
            lambda page: self._catalog.search_movies(query, self._fallback_locale, page)
        )

    async def _multi(self, query: str, filters: DiscoverFilters) -> list[RawSearchResult]:
        results = await self._collect_pages(
            lambda page: self._catalog.search_multi(query, self._primary_locale, page)
        )
        return [item for item in results if item.get("media_type") == "movie"]

    async def _collection(self, query: str, filters: DiscoverFilters) -> list[RawSearchResult]:
        collections: list[RawSearchResult] = []
        for locale in (self._primary_locale, self._fallback_locale):
            collections = (await self._catalog.search_collection(query, locale)).results
            if collections:
                break
        if not collections or collections[0].get("id") is None:
            return []

        parts = await self._catalog.get_collection_parts(collections[0]["id"], self._primary_locale)
        return sorted(parts, key=lambda part: part.get("popularity") or 0.0, reverse=True)

    async def _discover(self, query: str, filters: DiscoverFilters) -> list[RawSearchResult]:
        return await self._collect_pages(
            lambda page: self._catalog.discover(filters, self._primary_locale, page)
        )
