"""One-shot movie search: validate, run the cascade, paginate locally."""

from __future__ import annotations

from cineassist.models.movie import AggregatedPage
from cineassist.services.cascading_search import CascadingSearchEngine
from cineassist.services.result_aggregator import aggregate
from cineassist.utils.errors import InvalidQueryError
from cineassist.utils.logging import get_logger


class SearchService:
    """Backs ``GET /api/search/movie``.

    The cascade produces the full candidate list (cached per query), and
    pages are cut from it locally, so page N of a query is stable for as
    long as the cache entry lives.
    """

    def __init__(self, engine: CascadingSearchEngine, page_size: int = 20) -> None:
        self._engine = engine
        self._page_size = page_size
        self._logger = get_logger(__name__)

    async def search(self, query: str | None, page: int = 1) -> AggregatedPage:
        query = (query or "").strip()
        if not query:
            raise InvalidQueryError(message="O parâmetro 'query' é obrigatório para a busca.")
        if page < 1:
            raise InvalidQueryError(message="O parâmetro 'page' deve ser maior ou igual a 1.")

        cascade = await self._engine.run_cascade(query)
        result = aggregate(cascade.results, page, self._page_size)
        self._logger.info(
            "search_completed",
            query=query,
            page=page,
            stage=cascade.stage.value if cascade.stage else None,
            total_results=result.total_results,
        )
        return result
