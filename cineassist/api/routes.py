"""FastAPI routes for cineAssist.

Service dependencies are resolved from ``app.state`` via FastAPI's
``Depends`` using the ``Annotated`` pattern; ``main.py`` populates the
state at startup.

    Endpoint                     Method  Description
    ───────────────────────────────────────────────────────────────────
    /api/search/movie            GET     Cascading search, local pagination
    /api/assistant               POST    One assistant turn (answer + sources)
    /api/assistant/stream        POST    Same turn as NDJSON events
    /api/assistant/status        GET     Completion configuration and last outcome
    /api/movie/{movie_id}        GET     Movie detail with credits, images, videos
    /api/popular                 GET     Trending movies of the day
    /api/tmdb/{path}             GET     Cached read-only TMDB passthrough
    /api/health                  GET     Health check + provider status

Errors are not handled here: services raise ``CineAssistError``
subclasses and ``ErrorHandlingMiddleware`` turns them into responses.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse

from cineassist import __version__
from cineassist.api.schemas import AssistantRequest, AssistantStatusResponse, HealthResponse
from cineassist.models.assistant import AssistantAnswer
from cineassist.models.movie import AggregatedPage, CatalogPage
from cineassist.services.answer_synthesizer import AnswerSynthesizer
from cineassist.services.assistant_service import AssistantService
from cineassist.services.catalog_service import CatalogService
from cineassist.services.search_service import SearchService
from cineassist.utils.errors import InvalidQueryError
from cineassist.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api")


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_search_service(request: Request) -> SearchService:
    """Return the search service from application state."""
    return request.app.state.search_service


def _get_assistant_service(request: Request) -> AssistantService:
    """Return the assistant service from application state."""
    return request.app.state.assistant_service


def _get_catalog_service(request: Request) -> CatalogService:
    """Return the cached catalog service from application state."""
    return request.app.state.catalog_service


def _get_synthesizer(request: Request) -> AnswerSynthesizer:
    """Return the shared answer synthesizer from application state."""
    return request.app.state.synthesizer


SearchServiceDep = Annotated[SearchService, Depends(_get_search_service)]
AssistantServiceDep = Annotated[AssistantService, Depends(_get_assistant_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(_get_catalog_service)]
SynthesizerDep = Annotated[AnswerSynthesizer, Depends(_get_synthesizer)]


def _parse_positive_int(raw: str | None, name: str, default: int | None = None) -> int:
    # Path and query values arrive as text so malformed input maps to 400, not 422.
    if raw is None or raw == "":
        if default is not None:
            return default
        raise InvalidQueryError(message=f"O parâmetro '{name}' é obrigatório.")
    try:
        value = int(raw)
    except ValueError:
        raise InvalidQueryError(message=f"O parâmetro '{name}' deve ser um inteiro positivo.") from None
    if value < 1:
        raise InvalidQueryError(message=f"O parâmetro '{name}' deve ser um inteiro positivo.")
    return value


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.get(
    "/search/movie",
    response_model=AggregatedPage,
    summary="Search movies with the fallback cascade",
)
async def search_movies(
    search_service: SearchServiceDep,
    query: Annotated[str | None, Query()] = None,
    page: Annotated[str | None, Query()] = None,
) -> AggregatedPage:
    """Run the search cascade for *query* and return one 20-item page."""
    return await search_service.search(query, _parse_positive_int(page, "page", default=1))


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------


@router.post(
    "/assistant",
    response_model=AssistantAnswer,
    summary="Answer one assistant turn",
)
async def ask_assistant(
    body: AssistantRequest,
    assistant_service: AssistantServiceDep,
) -> AssistantAnswer:
    """Resolve the turn against the history and answer with up to three movies."""
    return await assistant_service.answer(body.query, body.history)


@router.post(
    "/assistant/stream",
    summary="Answer one assistant turn as newline-delimited JSON events",
)
async def stream_assistant(
    body: AssistantRequest,
    assistant_service: AssistantServiceDep,
) -> StreamingResponse:
    """Stream ``sources``, ``chunk`` and ``done`` events, one JSON object per line."""
    events = await assistant_service.stream(body.query, body.history)

    async def _ndjson() -> AsyncIterator[str]:
        async for event in events:
            yield json.dumps(event, ensure_ascii=False) + "\n"

    return StreamingResponse(
        _ndjson(),
        media_type="application/x-ndjson",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get(
    "/assistant/status",
    response_model=AssistantStatusResponse,
    summary="Completion provider status",
)
async def assistant_status(synthesizer: SynthesizerDep) -> AssistantStatusResponse:
    """Report whether completions are enabled and how the last one went."""
    return AssistantStatusResponse(
        completion_enabled=synthesizer.completion_enabled,
        last_status=synthesizer.last_status,
    )


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@router.get("/movie/{movie_id}", summary="Movie detail")
async def movie_details(movie_id: str, catalog_service: CatalogServiceDep) -> dict[str, Any]:
    """Return the TMDB record for *movie_id* with credits, images and videos."""
    return await catalog_service.movie_details(_parse_positive_int(movie_id, "id"))


@router.get("/popular", response_model=CatalogPage, summary="Trending movies")
async def popular_movies(catalog_service: CatalogServiceDep) -> CatalogPage:
    """Return today's trending movies."""
    return await catalog_service.popular()


@router.get("/tmdb/{path:path}", summary="Read-only TMDB passthrough")
async def tmdb_passthrough(
    path: str,
    request: Request,
    catalog_service: CatalogServiceDep,
) -> Any:
    """Forward a GET to TMDB (the server's API key is used) and cache the body."""
    return await catalog_service.passthrough(path, dict(request.query_params))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, Any] = dict(getattr(request.app.state, "provider_registry", {}))
    status = "healthy" if providers.get("catalog", False) else "degraded"
    return HealthResponse(status=status, version=__version__, providers=providers)
