"""cineAssist FastAPI application entry point.

Wires together providers, services, and routes via dependency injection.
Configuration comes from environment variables and ``.env`` (see
:mod:`cineassist.config.settings`).

``build_services`` is also used by the CLI, which runs the same services
without starting the HTTP server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from cineassist import __version__
from cineassist.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from cineassist.api.routes import router as api_router
from cineassist.config.settings import Settings
from cineassist.interfaces.llm_provider import ILLMProvider
from cineassist.providers.cache.memory_cache import MemoryCacheProvider
from cineassist.providers.catalog.tmdb_provider import TMDBCatalogProvider
from cineassist.providers.llm.openai_provider import OpenAILLMProvider
from cineassist.services.answer_synthesizer import AnswerSynthesizer
from cineassist.services.assistant_service import AssistantService
from cineassist.services.cascading_search import CascadingSearchEngine
from cineassist.services.catalog_service import CatalogService
from cineassist.services.search_service import SearchService
from cineassist.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component construction
# ---------------------------------------------------------------------------


def _build_llm_provider(app_settings: Settings) -> ILLMProvider | None:
    """Return the completion provider, or ``None`` when no key is configured."""
    if app_settings.completion_enabled():
        return OpenAILLMProvider(settings=app_settings)
    return None


def build_services(app_settings: Settings, http_client: httpx.AsyncClient) -> dict[str, Any]:
    """Build providers and services around an existing HTTP client.

    Returns a flat dict of named components.
    """
    catalog = TMDBCatalogProvider(http_client=http_client, settings=app_settings)
    cache = MemoryCacheProvider(
        max_size=app_settings.cache_max_size,
        ttl=app_settings.cache_ttl_seconds,
    )
    llm = _build_llm_provider(app_settings)

    engine = CascadingSearchEngine(
        catalog=catalog,
        cache=cache,
        primary_locale=app_settings.primary_locale,
        fallback_locale=app_settings.fallback_locale,
        max_pages=app_settings.cascade_max_pages,
        cache_ttl=app_settings.cache_ttl_seconds,
    )
    synthesizer = AnswerSynthesizer(llm=llm, max_chars=app_settings.completion_max_chars)

    provider_registry: dict[str, bool] = {
        "catalog": catalog.is_available(),
        "llm": llm is not None and llm.is_available(),
        "cache": True,
    }

    return {
        "catalog": catalog,
        "cache": cache,
        "llm": llm,
        "engine": engine,
        "synthesizer": synthesizer,
        "search_service": SearchService(engine, page_size=app_settings.search_page_size),
        "assistant_service": AssistantService(
            engine,
            synthesizer,
            batch_size=app_settings.assistant_batch_size,
            stream_delay=app_settings.stream_chunk_delay,
        ),
        "catalog_service": CatalogService(
            catalog,
            cache,
            locale=app_settings.primary_locale,
            ttl=app_settings.cache_ttl_seconds,
        ),
        "provider_registry": provider_registry,
    }


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct the shared HTTP client plus every provider and service.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    http_client = httpx.AsyncClient(timeout=30.0)
    components = build_services(app_settings, http_client)
    components["http_client"] = http_client
    return components


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings)

    for key, value in components.items():
        setattr(application.state, key, value)

    if not components["provider_registry"]["catalog"]:
        _logger.warning("tmdb_api_key_missing", message="catalog routes will answer 500")

    _logger.info(
        "app_startup",
        version=__version__,
        environment=settings.app_env,
        llm=components["llm"].get_provider_name() if components["llm"] else None,
        providers=components["provider_registry"],
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="cineAssist API",
        version=__version__,
        description=(
            "Conversational movie discovery on top of TMDB: cascading search "
            "with deterministic pagination and a short assistant answer "
            "grounded in the results."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application, allowed_origins=settings.cors_origins)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "cineassist.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
