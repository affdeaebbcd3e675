"""Movie search models: discovery filters, catalog pages and search outcomes.

Raw TMDB result items stay plain ``dict`` objects throughout the pipeline.
Only ``id``, ``popularity`` and ``media_type`` are ever read by the search
core; everything else is passed through untouched to the client.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RawSearchResult = dict[str, Any]


class SortOrder(str, Enum):  # noqa: UP042
    """TMDB ``sort_by`` values used by the filter extractor."""

    POPULARITY_DESC = "popularity.desc"
    RATING_DESC = "vote_average.desc"


class DiscoverFilters(BaseModel):
    """Structured parameters for a filtered TMDB ``/discover/movie`` query.

    Dates are ISO ``YYYY-MM-DD`` strings, the format TMDB expects.
    """

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    sort_order: SortOrder = SortOrder.POPULARITY_DESC
    genre_id: int | None = None
    release_date_from: str | None = None
    release_date_to: str | None = None
    minimum_rating: float | None = None
    minimum_vote_count: int | None = None
    original_language: str | None = None
    region: str | None = None
    include_adult: bool = False

    def to_query_params(self) -> dict[str, Any]:
        """Map the filters onto TMDB query-string names, omitting unset fields."""
        params: dict[str, Any] = {
            "sort_by": SortOrder(self.sort_order).value,
            "include_adult": str(self.include_adult).lower(),
        }
        optional = {
            "with_genres": self.genre_id,
            "primary_release_date.gte": self.release_date_from,
            "primary_release_date.lte": self.release_date_to,
            "vote_average.gte": self.minimum_rating,
            "vote_count.gte": self.minimum_vote_count,
            "with_original_language": self.original_language,
            "region": self.region,
        }
        params.update({key: value for key, value in optional.items() if value is not None})
        return params


class CatalogPage(BaseModel):
    """One page of results exactly as the upstream catalog returned it."""

    model_config = ConfigDict(frozen=True)

    results: list[RawSearchResult] = Field(default_factory=list)
    page: int = 1
    total_pages: int = 1
    total_results: int = 0


class AggregatedPage(BaseModel):
    """A locally deduplicated and paginated view over a cascade result list."""

    model_config = ConfigDict(frozen=True)

    results: list[RawSearchResult] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=1, ge=1)
    total_results: int = Field(default=0, ge=0)


class SearchStage(str, Enum):  # noqa: UP042
    """Cascade stages in the fixed order they are tried."""

    KEYWORD_PRIMARY = "keyword_primary"
    KEYWORD_FALLBACK = "keyword_fallback"
    MULTI = "multi"
    COLLECTION = "collection"
    DISCOVER = "discover"


class CascadeResult(BaseModel):
    """The result list produced by the first non-empty cascade stage.

    ``stage`` is ``None`` when every stage came back empty.  ``filters_used``
    is set whenever discovery ran, including an exhausted cascade.
    """

    model_config = ConfigDict(frozen=True)

    stage: SearchStage | None = None
    results: list[RawSearchResult] = Field(default_factory=list)
    filters_used: DiscoverFilters | None = None


class SearchOutcome(BaseModel):
    """One assistant batch: the selected slice and its detail-enriched records."""

    model_config = ConfigDict(frozen=True)

    top_slice: list[RawSearchResult] = Field(default_factory=list)
    detailed_results: list[dict[str, Any]] = Field(default_factory=list)
    filters_used: DiscoverFilters | None = None
