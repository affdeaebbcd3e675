"""Deterministic deduplication and local pagination of cascade results.

TMDB pages are volatile (popularity shifts between requests, items move
across page boundaries), so the same movie can appear twice in a list
stitched together from several upstream pages.  The aggregator collapses
duplicates by ``id`` (first occurrence wins) and serves fixed-size pages
over the collapsed list.  Same input, same output: no clock, no randomness.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from cineassist.models.movie import AggregatedPage, RawSearchResult
from cineassist.utils.errors import InvalidQueryError


def dedupe_by_id(raw_results: Iterable[RawSearchResult]) -> list[RawSearchResult]:
    """Drop repeated ids, keeping the first occurrence and its position.

    Items without an ``id`` cannot be referenced later and are dropped.
    """
    seen: set[int] = set()
    unique: list[RawSearchResult] = []
    for item in raw_results:
        item_id = item.get("id")
        if item_id is None or item_id in seen:
            continue
        seen.add(item_id)
        unique.append(item)
    return unique


def aggregate(raw_results: Iterable[RawSearchResult], page: int, page_size: int) -> AggregatedPage:
    """Return 1-indexed *page* of the deduplicated *raw_results*.

    Raises
    ------
    InvalidQueryError
        If *page* or *page_size* is smaller than 1.
    """
    if page < 1:
        raise InvalidQueryError(message="O parâmetro 'page' deve ser maior ou igual a 1.")
    if page_size < 1:
        raise InvalidQueryError(message="O parâmetro 'page_size' deve ser maior ou igual a 1.")

    unique = dedupe_by_id(raw_results)
    total_results = len(unique)
    start = (page - 1) * page_size
    return AggregatedPage(
        results=unique[start:start + page_size],
        page=page,
        total_pages=max(1, math.ceil(total_results / page_size)),
        total_results=total_results,
    )
