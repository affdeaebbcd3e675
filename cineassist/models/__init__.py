"""cineAssist domain models — re-exports all public model classes.

Organised by concern:
    - assistant.py     — assistant answers, cited sources, completion status
    - conversation.py  — conversation messages and batch resolution
    - movie.py         — discovery filters, catalog pages, cascade outcomes
"""

from __future__ import annotations

from cineassist.models.assistant import AnswerSource, AssistantAnswer, CompletionStatus
from cineassist.models.conversation import BatchResolution, ConversationMessage
from cineassist.models.movie import (
    AggregatedPage,
    CascadeResult,
    CatalogPage,
    DiscoverFilters,
    RawSearchResult,
    SearchOutcome,
    SearchStage,
    SortOrder,
)

__all__ = [
    "AggregatedPage",
    "AnswerSource",
    "AssistantAnswer",
    "BatchResolution",
    "CascadeResult",
    "CatalogPage",
    "CompletionStatus",
    "ConversationMessage",
    "DiscoverFilters",
    "RawSearchResult",
    "SearchOutcome",
    "SearchStage",
    "SortOrder",
]
