"""Assistant answer models and the completion status record."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnswerSource(BaseModel):
    """A movie cited by an assistant answer, trimmed down for the client."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    overview: str | None = None
    poster_path: str | None = None
    release_date: str | None = None
    rating: float | None = None

    @classmethod
    def from_details(cls, details: dict[str, Any]) -> AnswerSource:
        """Build a source entry from a TMDB movie-detail record."""
        return cls(
            id=details["id"],
            title=details.get("title") or details.get("name") or "",
            overview=details.get("overview") or None,
            poster_path=details.get("poster_path"),
            release_date=details.get("release_date") or None,
            rating=details.get("vote_average"),
        )


class AssistantAnswer(BaseModel):
    """The answer text for one assistant turn plus the movies it is grounded on."""

    model_config = ConfigDict(frozen=True)

    answer: str
    sources: list[AnswerSource] = Field(default_factory=list)


class CompletionStatus(BaseModel):
    """Outcome of the most recent text-completion attempt (status reporting only)."""

    model_config = ConfigDict(frozen=True)

    ok: bool
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(tz=timezone.utc))  # noqa: UP017
