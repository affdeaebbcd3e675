"""Pydantic request/response schemas for the cineAssist API.

Search results and assistant answers reuse the domain models directly
(:class:`AggregatedPage`, :class:`AssistantAnswer`); only request bodies
and the API-specific envelopes live here.

Convention: request schemas end with "Request", response schemas end
with "Response".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from cineassist.models.assistant import CompletionStatus
from cineassist.models.conversation import ConversationMessage


class AssistantRequest(BaseModel):
    """One assistant turn.

    ``query`` may be omitted when ``history`` already ends with the
    user's message.
    """

    query: str | None = Field(default=None, max_length=1000)
    history: list[ConversationMessage] = Field(default_factory=list)


class AssistantStatusResponse(BaseModel):
    """Whether completions are configured and how the last attempt went."""

    completion_enabled: bool
    last_status: CompletionStatus | None = None


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body.

    ``details`` carries the upstream payload for catalog errors.
    """

    error: str
    detail: str | None = None
    details: Any = None
