"""Conversation models for the assistant path.

The caller sends the whole message history with every request; nothing
here is persisted.  :class:`BatchResolution` is recomputed from that
history on each turn by the conversation resolver.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ConversationMessage(BaseModel):
    """One turn of a conversation, in chronological order within a history."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime | None = None


class BatchResolution(BaseModel):
    """The real search text behind a conversational turn plus its batch offset.

    ``batch_index`` counts how many times the user asked for "more" since
    the base query was first sent; it selects the 3-item result window.
    """

    model_config = ConfigDict(frozen=True)

    base_query: str | None = None
    batch_index: int = Field(default=0, ge=0)
