"""Conversational assistant: resolve the turn, search a batch, synthesize.

Each turn is stateless on the server.  The client sends the history with
every request and the conversation resolver recovers the base query and
the batch index from it, so "quero mais" pages through the results of
the earlier request three movies at a time.

Streaming delivers the same answer as the blocking path.  The answer is
computed in full first and then released word by word with a small
delay, preceded by the sources and followed by a terminal event.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import AsyncIterator, Sequence
from typing import Any

from cineassist.models.assistant import AnswerSource, AssistantAnswer
from cineassist.models.conversation import ConversationMessage
from cineassist.services.answer_synthesizer import AnswerSynthesizer
from cineassist.services.cascading_search import CascadingSearchEngine
from cineassist.services.conversation_resolver import resolve
from cineassist.utils.errors import InvalidQueryError
from cineassist.utils.logging import get_logger

# A word plus its trailing whitespace; concatenating all matches rebuilds the text.
_CHUNK_PATTERN = re.compile(r"\S+\s*")


def split_chunks(text: str) -> list[str]:
    """Split *text* into stream chunks (leading whitespace is kept on the first)."""
    chunks = _CHUNK_PATTERN.findall(text)
    leading = text[: len(text) - len(text.lstrip())]
    if leading and chunks:
        chunks[0] = leading + chunks[0]
    return chunks


class AssistantService:
    """Backs ``POST /api/assistant`` and ``POST /api/assistant/stream``.

    Parameters
    ----------
    engine:
        Cascading search engine used to select and enrich each batch.
    synthesizer:
        Answer synthesizer (shared app-wide; holds the completion status).
    batch_size:
        Movies per assistant turn.
    stream_delay:
        Seconds between streamed chunks.
    """

    def __init__(
        self,
        engine: CascadingSearchEngine,
        synthesizer: AnswerSynthesizer,
        batch_size: int = 3,
        stream_delay: float = 0.03,
    ) -> None:
        self._engine = engine
        self._synthesizer = synthesizer
        self._batch_size = batch_size
        self._stream_delay = stream_delay
        self._logger = get_logger(__name__)

    async def answer(
        self,
        query: str | None = None,
        history: Sequence[ConversationMessage] | None = None,
    ) -> AssistantAnswer:
        """Answer one assistant turn.

        When *query* is omitted the newest user message in *history* is
        taken as the current input.

        Raises
        ------
        InvalidQueryError
            If no base query can be recovered.
        CatalogProviderError
            If the cascade or a detail fetch fails upstream.
        """
        history = list(history or [])
        current = query
        if current is None or not current.strip():
            current = next(
                (message.content for message in reversed(history) if message.role == "user"),
                None,
            )

        resolution = resolve(history, current)
        if not resolution.base_query:
            raise InvalidQueryError(message="O parâmetro 'query' é obrigatório para o assistente.")

        self._logger.info(
            "assistant_turn_resolved",
            base_query=resolution.base_query,
            batch_index=resolution.batch_index,
        )
        outcome = await self._engine.search(
            resolution.base_query, resolution.batch_index, self._batch_size
        )
        text = await self._synthesizer.synthesize(
            resolution.base_query,
            outcome.detailed_results,
            outcome.filters_used,
            history,
        )
        return AssistantAnswer(
            answer=text,
            sources=[AnswerSource.from_details(details) for details in outcome.detailed_results],
        )

    async def stream(
        self,
        query: str | None = None,
        history: Sequence[ConversationMessage] | None = None,
    ) -> AsyncIterator[dict[str, Any]]:
        """Yield ``sources``, then one ``chunk`` event per word, then ``done``.

        Errors raised while computing the answer propagate before the
        first event, so the caller can still answer with an error status.
        """
        result = await self.answer(query, history)
        return self._events(result)

    async def _events(self, result: AssistantAnswer) -> AsyncIterator[dict[str, Any]]:
        yield {
            "type": "sources",
            "sources": [source.model_dump() for source in result.sources],
        }
        for index, chunk in enumerate(split_chunks(result.answer)):
            if index and self._stream_delay > 0:
                await asyncio.sleep(self._stream_delay)
            yield {"type": "chunk", "text": chunk}
        yield {"type": "done"}
