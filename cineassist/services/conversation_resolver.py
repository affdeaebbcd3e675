"""Recover the real search query and batch offset from a conversation.

When the user answers "quero mais" the assistant must keep paging through
the results of the *previous* request instead of searching for the words
"quero mais".  The resolver rebuilds that state from the history the
client sends with each turn; no session cursor is stored server-side.

The reconstruction counts continuation messages after the first
occurrence of the base query.  It is sensitive to non-continuation
messages injected by other participants; that behaviour is intentional
and covered by tests.
"""

from __future__ import annotations

from collections.abc import Sequence

from cineassist.models.conversation import BatchResolution, ConversationMessage

# Whole-message matches.
_EXACT_CONTINUATIONS: frozenset[str] = frozenset({"quero", "sim", "mais"})
# Matches anywhere inside the message.
_CONTAINED_CONTINUATIONS: tuple[str, ...] = (
    "quero mais",
    "mais opções",
    "manda mais",
    "pode ser",
)


def is_continuation(text: str | None) -> bool:
    """Return ``True`` if *text* is an affirmative "give me the next batch" phrase."""
    if not text:
        return False
    normalized = text.strip().lower()
    if normalized in _EXACT_CONTINUATIONS:
        return True
    return any(phrase in normalized for phrase in _CONTAINED_CONTINUATIONS)


def _find_base_query(history: Sequence[ConversationMessage]) -> str | None:
    for message in reversed(history):
        if message.role == "user" and not is_continuation(message.content):
            return message.content.strip()
    return None


def _count_batches(history: Sequence[ConversationMessage], base_query: str) -> int:
    found = False
    batches = 0
    for message in history:
        if not found:
            found = message.content.strip() == base_query
            continue
        if message.role == "user" and is_continuation(message.content):
            batches += 1
    return batches


def resolve(
    history: Sequence[ConversationMessage] | None = None,
    current_input: str | None = None,
) -> BatchResolution:
    """Compute the base query and batch index for the current turn.

    Parameters
    ----------
    history:
        Prior messages in chronological order (may already include the
        current turn).
    current_input:
        The text the user just sent.

    Returns
    -------
    BatchResolution
        ``base_query`` is ``None`` when nothing usable was supplied;
        callers treat that as a missing required parameter.
    """
    raw = current_input.strip() if current_input is not None else None

    if not is_continuation(raw):
        return BatchResolution(base_query=raw or None, batch_index=0)

    if not history:
        return BatchResolution(base_query=raw, batch_index=0)

    base_query = _find_base_query(history) or raw
    return BatchResolution(
        base_query=base_query,
        batch_index=_count_batches(history, base_query),
    )
