"""Unit tests for the conversation resolver (base query + batch index)."""

from __future__ import annotations

import pytest

from cineassist.models.conversation import ConversationMessage
from cineassist.services.conversation_resolver import is_continuation, resolve


def _user(text: str) -> ConversationMessage:
    return ConversationMessage(role="user", content=text)


def _assistant(text: str) -> ConversationMessage:
    return ConversationMessage(role="assistant", content=text)


class TestIsContinuation:
    @pytest.mark.parametrize("text", ["quero", "Sim", "  MAIS  ", "quero mais opções", "manda mais aí", "pode ser"])
    def test_continuation_phrases(self, text: str) -> None:
        assert is_continuation(text) is True

    @pytest.mark.parametrize("text", ["quero um drama", "matrix", "", None, "simples"])
    def test_regular_queries(self, text: str | None) -> None:
        assert is_continuation(text) is False


class TestResolve:
    def test_plain_query_starts_at_first_batch(self) -> None:
        result = resolve([], "  ação anos 90 ")
        assert result.base_query == "ação anos 90"
        assert result.batch_index == 0

    def test_no_input_yields_no_base_query(self) -> None:
        result = resolve(None, None)
        assert result.base_query is None
        assert result.batch_index == 0

    def test_blank_input_yields_no_base_query(self) -> None:
        assert resolve([], "   ").base_query is None

    def test_continuation_pages_previous_query(self) -> None:
        history = [_user("ação anos 90"), _assistant("..."), _user("quero")]
        result = resolve(history, "quero")
        assert result.base_query == "ação anos 90"
        assert result.batch_index == 1

    def test_each_continuation_advances_one_batch(self) -> None:
        history = [
            _user("drama cerebral"),
            _assistant("Algumas sugestões..."),
            _user("quero mais"),
            _assistant("Mais sugestões..."),
            _user("manda mais"),
        ]
        result = resolve(history, "manda mais")
        assert result.base_query == "drama cerebral"
        assert result.batch_index == 2

    def test_assistant_messages_are_not_counted(self) -> None:
        history = [_user("matrix"), _assistant("sim"), _assistant("mais"), _user("sim")]
        assert resolve(history, "sim").batch_index == 1

    def test_continuation_without_history_searches_the_phrase(self) -> None:
        result = resolve(None, "quero mais")
        assert result.base_query == "quero mais"
        assert result.batch_index == 0

    def test_history_of_only_continuations_keeps_raw_input(self) -> None:
        history = [_user("sim"), _user("quero")]
        result = resolve(history, "quero")
        assert result.base_query == "quero"
        assert result.batch_index == 0

    def test_injected_query_resets_the_batch_count(self) -> None:
        # A new non-continuation message in the middle becomes the base query
        # and only the continuations after it are counted.
        history = [
            _user("ação anos 90"),
            _user("quero"),
            _user("quero"),
            _user("comédia romântica"),
            _user("quero"),
        ]
        result = resolve(history, "quero")
        assert result.base_query == "comédia romântica"
        assert result.batch_index == 1

    def test_base_query_first_occurrence_is_used_for_counting(self) -> None:
        history = [
            _user("matrix"),
            _user("quero"),
            _assistant("..."),
            _user("matrix"),
            _user("quero"),
        ]
        # Counting starts after the first "matrix", so both continuations count.
        assert resolve(history, "quero").batch_index == 2
