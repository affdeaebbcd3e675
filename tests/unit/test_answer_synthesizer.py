"""Unit tests for the answer synthesizer and its deterministic fallback."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from cineassist.models.conversation import ConversationMessage
from cineassist.models.movie import DiscoverFilters, SortOrder
from cineassist.services.answer_synthesizer import AnswerSynthesizer
from cineassist.utils.errors import LLMError

_RESULTS = [
    {"id": 1, "title": "Matrix", "release_date": "1999-03-31", "vote_average": 8.2},
    {"id": 2, "title": "Amélie", "release_date": "2001-04-25", "vote_average": 7.9},
    {"id": 3, "title": "A Origem", "release_date": "2010-07-16", "vote_average": 8.4},
    {"id": 4, "title": "Quarto Filme", "release_date": "2015-01-01", "vote_average": 6.0},
]


class TestFallback:
    @pytest.mark.asyncio
    async def test_results_phrasing(self) -> None:
        answer = await AnswerSynthesizer().synthesize("algo bom", _RESULTS)
        assert answer == (
            "Algumas sugestões para você: Matrix (1999), Amélie (2001) e A Origem (2010). "
            "Quer que eu traga mais opções?"
        )

    @pytest.mark.asyncio
    async def test_no_results_phrasing(self) -> None:
        answer = await AnswerSynthesizer().synthesize("xyzzy", [])
        assert answer == 'Não encontrei boas opções para "xyzzy". Pode detalhar um pouco mais o que procura?'

    def test_single_title_has_no_conjunction(self) -> None:
        answer = AnswerSynthesizer().build_fallback_answer("q", _RESULTS[:1])
        assert answer == "Algumas sugestões para você: Matrix (1999). Quer que eu traga mais opções?"

    def test_two_titles_joined_with_e(self) -> None:
        answer = AnswerSynthesizer().build_fallback_answer("q", _RESULTS[:2])
        assert "Matrix (1999) e Amélie (2001)." in answer

    def test_missing_year_omits_parentheses(self) -> None:
        answer = AnswerSynthesizer().build_fallback_answer("q", [{"id": 9, "title": "Sem Data"}])
        assert "Sem Data." in answer
        assert "()" not in answer

    @pytest.mark.asyncio
    async def test_unavailable_provider_is_not_called(self, mock_llm: MagicMock) -> None:
        mock_llm.is_available.return_value = False
        synthesizer = AnswerSynthesizer(llm=mock_llm)

        answer = await synthesizer.synthesize("algo", _RESULTS)

        assert answer.startswith("Algumas sugestões")
        mock_llm.complete.assert_not_awaited()
        assert synthesizer.completion_enabled is False
        assert synthesizer.last_status is None


class TestCompletion:
    @pytest.mark.asyncio
    async def test_completion_is_used_when_short(self, mock_llm: MagicMock) -> None:
        synthesizer = AnswerSynthesizer(llm=mock_llm)

        answer = await synthesizer.synthesize("algo", _RESULTS)

        assert answer == "Que tal Filme 1? Ótima escolha para hoje."
        assert synthesizer.last_status.ok is True

    @pytest.mark.asyncio
    async def test_prompt_carries_context_and_history(self, mock_llm: MagicMock) -> None:
        history = [ConversationMessage(role="user", content="drama")]
        filters = DiscoverFilters(sort_order=SortOrder.RATING_DESC, genre_id=18, minimum_rating=7.0)

        await AnswerSynthesizer(llm=mock_llm).synthesize("drama", _RESULTS, filters, history)

        kwargs = mock_llm.complete.await_args.kwargs
        assert "português do Brasil" in kwargs["system_prompt"]
        assert "Pergunta: drama" in kwargs["user_prompt"]
        assert "- Gênero: Drama" in kwargs["user_prompt"]
        assert "- Matrix (1999) Nota: 8.2" in kwargs["user_prompt"]
        assert "Quarto Filme" not in kwargs["user_prompt"]
        assert kwargs["history"] == history

    @pytest.mark.asyncio
    async def test_long_completion_is_discarded(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="x" * 281)
        synthesizer = AnswerSynthesizer(llm=mock_llm)

        answer = await synthesizer.synthesize("algo", _RESULTS)

        assert answer.startswith("Algumas sugestões")
        assert synthesizer.last_status.ok is False

    @pytest.mark.asyncio
    async def test_completion_at_limit_is_kept(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="  " + "y" * 280 + "\n")

        answer = await AnswerSynthesizer(llm=mock_llm).synthesize("algo", _RESULTS)

        assert answer == "y" * 280

    @pytest.mark.asyncio
    async def test_blank_completion_is_discarded(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(return_value="   ")

        answer = await AnswerSynthesizer(llm=mock_llm).synthesize("xyzzy", [])

        assert answer.startswith("Não encontrei boas opções")

    @pytest.mark.asyncio
    async def test_provider_error_falls_back(self, mock_llm: MagicMock) -> None:
        mock_llm.complete = AsyncMock(side_effect=LLMError("timeout", provider_name="openai"))
        synthesizer = AnswerSynthesizer(llm=mock_llm)

        answer = await synthesizer.synthesize("algo", _RESULTS)

        assert answer.startswith("Algumas sugestões")
        assert synthesizer.last_status.ok is False
        assert "timeout" in synthesizer.last_status.message

    @pytest.mark.asyncio
    async def test_last_writer_wins(self, mock_llm: MagicMock) -> None:
        synthesizer = AnswerSynthesizer(llm=mock_llm)
        mock_llm.complete = AsyncMock(side_effect=RuntimeError("boom"))
        await synthesizer.synthesize("a", _RESULTS)
        mock_llm.complete = AsyncMock(return_value="Tudo certo.")
        await synthesizer.synthesize("b", _RESULTS)

        assert synthesizer.last_status.ok is True


def test_context_summary_without_filters() -> None:
    summary = AnswerSynthesizer().build_context_summary("matrix", _RESULTS[:1])
    assert summary == "Consulta: matrix\n- Matrix (1999) Nota: 8.2"
