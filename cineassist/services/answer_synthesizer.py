"""Turn detail-enriched search results into a short conversational answer.

Two paths, same contract (always returns a string, never raises):

    1. COMPLETION  -- when an LLM provider is configured, one completion is
                      requested with a fixed Portuguese system prompt, the
                      prior conversation and a compact grounding summary.
    2. FALLBACK    -- a deterministic sentence listing up to three titles,
                      used when no provider is configured and whenever the
                      completion fails, comes back empty or is too long.

The outcome of the latest completion attempt is kept on the instance as a
:class:`CompletionStatus` so the status endpoint can report it.  A single
synthesizer is shared by the whole app, so concurrent requests overwrite
each other's status; the last writer wins.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import structlog

from cineassist.interfaces.llm_provider import ILLMProvider
from cineassist.models.assistant import CompletionStatus
from cineassist.models.conversation import ConversationMessage
from cineassist.models.movie import DiscoverFilters
from cineassist.utils.logging import get_logger

logger: structlog.BoundLogger = get_logger(__name__)

_MAX_CITED_TITLES = 3

# Display names for the genre ids the filter extractor can emit.
_GENRE_NAMES: dict[int, str] = {
    28: "Ação",
    878: "Ficção Científica",
    18: "Drama",
    35: "Comédia",
    53: "Thriller",
    16: "Animação",
    27: "Terror",
    10749: "Romance",
    12: "Aventura",
    80: "Crime",
    14: "Fantasia",
}


def _release_year(item: dict[str, Any]) -> str | None:
    release_date = item.get("release_date") or ""
    year = release_date[:4]
    return year if len(year) == 4 and year.isdigit() else None


def _title(item: dict[str, Any]) -> str:
    return item.get("title") or item.get("name") or "Sem título"


def _labelled_title(item: dict[str, Any]) -> str:
    year = _release_year(item)
    return f"{_title(item)} ({year})" if year else _title(item)


def _join_pt(parts: Sequence[str]) -> str:
    """Join with commas and a final " e " ("A, B e C")."""
    if len(parts) <= 1:
        return "".join(parts)
    return f"{', '.join(parts[:-1])} e {parts[-1]}"


class AnswerSynthesizer:
    """Builds the assistant's answer text.

    Parameters
    ----------
    llm:
        Optional text-completion provider.  ``None`` or an unavailable
        provider means every answer is the deterministic fallback.
    max_chars:
        Completions longer than this (after stripping) are discarded.
    """

    _SYSTEM_PROMPT = (
        "Você é um assistente de filmes. Responda sempre em português do Brasil, "
        "de forma breve e natural.\n"
        "Regras:\n"
        "- Cite no máximo 3 títulos, todos presentes no contexto fornecido.\n"
        "- Não use jargão técnico sobre filtros, notas mínimas ou contagem de votos.\n"
        "- Se fizer sentido, termine com uma pergunta curta para continuar a conversa."
    )

    def __init__(self, llm: ILLMProvider | None = None, max_chars: int = 280) -> None:
        self._llm = llm
        self._max_chars = max_chars
        self._last_status: CompletionStatus | None = None

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    @property
    def completion_enabled(self) -> bool:
        return self._llm is not None and self._llm.is_available()

    @property
    def last_status(self) -> CompletionStatus | None:
        """Outcome of the most recent completion attempt, if any."""
        return self._last_status

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def synthesize(
        self,
        query: str,
        enriched_results: Sequence[dict[str, Any]],
        filters: DiscoverFilters | None = None,
        history: Sequence[ConversationMessage] | None = None,
    ) -> str:
        """Return the answer for *query* grounded in *enriched_results*."""
        fallback = self.build_fallback_answer(query, enriched_results)
        llm = self._llm
        if llm is None or not llm.is_available():
            return fallback

        user_prompt = (
            f"Pergunta: {query}\n"
            f"Contexto:\n{self.build_context_summary(query, enriched_results, filters)}"
        )
        try:
            reply = await llm.complete(
                system_prompt=self._SYSTEM_PROMPT,
                user_prompt=user_prompt,
                history=history,
                temperature=0.3,
            )
        except Exception as exc:
            logger.warning(
                "completion_failed",
                provider=llm.get_provider_name(),
                error=str(exc),
            )
            self._last_status = CompletionStatus(ok=False, message=str(exc))
            return fallback

        answer = (reply or "").strip()
        if not answer or len(answer) > self._max_chars:
            logger.info(
                "completion_discarded",
                provider=llm.get_provider_name(),
                length=len(answer),
                max_chars=self._max_chars,
            )
            self._last_status = CompletionStatus(
                ok=False,
                message="empty completion" if not answer else f"completion longer than {self._max_chars} chars",
            )
            return fallback

        self._last_status = CompletionStatus(ok=True, message="ok")
        return answer

    def build_fallback_answer(self, query: str, enriched_results: Sequence[dict[str, Any]]) -> str:
        """Deterministic answer used whenever no completion is usable."""
        titles = [_labelled_title(item) for item in enriched_results[:_MAX_CITED_TITLES]]
        if not titles:
            return (
                f'Não encontrei boas opções para "{query}". '
                "Pode detalhar um pouco mais o que procura?"
            )
        return f"Algumas sugestões para você: {_join_pt(titles)}. Quer que eu traga mais opções?"

    def build_context_summary(
        self,
        query: str,
        enriched_results: Sequence[dict[str, Any]],
        filters: DiscoverFilters | None = None,
    ) -> str:
        """Compact grounding text: the query, the filters used and up to three titles."""
        lines = [f"Consulta: {query}"]
        if filters is not None:
            lines.append("Filtros:")
            if filters.genre_id is not None:
                lines.append(f"- Gênero: {_GENRE_NAMES.get(filters.genre_id, filters.genre_id)}")
            if filters.release_date_from:
                lines.append(f"- Desde: {filters.release_date_from}")
            if filters.release_date_to:
                lines.append(f"- Até: {filters.release_date_to}")
            if filters.minimum_rating is not None:
                lines.append(f"- Nota mínima: {filters.minimum_rating}")
            if filters.minimum_vote_count is not None:
                lines.append(f"- Mínimo de votos: {filters.minimum_vote_count}")
        for item in enriched_results[:_MAX_CITED_TITLES]:
            lines.append(f"- {_labelled_title(item)} Nota: {item.get('vote_average', '-')}")
        return "\n".join(lines)
