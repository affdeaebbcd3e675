"""Abstract base class for text-completion (LLM) providers.

The answer synthesizer is the only consumer.  It never lets an
:class:`~cineassist.utils.errors.LLMError` escape: any failure here turns
into the deterministic fallback answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from cineassist.models.conversation import ConversationMessage


# Concrete implementations: OpenAILLMProvider (cineassist/providers/llm/)
class ILLMProvider(ABC):
    """Contract for chat-style text completion."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        history: Sequence[ConversationMessage] | None = None,
        temperature: float = 0.3,
        max_tokens: int = 300,
    ) -> str:
        """Generate a completion for *user_prompt*.

        Parameters
        ----------
        system_prompt:
            Instruction message that sets the model's behaviour.
        user_prompt:
            The final user turn, carrying the question and grounding context.
        history:
            Prior conversation turns, sent in order between the system
            prompt and *user_prompt*.
        temperature:
            Sampling temperature.
        max_tokens:
            Upper bound on generated tokens.

        Returns
        -------
        str
            The model's reply text.

        Raises
        ------
        cineassist.utils.errors.LLMError
            If the API call fails or returns no content.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier (e.g. ``"openai"``)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if a credential is configured (no network call)."""
