"""LLM provider adapters.

    - OpenAILLMProvider — gpt-4o-mini by default; any OpenAI-compatible API
      via ``OPENAI_BASE_URL``.

main.py only builds it when ``OPENAI_API_KEY`` is set; otherwise the
assistant runs with its deterministic answers.
"""

from cineassist.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]
