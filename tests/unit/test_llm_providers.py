"""Unit tests for the OpenAI completion provider."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import openai
import pytest

from cineassist.config.settings import Settings
from cineassist.models.conversation import ConversationMessage
from cineassist.utils.errors import LLMError


# ======================================================================
# Shared helpers
# ======================================================================

def _settings(**overrides) -> Settings:
    defaults = {
        "openai_api_key": "sk-test",
        "openai_base_url": "",
        "openai_text_model": "",
    }
    defaults.update(overrides)
    return Settings(**defaults)


def _response(content: str | None) -> MagicMock:
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=content))]
    response.usage = MagicMock(total_tokens=42)
    return response


_PATCH_TARGET = "cineassist.providers.llm.openai_provider.openai.AsyncOpenAI"


# ======================================================================
# OpenAI LLM Provider
# ======================================================================


class TestOpenAILLMProvider:
    @pytest.fixture()
    def settings(self) -> Settings:
        return _settings()

    def test_provider_name(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        assert OpenAILLMProvider(settings).get_provider_name() == "openai"

    def test_compatible_endpoint_label(self) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        provider = OpenAILLMProvider(_settings(openai_base_url="https://api.together.xyz/v1"))
        assert provider.get_provider_name() == "openai-compatible"

    def test_is_available_with_key(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        assert OpenAILLMProvider(settings).is_available() is True

    def test_is_available_without_key(self) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        assert OpenAILLMProvider(_settings(openai_api_key="")).is_available() is False

    @pytest.mark.asyncio
    async def test_complete_success(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_response("Veja Matrix (1999)."))

        with patch(_PATCH_TARGET, return_value=mock_client):
            provider = OpenAILLMProvider(settings)
            result = await provider.complete("system prompt", "user prompt")

        assert result == "Veja Matrix (1999)."
        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["temperature"] == 0.3

    @pytest.mark.asyncio
    async def test_history_sent_between_system_and_user(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_response("ok"))
        history = [
            ConversationMessage(role="user", content="ação anos 90"),
            ConversationMessage(role="assistant", content="Algumas sugestões..."),
        ]

        with patch(_PATCH_TARGET, return_value=mock_client):
            provider = OpenAILLMProvider(_settings(openai_text_model="gpt-4o"))
            await provider.complete("sys", "quero", history=history)

        kwargs = mock_client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert [m["role"] for m in kwargs["messages"]] == ["system", "user", "assistant", "user"]
        assert kwargs["messages"][-1]["content"] == "quero"

    @pytest.mark.asyncio
    async def test_api_error_becomes_llm_error(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(
            side_effect=openai.APIError(message="Rate limit exceeded", request=MagicMock(), body=None)
        )

        with patch(_PATCH_TARGET, return_value=mock_client):
            provider = OpenAILLMProvider(settings)
            with pytest.raises(LLMError) as exc_info:
                await provider.complete("system", "user")
        assert exc_info.value.provider_name == "openai"

    @pytest.mark.asyncio
    async def test_empty_content_becomes_llm_error(self, settings: Settings) -> None:
        from cineassist.providers.llm.openai_provider import OpenAILLMProvider

        mock_client = AsyncMock()
        mock_client.chat.completions.create = AsyncMock(return_value=_response(None))

        with patch(_PATCH_TARGET, return_value=mock_client):
            provider = OpenAILLMProvider(settings)
            with pytest.raises(LLMError):
                await provider.complete("system", "user")
