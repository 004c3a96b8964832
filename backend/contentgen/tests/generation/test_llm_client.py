from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from contentgen.errors import CompletionServiceError
from contentgen.generation.llm_client import NO_CONTENT_FALLBACK, LLMClient


def _mock_openai(content=None, *, choices=True, side_effect=None):
    # Mock response object mapping the OpenAI API response structure
    mock_message = MagicMock()
    mock_message.content = content

    mock_choice = MagicMock()
    mock_choice.message = mock_message

    mock_response = MagicMock()
    mock_response.choices = [mock_choice] if choices else []

    mock_completions = MagicMock()
    mock_completions.create = AsyncMock(return_value=mock_response, side_effect=side_effect)

    mock_chat = MagicMock()
    mock_chat.completions = mock_completions

    mock_client_instance = AsyncMock()
    mock_client_instance.chat = mock_chat
    return mock_client_instance, mock_completions


@pytest.mark.asyncio
async def test_complete_sends_system_then_user_message():
    mock_client_instance, mock_completions = _mock_openai("Hello")

    with patch("contentgen.generation.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        with patch("contentgen.generation.llm_client.settings.LLM_API_KEY", "dummy_key"):
            client = LLMClient(model_name="test-model")
            result = await client.complete("system text", "write about X")

    assert result == "Hello"
    mock_completions.create.assert_called_once_with(
        model="test-model",
        messages=[
            {"role": "system", "content": "system text"},
            {"role": "user", "content": "write about X"},
        ],
    )


@pytest.mark.asyncio
async def test_complete_falls_back_when_content_is_not_text():
    mock_client_instance, _ = _mock_openai([{"type": "image_url"}])

    with patch("contentgen.generation.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(model_name="test-model")
        result = await client.complete("system", "user")

    assert result == NO_CONTENT_FALLBACK == "No content generated"


@pytest.mark.asyncio
async def test_complete_falls_back_when_no_choices():
    mock_client_instance, _ = _mock_openai(choices=False)

    with patch("contentgen.generation.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(model_name="test-model")
        result = await client.complete("system", "user")

    assert result == "No content generated"


@pytest.mark.asyncio
async def test_provider_errors_surface_as_completion_failures():
    request = httpx.Request("POST", "https://llm.example.com/v1/chat/completions")
    error = openai.APIConnectionError(request=request)
    mock_client_instance, mock_completions = _mock_openai(side_effect=error)

    with patch("contentgen.generation.llm_client.AsyncOpenAI", return_value=mock_client_instance):
        client = LLMClient(model_name="test-model")
        with pytest.raises(CompletionServiceError):
            await client.complete("system", "user")

    # No retries
    mock_completions.create.assert_called_once()
