# /tests/test_providers.py

import json
import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from promptforge.core.config import OPENROUTER_API_URL, OPENROUTER_DEFAULT_MODEL, MINIMAX_API_URL, MINIMAX_MODEL
from promptforge.core.errors import ConfigurationError, ProviderError
from promptforge.services.ai_providers.base import parse_chat_completion
from promptforge.services.ai_providers.gemini_provider import GeminiProvider
from promptforge.services.ai_providers.http_chat_provider import HTTPChatProvider
from promptforge.services.ai_providers.minimax_provider import MiniMaxProvider
from promptforge.services.ai_providers.openrouter_provider import OpenRouterProvider
from promptforge.services.ai_providers.registry import resolve_provider, provider_name_for_model


def _chat_response(content="<file path=\"a.txt\" type=\"text\">a</file>", total_tokens=42):
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"total_tokens": total_tokens},
    }


class RecordingHandler:
    """httpx.MockTransport handler that records every request and returns a canned response."""

    def __init__(self, response: httpx.Response):
        self.response = response
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response


# --- OpenAI-style payload parsing ---

def test_parse_chat_completion_reads_text_and_usage():
    result = parse_chat_completion("openrouter", _chat_response(content="hello", total_tokens=7))
    assert result.text == "hello"
    assert result.total_tokens == 7


@pytest.mark.parametrize("payload", [{}, {"choices": []}, {"choices": [{"message": {}}]}, {"choices": [{"message": {"content": None}}]}])
def test_parse_chat_completion_rejects_malformed_payloads(payload):
    with pytest.raises(ProviderError):
        parse_chat_completion("openrouter", payload)


# --- OpenRouter ---

@pytest.mark.asyncio
async def test_openrouter_sends_chat_request_with_hint():
    handler = RecordingHandler(httpx.Response(200, json=_chat_response()))
    provider = OpenRouterProvider("sk-test", transport=httpx.MockTransport(handler))

    result = await provider.complete("Build a todo app", "SYSTEM", "openai/gpt-4o")

    assert result.text.startswith("<file")
    assert result.total_tokens == 42
    request = handler.requests[0]
    assert str(request.url) == OPENROUTER_API_URL
    assert request.headers["Authorization"] == "Bearer sk-test"
    assert "HTTP-Referer" in request.headers
    assert request.headers["X-Title"] == "PromptForge"
    body = json.loads(request.content)
    assert body["model"] == "openai/gpt-4o"
    assert body["messages"] == [
        {"role": "system", "content": "SYSTEM"},
        {"role": "user", "content": "Build a todo app"},
    ]
    assert body["temperature"] == 0.7
    assert body["max_tokens"] == 8000


@pytest.mark.asyncio
async def test_openrouter_uses_default_model_without_hint():
    handler = RecordingHandler(httpx.Response(200, json=_chat_response()))
    provider = OpenRouterProvider("sk-test", transport=httpx.MockTransport(handler))

    await provider.complete("p", "s")

    assert json.loads(handler.requests[0].content)["model"] == OPENROUTER_DEFAULT_MODEL


@pytest.mark.asyncio
async def test_non_2xx_status_raises_provider_error_with_status():
    handler = RecordingHandler(httpx.Response(429, text="Rate limit exceeded"))
    provider = OpenRouterProvider("sk-test", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError) as exc_info:
        await provider.complete("p", "s")

    assert exc_info.value.status_code == 429
    assert "Rate limit exceeded" in str(exc_info.value)
    assert str(exc_info.value).startswith("openrouter API error 429")


@pytest.mark.asyncio
async def test_transport_failure_raises_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    provider = OpenRouterProvider("sk-test", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError) as exc_info:
        await provider.complete("p", "s")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_non_json_body_raises_provider_error():
    handler = RecordingHandler(httpx.Response(200, text="<html>gateway</html>"))
    provider = OpenRouterProvider("sk-test", transport=httpx.MockTransport(handler))

    with pytest.raises(ProviderError):
        await provider.complete("p", "s")


# --- MiniMax ---

@pytest.mark.asyncio
async def test_minimax_uses_fixed_model_and_disables_streaming():
    handler = RecordingHandler(httpx.Response(200, json=_chat_response(total_tokens=None)))
    provider = MiniMaxProvider("mm-test", transport=httpx.MockTransport(handler))

    result = await provider.complete("p", "s", "ignored-hint")

    assert result.total_tokens is None
    request = handler.requests[0]
    assert str(request.url) == MINIMAX_API_URL
    body = json.loads(request.content)
    assert body["model"] == MINIMAX_MODEL
    assert body["stream"] is False


# --- Gemini ---

@pytest.mark.asyncio
async def test_gemini_calls_sdk_with_system_instruction(mocker):
    genai = mocker.patch("promptforge.services.ai_providers.gemini_provider.genai")
    response = MagicMock(parts=["part"], text="generated", usage_metadata=MagicMock(total_token_count=99))
    model = genai.GenerativeModel.return_value
    model.generate_content_async = AsyncMock(return_value=response)

    provider = GeminiProvider("g-key")
    result = await provider.complete("p", "SYSTEM", "gemini-1.5-pro")

    genai.configure.assert_called_once_with(api_key="g-key")
    genai.GenerativeModel.assert_called_once_with("gemini-1.5-pro", system_instruction="SYSTEM")
    assert result.text == "generated"
    assert result.total_tokens == 99


@pytest.mark.asyncio
async def test_gemini_sdk_failure_becomes_provider_error(mocker):
    genai = mocker.patch("promptforge.services.ai_providers.gemini_provider.genai")
    genai.GenerativeModel.return_value.generate_content_async = AsyncMock(side_effect=RuntimeError("quota"))

    with pytest.raises(ProviderError) as exc_info:
        await GeminiProvider("g-key").complete("p", "s")

    assert "quota" in str(exc_info.value)


@pytest.mark.asyncio
async def test_gemini_empty_response_is_provider_error(mocker):
    genai = mocker.patch("promptforge.services.ai_providers.gemini_provider.genai")
    genai.GenerativeModel.return_value.generate_content_async = AsyncMock(return_value=MagicMock(parts=[]))

    with pytest.raises(ProviderError):
        await GeminiProvider("g-key").complete("p", "s")


def test_gemini_model_resolution():
    assert GeminiProvider.resolve_model("gemini-1.5-pro") == "gemini-1.5-pro"
    assert GeminiProvider.resolve_model("gemini") == "gemini-2.5-flash"
    assert GeminiProvider.resolve_model(None) == "gemini-2.5-flash"


# --- Registry ---

@pytest.mark.parametrize("model, provider_name", [
    (None, "openrouter"),
    ("anthropic/claude-3.5-sonnet", "openrouter"),
    ("minimax", "minimax"),
    ("gemini", "gemini"),
    ("gemini-2.5-flash", "gemini"),
    ("google/gemini-pro-1.5", "openrouter"),
])
def test_provider_name_for_model(model, provider_name):
    assert provider_name_for_model(model) == provider_name


def test_resolve_provider_builds_adapter_and_hint(monkeypatch):
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-or")
    monkeypatch.setenv("MINIMAX_API_KEY", "sk-mm")

    adapter, hint = resolve_provider("anthropic/claude-3.5-sonnet")
    assert isinstance(adapter, OpenRouterProvider)
    assert adapter.api_key == "sk-or"
    assert hint == "anthropic/claude-3.5-sonnet"

    adapter, hint = resolve_provider("openrouter")
    assert isinstance(adapter, OpenRouterProvider)
    assert hint is None

    adapter, hint = resolve_provider("minimax")
    assert isinstance(adapter, MiniMaxProvider)
    assert hint is None


def test_resolve_provider_without_credential_is_configuration_error(monkeypatch):
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)

    with pytest.raises(ConfigurationError, match="OPENROUTER_API_KEY not configured"):
        resolve_provider(None)


def test_http_chat_provider_requires_model_resolution():
    with pytest.raises(TypeError):
        HTTPChatProvider("sk-test")
