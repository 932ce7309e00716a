"""Tests for the Gemini request primitive and response parsing."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from qiita_analytics.config import LoggingConfig, PromptConfig, ProviderConfig
from qiita_analytics.errors import AIRequestError, ConfigurationError
from qiita_analytics.llm.providers.factory import available_providers, create_provider
from qiita_analytics.llm.providers.gemini import GeminiProvider, _extract_text


def _provider(handler, api_key: str | None = "test-key") -> GeminiProvider:
    return GeminiProvider(
        ProviderConfig(model="test-model"),
        PromptConfig(),
        api_key,
        LoggingConfig(),
        transport=httpx.MockTransport(handler),
    )


def _ok(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def test_generate_posts_prompt_with_key_parameter():
    seen: dict = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return _ok("generated")

    result = asyncio.run(_provider(handler).generate("hello"))

    assert result == "generated"
    assert seen["path"] == "/v1beta/models/test-model:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"] == {"contents": [{"parts": [{"text": "hello"}]}]}


def test_missing_text_path_returns_placeholder():
    provider = _provider(lambda request: httpx.Response(200, json={"candidates": []}))

    assert asyncio.run(provider.generate("hello")) == PromptConfig().empty_response_text


def test_blank_text_returns_placeholder():
    provider = _provider(lambda request: _ok("   \n"))

    assert asyncio.run(provider.generate("hello")) == PromptConfig().empty_response_text


def test_error_body_message_is_used_verbatim():
    body = {"error": {"code": 400, "message": "API key not valid. Please pass a valid API key."}}
    provider = _provider(lambda request: httpx.Response(400, json=body))

    with pytest.raises(AIRequestError, match="API key not valid"):
        asyncio.run(provider.generate("hello"))


def test_error_without_message_falls_back_to_generic():
    provider = _provider(lambda request: httpx.Response(500, text="oops"))

    with pytest.raises(AIRequestError, match="Gemini API request failed"):
        asyncio.run(provider.generate("hello"))


def test_network_failure_becomes_ai_request_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    with pytest.raises(AIRequestError):
        asyncio.run(_provider(handler).generate("hello"))


def test_missing_key_raises_configuration_error_without_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return _ok("never")

    provider = _provider(handler, api_key=None)

    assert provider.is_configured is False
    with pytest.raises(ConfigurationError):
        asyncio.run(provider.generate("hello"))
    assert calls == []


def test_extract_text_joins_non_thought_parts():
    data = {
        "candidates": [
            {
                "content": {
                    "parts": [
                        {"thought": True, "text": "internal reasoning"},
                        {"text": "・First"},
                        {"text": "\n・Second"},
                    ]
                }
            }
        ]
    }

    assert _extract_text(data) == "・First\n・Second"


def test_extract_text_handles_missing_parts():
    assert _extract_text({}) == ""
    assert _extract_text({"candidates": [{"content": {}}]}) == ""


def test_create_provider_gemini_reads_env_key(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "env-key")

    provider = create_provider(ProviderConfig(), PromptConfig(), LoggingConfig())

    assert isinstance(provider, GeminiProvider)
    assert provider.api_key == "env-key"
    assert "gemini" in available_providers()


def test_create_provider_rejects_unknown_backend():
    with pytest.raises(ConfigurationError, match="Unsupported provider"):
        create_provider(ProviderConfig(name="unknown"), PromptConfig(), LoggingConfig())
