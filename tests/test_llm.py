"""Tests for LLM providers — mocked transport, no network calls."""

from __future__ import annotations

import json

import httpx
import pytest
from conftest import ScriptedLLM

from agentic_rag.errors import ConfigurationError, MalformedOutputError, TransportFailureError
from agentic_rag.llm.base import LLMProvider
from agentic_rag.llm.factory import available_providers, get_llm_provider
from agentic_rag.llm.ollama_provider import OllamaLLMProvider


def _ollama(handler, **kwargs) -> OllamaLLMProvider:
    provider = OllamaLLMProvider(**kwargs)
    provider._client = httpx.Client(
        base_url=provider.base_url, transport=httpx.MockTransport(handler),
    )
    return provider


class TestLLMProviderABC:
    def test_cannot_instantiate_base(self):
        with pytest.raises(TypeError):
            LLMProvider()  # type: ignore[abstract]

    def test_provider_name(self):
        assert ScriptedLLM.provider_name() == "ScriptedLLM"


class TestOllamaLLMProvider:
    def test_generate(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "Paris"})

        provider = _ollama(handler, model="llama3.1:8b", temperature=0.0)
        assert provider.generate("Capital of France?", system="Be brief.") == "Paris"

        assert seen["path"] == "/api/generate"
        assert seen["body"]["model"] == "llama3.1:8b"
        assert seen["body"]["system"] == "Be brief."
        assert seen["body"]["stream"] is False
        assert seen["body"]["options"]["temperature"] == 0.0

    def test_no_system_prompt(self):
        def handler(request):
            assert "system" not in json.loads(request.content)
            return httpx.Response(200, json={"response": "ok"})

        assert _ollama(handler).generate("hi") == "ok"

    def test_http_error(self):
        provider = _ollama(lambda r: httpx.Response(503))
        with pytest.raises(TransportFailureError):
            provider.generate("hi")

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(TransportFailureError):
            _ollama(handler).generate("hi")

    def test_error_body(self):
        provider = _ollama(lambda r: httpx.Response(200, json={"error": "model not found"}))
        with pytest.raises(TransportFailureError, match="model not found"):
            provider.generate("hi")

    def test_non_json_body(self):
        provider = _ollama(lambda r: httpx.Response(200, text="<html>proxy</html>"))
        with pytest.raises(MalformedOutputError):
            provider.generate("hi")


class TestLLMFactory:
    def test_available_providers(self):
        assert set(available_providers()) == {"ollama", "openai"}

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            get_llm_provider("bedrock")

    def test_ollama(self):
        provider = get_llm_provider("ollama", model="mistral")
        assert isinstance(provider, OllamaLLMProvider)
        assert provider.model == "mistral"
