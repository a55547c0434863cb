"""Ollama LLM provider — local models over the REST API, no API keys."""

from __future__ import annotations

import logging

import httpx

from agentic_rag.errors import MalformedOutputError, TransportFailureError
from agentic_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "llama3.1:8b"
DEFAULT_BASE_URL = "http://localhost:11434"


class OllamaLLMProvider(LLMProvider):
    """Non-streaming completions from ``/api/generate``."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        temperature: float = 0.2,
        max_tokens: int = 4096,
        timeout: float = 120.0,
    ):
        self.model = model
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self.options = {"temperature": temperature, "num_predict": max_tokens}
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout)

    def generate(self, prompt: str, system: str | None = None) -> str:
        payload: dict = {
            "model": self.model,
            "prompt": prompt,
            "stream": False,
            "options": self.options,
        }
        if system:
            payload["system"] = system

        try:
            resp = self._client.post("/api/generate", json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportFailureError(f"Ollama generation failed ({self.model}): {exc}") from exc

        try:
            body = resp.json()
        except ValueError as exc:
            raise MalformedOutputError(f"Ollama returned a non-JSON body: {resp.text[:200]!r}") from exc
        if "error" in body:
            raise TransportFailureError(f"Ollama error ({self.model}): {body['error']}")
        return body.get("response", "")
