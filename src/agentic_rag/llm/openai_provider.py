"""OpenAI LLM provider — GPT-4o and OpenAI-compatible endpoints.

Requires the ``openai`` extra and ``OPENAI_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from typing import Any

from agentic_rag.errors import ConfigurationError, TransportFailureError
from agentic_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"


class OpenAILLMProvider(LLMProvider):
    """Generate responses via the OpenAI Chat API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        base_url: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.2,
        timeout: float = 120.0,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install agentic-rag[openai]"
            ) from exc

        self._openai = openai
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature

        kwargs: dict[str, Any] = {"timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url

        try:
            self._client: Any = openai.OpenAI(**kwargs)
        except openai.OpenAIError as exc:
            raise ConfigurationError(f"OpenAI client misconfigured: {exc}") from exc

    def generate(self, prompt: str, system: str | None = None) -> str:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except self._openai.AuthenticationError as exc:
            raise ConfigurationError(f"OpenAI rejected credentials: {exc}") from exc
        except self._openai.APIError as exc:
            raise TransportFailureError(f"OpenAI generation failed: {exc}") from exc
        return response.choices[0].message.content or ""
