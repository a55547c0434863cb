"""OpenAI embedding provider — text-embedding-3-small/large.

Requires ``openai`` extra and an API key via ``OPENAI_API_KEY`` env var.
"""

from __future__ import annotations

import logging
from typing import Any

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import ConfigurationError, TransportFailureError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "text-embedding-3-small"

_DIMENSION_MAP = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embed text via the OpenAI Embeddings API."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        api_key: str | None = None,
        base_url: str | None = None,
        dimension: int | None = None,
        timeout: float = 60.0,
    ):
        try:
            import openai
        except ImportError as exc:
            raise ImportError(
                "openai package required: pip install agentic-rag[openai]"
            ) from exc

        self._openai = openai
        self.model = model
        self._dimension = dimension or _DIMENSION_MAP.get(model, 1536)

        kwargs: dict[str, Any] = {"timeout": timeout}
        if api_key:
            kwargs["api_key"] = api_key
        if base_url:
            kwargs["base_url"] = base_url
        try:
            self._client: Any = openai.OpenAI(**kwargs)
        except openai.OpenAIError as exc:
            raise ConfigurationError(f"OpenAI client misconfigured: {exc}") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        kwargs: dict[str, Any] = {"model": self.model, "input": texts}
        if self.model.startswith("text-embedding-3"):
            kwargs["dimensions"] = self._dimension

        try:
            resp = self._client.embeddings.create(**kwargs)
        except self._openai.AuthenticationError as exc:
            raise ConfigurationError(f"OpenAI rejected credentials: {exc}") from exc
        except self._openai.APIError as exc:
            raise TransportFailureError(f"OpenAI embedding request failed: {exc}") from exc

        # Sort by index to guarantee order
        sorted_data = sorted(resp.data, key=lambda x: x.index)
        return [d.embedding for d in sorted_data]

    def embed_query(self, query: str) -> list[float]:
        return self.embed_texts([query])[0]

    @property
    def dimension(self) -> int:
        return self._dimension
