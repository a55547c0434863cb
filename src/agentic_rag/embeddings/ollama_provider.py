"""Ollama embedding provider — local-first, no API keys needed.

Uses the Ollama REST API (http://localhost:11434) with models like
``nomic-embed-text``, ``mxbai-embed-large``, etc.
"""

from __future__ import annotations

import logging

import httpx

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import MalformedOutputError, TransportFailureError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "nomic-embed-text"
DEFAULT_BASE_URL = "http://localhost:11434"
DEFAULT_DIM = 768


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embed text via a local Ollama server."""

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        dimension: int = DEFAULT_DIM,
        timeout: float = 60.0,
    ):
        self.model = model
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip("/")
        self._dimension = dimension
        self._client = httpx.Client(base_url=self.base_url, timeout=timeout)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        if not texts:
            return []

        data = self._post("/api/embed", {"model": self.model, "input": texts})
        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list) or len(embeddings) != len(texts):
            raise TransportFailureError(
                f"Ollama returned {len(embeddings or [])} embeddings for {len(texts)} texts"
            )
        return embeddings

    def embed_query(self, query: str) -> list[float]:
        return self.embed_texts([query])[0]

    @property
    def dimension(self) -> int:
        return self._dimension

    # ------------------------------------------------------------------
    # Private
    # ------------------------------------------------------------------

    def _post(self, path: str, payload: dict) -> dict:
        try:
            resp = self._client.post(path, json=payload)
            resp.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportFailureError(f"Ollama embedding request failed: {exc}") from exc

        try:
            data = resp.json()
        except ValueError as exc:
            raise MalformedOutputError(f"Ollama returned a non-JSON body: {resp.text[:200]!r}") from exc
        if not isinstance(data, dict):
            raise MalformedOutputError(f"Ollama returned {type(data).__name__}, expected an object")
        if "error" in data:
            raise TransportFailureError(f"Ollama error ({self.model}): {data['error']}")
        return data
