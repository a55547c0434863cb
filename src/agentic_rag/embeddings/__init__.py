"""Embedding providers — Ollama, OpenAI — and batched ingestion embedding."""

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.embeddings.batching import EmbeddingBatchResult, embed_in_batches
from agentic_rag.embeddings.factory import available_providers, get_embedding_provider

__all__ = [
    "EmbeddingBatchResult",
    "EmbeddingProvider",
    "available_providers",
    "embed_in_batches",
    "get_embedding_provider",
]
