"""Embedding provider factory — registry and lazy import.

Every call builds a new provider. ``AppContext`` keeps the one instance that
ingestion and retrieval share.
"""

from __future__ import annotations

import importlib
import logging

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import ConfigurationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Provider registry: (provider_key, module_path, class_name)
# ---------------------------------------------------------------------------

_PROVIDER_REGISTRY: list[tuple[str, str, str]] = [
    ("ollama", "agentic_rag.embeddings.ollama_provider", "OllamaEmbeddingProvider"),
    ("openai", "agentic_rag.embeddings.openai_provider", "OpenAIEmbeddingProvider"),
]


def get_embedding_provider(
    provider: str = "ollama",
    **kwargs,
) -> EmbeddingProvider:
    """Build an embedding provider by name.

    Args:
        provider: One of ``ollama``, ``openai``.
        **kwargs: Passed to the provider constructor.

    Returns:
        A new ``EmbeddingProvider`` instance.

    Raises:
        ConfigurationError: The provider name is not registered.
    """
    key = provider.lower()

    for reg_key, module_path, cls_name in _PROVIDER_REGISTRY:
        if reg_key == key:
            mod = importlib.import_module(module_path)
            cls = getattr(mod, cls_name)
            instance = cls(**kwargs)
            logger.info("Embedding provider ready: %s", cls_name)
            return instance

    available = [k for k, _, _ in _PROVIDER_REGISTRY]
    raise ConfigurationError(f"Unknown embedding provider '{provider}'. Available: {available}")


def available_providers() -> list[str]:
    """Return names of registered embedding providers."""
    return [k for k, _, _ in _PROVIDER_REGISTRY]
