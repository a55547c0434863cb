"""Vector index factory — registry and lazy import.

Every call builds a new index client. ``AppContext`` keeps the one instance
the application shares, so the retriever and the ingestion pipeline see the
same index.
"""

from __future__ import annotations

import importlib
import logging

from agentic_rag.errors import ConfigurationError
from agentic_rag.vectorstore.base import VectorIndex

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Store registry: (store_key, module_path, class_name)
# ---------------------------------------------------------------------------

_STORE_REGISTRY: list[tuple[str, str, str]] = [
    ("faiss", "agentic_rag.vectorstore.faiss_store", "FAISSIndex"),
    ("qdrant", "agentic_rag.vectorstore.qdrant_store", "QdrantIndex"),
]


def get_vector_index(
    backend: str = "faiss",
    **kwargs,
) -> VectorIndex:
    """Build a vector index by backend name.

    Args:
        backend: One of ``faiss``, ``qdrant``.
        **kwargs: Passed to the index constructor.

    Returns:
        A new ``VectorIndex`` instance.
    """
    key = backend.lower()

    for reg_key, module_path, cls_name in _STORE_REGISTRY:
        if reg_key == key:
            mod = importlib.import_module(module_path)
            cls = getattr(mod, cls_name)
            instance = cls(**kwargs)
            logger.info("Vector store ready: %s", cls_name)
            return instance

    available = [k for k, _, _ in _STORE_REGISTRY]
    raise ConfigurationError(f"Unknown vector store '{backend}'. Available: {available}")


def available_stores() -> list[str]:
    """Return names of registered vector index backends."""
    return [k for k, _, _ in _STORE_REGISTRY]
