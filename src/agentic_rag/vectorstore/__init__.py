"""Vector index backends — FAISS (local) and Qdrant (production)."""

from agentic_rag.vectorstore.base import VectorIndex
from agentic_rag.vectorstore.factory import available_stores, get_vector_index
from agentic_rag.vectorstore.schemas import (
    TEXT_KEY,
    ChunkMetadata,
    IndexHit,
    IndexRecord,
    sanitize_metadata,
)

__all__ = [
    "TEXT_KEY",
    "ChunkMetadata",
    "IndexHit",
    "IndexRecord",
    "VectorIndex",
    "available_stores",
    "get_vector_index",
    "sanitize_metadata",
]
