"""Retrieval — query embedding + similarity search."""

from agentic_rag.retrieval.retriever import Retriever
from agentic_rag.retrieval.schemas import DEFAULT_TOP_K, RetrievalResult, RetrievedChunk

__all__ = ["DEFAULT_TOP_K", "Retriever", "RetrievalResult", "RetrievedChunk"]
