"""Retriever — ensure index, embed query, search, map hits to chunks."""

from __future__ import annotations

import logging

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import MalformedOutputError, TransportFailureError
from agentic_rag.retrieval.schemas import DEFAULT_TOP_K, RetrievalResult, RetrievedChunk
from agentic_rag.vectorstore.base import VectorIndex
from agentic_rag.vectorstore.schemas import TEXT_KEY

logger = logging.getLogger(__name__)


class Retriever:
    """Orchestrates ensure-index → embedding → similarity query.

    The embedding provider must be the one used at ingestion time.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_index: VectorIndex,
        top_k: int = DEFAULT_TOP_K,
    ):
        self.embedding_provider = embedding_provider
        self.vector_index = vector_index
        self.top_k = top_k

    def retrieve(self, question: str, k: int | None = None) -> RetrievalResult:
        """Return up to ``k`` chunks relevant to ``question``, best first.

        An empty index, no hit above the relevance threshold, a transport
        failure or an unreadable embedding response all yield an empty list.

        Raises:
            ConfigurationError: Embedding and index dimensions disagree.
        """
        k = self.top_k if k is None else k

        try:
            self.vector_index.ensure_index()
            query_vector = self.embedding_provider.embed_query(question)
            hits = self.vector_index.query(query_vector, k=k)
        except (TransportFailureError, MalformedOutputError) as exc:
            logger.warning("Retrieval failed, treating as no results: %s", exc)
            return []

        chunks = [
            RetrievedChunk(
                text=str(hit.metadata.get(TEXT_KEY, "")),
                score=hit.score,
                metadata={key: v for key, v in hit.metadata.items() if key != TEXT_KEY},
            )
            for hit in hits
        ]

        logger.info("Retrieved %d chunks (k=%d)", len(chunks), k)
        return chunks
