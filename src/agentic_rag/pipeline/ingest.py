"""Ingestion pipeline — (drop) → load → split → embed → upsert.

This is the entry point for filling the vector index.
"""

from __future__ import annotations

import logging

from agentic_rag.documents.base import DocumentSource
from agentic_rag.documents.schemas import DocumentChunk
from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.embeddings.batching import DEFAULT_BATCH_SIZE, embed_in_batches
from agentic_rag.errors import ConfigurationError
from agentic_rag.pipeline.schemas import IngestResult
from agentic_rag.vectorstore.base import VectorIndex
from agentic_rag.vectorstore.schemas import TEXT_KEY, IndexRecord, sanitize_metadata

logger = logging.getLogger(__name__)

DEFAULT_UPSERT_BATCH_SIZE = 10


class IngestPipeline:
    """Orchestrates document ingestion into a ``VectorIndex``.

    Two batch sizes are used on purpose: ``embed_batch_size`` bounds the
    number of concurrent embedding calls, ``upsert_batch_size`` bounds the
    number of records per index write.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        vector_index: VectorIndex,
        source: DocumentSource | None = None,
        embed_batch_size: int = DEFAULT_BATCH_SIZE,
        upsert_batch_size: int = DEFAULT_UPSERT_BATCH_SIZE,
    ):
        if upsert_batch_size < 1:
            raise ConfigurationError(
                f"Upsert batch size must be positive, got {upsert_batch_size}"
            )
        self.embedding_provider = embedding_provider
        self.vector_index = vector_index
        self.source = source
        self.embed_batch_size = embed_batch_size
        self.upsert_batch_size = upsert_batch_size

    def ingest(self, force_reindex: bool = False) -> IngestResult:
        """Run a full ingestion from the document source.

        Args:
            force_reindex: Drop the whole index before loading anything.

        Returns:
            An ``IngestResult`` with document and chunk counts.
        """
        if self.source is None:
            raise ConfigurationError("IngestPipeline has no document source")

        logger.info("Starting document ingestion process...")
        if force_reindex:
            logger.info("Force reindexing requested. Deleting existing index...")
            self.vector_index.drop_index()

        documents = self.source.load_documents()
        if not documents:
            logger.info("No documents found to ingest.")
            return IngestResult(reindexed=force_reindex)

        chunks = self.source.split_documents(documents)
        result = self.upsert_batch(chunks)
        result.documents_count = len(documents)
        result.reindexed = force_reindex

        logger.info(
            "Ingestion complete. Processed %d documents into %d chunks.",
            result.documents_count,
            result.chunks_count,
        )
        return result

    def upsert_batch(self, chunks: list[DocumentChunk]) -> IngestResult:
        """Embed and upsert ``chunks`` with ids ``doc_0`` … ``doc_{n-1}``.

        All metadata is validated before anything is written, so a bad chunk
        aborts the run without a partial upsert. An embedding failure for a
        single chunk does not: that chunk is stored with a zero vector.

        Raises:
            ConfigurationError: Metadata outside the allow-list, or an
                embedding dimension that does not match the index.
        """
        metadata = [sanitize_metadata(chunk.metadata) for chunk in chunks]
        result = IngestResult(chunks_count=len(chunks))
        if not chunks:
            return result

        if self.embedding_provider.dimension != self.vector_index.dimension:
            raise ConfigurationError(
                f"Embedding dimension {self.embedding_provider.dimension} does not match "
                f"index dimension {self.vector_index.dimension}"
            )

        self.vector_index.ensure_index()

        # Ids come from one counter for the whole run, not per batch
        for start in range(0, len(chunks), self.upsert_batch_size):
            batch = chunks[start : start + self.upsert_batch_size]
            embedded = embed_in_batches(
                self.embedding_provider,
                [c.text for c in batch],
                batch_size=self.embed_batch_size,
            )

            records = [
                IndexRecord(
                    id=f"doc_{start + offset}",
                    vector=vector,
                    metadata={**metadata[start + offset], TEXT_KEY: chunk.text},
                )
                for offset, (chunk, vector) in enumerate(
                    zip(batch, embedded.vectors, strict=True)
                )
            ]

            result.records_upserted += self.vector_index.upsert(records)
            result.failed_embeddings += len(embedded.failed_indices)

        logger.info(
            "Successfully added %d chunks to index '%s' (%d zero-vector fallbacks)",
            result.records_upserted,
            self.vector_index.name,
            result.failed_embeddings,
        )
        return result
