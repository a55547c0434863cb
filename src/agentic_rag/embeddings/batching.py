"""Best-effort batched embedding for ingestion.

Each batch fans out one request per text on a thread pool and waits for all
of them before the next batch starts, so at most ``batch_size`` embedding
calls are ever in flight. A text whose embedding fails gets a zero vector.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5


@dataclass
class EmbeddingBatchResult:
    """Vectors for every input text plus the positions that fell back to zeros."""

    vectors: list[list[float]] = field(default_factory=list)
    failed_indices: list[int] = field(default_factory=list)


def zero_vector(dimension: int) -> list[float]:
    return [0.0] * dimension


def embed_in_batches(
    provider: EmbeddingProvider,
    texts: list[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> EmbeddingBatchResult:
    """Embed ``texts`` in sequential batches of concurrent single-text calls.

    Args:
        provider: The embedding service.
        texts: Texts to embed, in order.
        batch_size: Maximum concurrent embedding calls.

    Returns:
        An ``EmbeddingBatchResult`` with one vector per input, same order.

    Raises:
        ConfigurationError: The provider returned a vector of the wrong size.
    """
    if batch_size < 1:
        raise ConfigurationError(f"Embedding batch size must be positive, got {batch_size}")

    dimension = provider.dimension
    result = EmbeddingBatchResult()
    total_batches = (len(texts) + batch_size - 1) // batch_size

    with ThreadPoolExecutor(max_workers=batch_size, thread_name_prefix="embed") as pool:
        for batch_no, start in enumerate(range(0, len(texts), batch_size), 1):
            batch = texts[start : start + batch_size]
            logger.info("Generating embeddings for batch %d of %d", batch_no, total_batches)
            futures = [pool.submit(_embed_one, provider, text) for text in batch]

            for offset, future in enumerate(futures):
                vector = future.result()
                if vector is None:
                    result.failed_indices.append(start + offset)
                    vector = zero_vector(dimension)
                elif len(vector) != dimension:
                    raise ConfigurationError(
                        f"Embedding dimension mismatch: provider declared {dimension}, "
                        f"returned {len(vector)}"
                    )
                result.vectors.append(vector)

    if result.failed_indices:
        logger.warning(
            "Substituted zero vectors for %d of %d texts",
            len(result.failed_indices),
            len(texts),
        )
    return result


def _embed_one(provider: EmbeddingProvider, text: str) -> list[float] | None:
    try:
        return provider.embed_texts([text])[0]
    except ConfigurationError:
        raise
    except Exception as exc:
        logger.warning("Error generating embedding for text (%d chars): %s", len(text), exc)
        return None
