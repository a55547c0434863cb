"""Abstract base class for vector indexes.

The lifecycle methods (``ensure_index``, ``upsert``, ``query``,
``drop_index``) are concrete and enforce the shared invariants: single-flight
creation, bounded readiness wait, and fixed vector dimension. Backends only
implement the underscore hooks.
"""

from __future__ import annotations

import logging
import threading
import time
from abc import ABC, abstractmethod

from agentic_rag.errors import ConfigurationError, TransportFailureError
from agentic_rag.vectorstore.schemas import IndexHit, IndexRecord

logger = logging.getLogger(__name__)

DEFAULT_INDEX_NAME = "documents"


class VectorIndex(ABC):
    """Interface for vector index backends (cosine similarity)."""

    def __init__(
        self,
        name: str = DEFAULT_INDEX_NAME,
        dimension: int = 768,
        similarity_threshold: float = 0.0,
        ready_timeout: float = 60.0,
        poll_interval: float = 1.0,
    ):
        if dimension < 1:
            raise ConfigurationError(f"Index dimension must be positive, got {dimension}")
        self.name = name
        self.dimension = dimension
        self.similarity_threshold = similarity_threshold
        self.ready_timeout = ready_timeout
        self.poll_interval = poll_interval
        self._ready = False
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def ensure_index(self) -> None:
        """Create the index if it is missing and wait until it is queryable.

        Safe to call any number of times, from any number of threads. A
        concurrent creator in another process is tolerated: if our create
        call fails but the index now exists, that counts as success.

        Raises:
            TransportFailureError: The index did not become ready in time.
        """
        if self._ready:
            return

        with self._lock:
            if self._ready:
                return

            if not self._exists():
                logger.info(
                    "Creating index '%s' (dim=%d, metric=cosine)", self.name, self.dimension
                )
                try:
                    self._create()
                except Exception:
                    if not self._exists():
                        raise
                    logger.info("Index '%s' was created concurrently", self.name)
                self._wait_until_ready()

            self._ready = True
            logger.info("Using index '%s'", self.name)

    def drop_index(self) -> None:
        """Delete the whole index if present; no-op otherwise."""
        with self._lock:
            if self._exists():
                self._drop()
                logger.info("Deleted index '%s'", self.name)
            else:
                logger.info("Index '%s' does not exist, nothing to delete", self.name)
            self._ready = False

    def exists(self) -> bool:
        """Return whether the backing index exists."""
        return self._exists()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------

    def upsert(self, records: list[IndexRecord]) -> int:
        """Insert or overwrite records by id.

        Returns:
            Number of records written.

        Raises:
            ConfigurationError: A vector has the wrong dimension.
        """
        if not records:
            return 0
        for record in records:
            self._check_dimension(record.vector, f"record '{record.id}'")
        self.ensure_index()
        written = self._upsert(records)
        logger.info("Upserted %d records into '%s'", written, self.name)
        return written

    def query(self, vector: list[float], k: int = 4) -> list[IndexHit]:
        """Return up to ``k`` hits, most similar first.

        Only hits scoring above ``similarity_threshold`` are kept.

        Raises:
            ConfigurationError: ``vector`` has the wrong dimension.
        """
        self._check_dimension(vector, "query vector")
        if k < 1:
            return []
        hits = self._query(vector, k)
        return [h for h in hits if h.score > self.similarity_threshold]

    @abstractmethod
    def count(self) -> int:
        """Return the number of records in the index (0 if absent)."""

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _exists(self) -> bool:
        """Return whether the backing index exists."""

    @abstractmethod
    def _create(self) -> None:
        """Create the backing index with ``name``, ``dimension``, cosine metric."""

    @abstractmethod
    def _drop(self) -> None:
        """Delete the backing index."""

    @abstractmethod
    def _upsert(self, records: list[IndexRecord]) -> int:
        """Write records, overwriting existing ids."""

    @abstractmethod
    def _query(self, vector: list[float], k: int) -> list[IndexHit]:
        """Nearest-neighbour search, highest score first."""

    def _is_ready(self) -> bool:
        """Return whether a freshly created index accepts queries."""
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _wait_until_ready(self) -> None:
        deadline = time.monotonic() + self.ready_timeout
        while not self._is_ready():
            if time.monotonic() >= deadline:
                raise TransportFailureError(
                    f"Index '{self.name}' not ready after {self.ready_timeout:.0f}s"
                )
            logger.info("Waiting for index '%s' initialization...", self.name)
            time.sleep(self.poll_interval)

    def _check_dimension(self, vector: list[float], what: str) -> None:
        if len(vector) != self.dimension:
            raise ConfigurationError(
                f"Dimension mismatch for {what}: expected {self.dimension}, got {len(vector)}"
            )

    @classmethod
    def store_name(cls) -> str:
        """Return human-readable store name."""
        return cls.__name__
