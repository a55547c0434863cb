"""Qdrant vector index — production-grade, cosine distance.

Requires the ``qdrant`` extra. Supports Qdrant Cloud, a local server, an
embedded on-disk store, or ``:memory:`` for tests.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from agentic_rag.errors import TransportFailureError
from agentic_rag.vectorstore.base import DEFAULT_INDEX_NAME, VectorIndex
from agentic_rag.vectorstore.schemas import IndexHit, IndexRecord

logger = logging.getLogger(__name__)

# Payload key holding the caller's string id (Qdrant ids must be UUIDs or ints)
_RECORD_ID_KEY = "record_id"


class QdrantIndex(VectorIndex):
    """Qdrant-backed vector index."""

    def __init__(
        self,
        name: str = DEFAULT_INDEX_NAME,
        dimension: int = 768,
        url: str | None = None,
        api_key: str | None = None,
        path: str | None = None,
        timeout: int = 30,
        **kwargs: Any,
    ):
        try:
            from qdrant_client import QdrantClient, models
            from qdrant_client.http.exceptions import (
                ResponseHandlingException,
                UnexpectedResponse,
            )
        except ImportError as exc:
            raise ImportError(
                "qdrant-client required: pip install agentic-rag[qdrant]"
            ) from exc

        super().__init__(name=name, dimension=dimension, **kwargs)
        self._models = models
        self._transport_errors: tuple[type[Exception], ...] = (
            UnexpectedResponse,
            ResponseHandlingException,
            ConnectionError,
            TimeoutError,
        )

        if url:
            self._client = QdrantClient(url=url, api_key=api_key, timeout=timeout)
        elif path:
            self._client = QdrantClient(path=path)
        else:
            # In-memory for testing
            self._client = QdrantClient(":memory:")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def count(self) -> int:
        if not self._exists():
            return 0
        with self._transport(f"count '{self.name}'"):
            info = self._client.get_collection(self.name)
        return info.points_count or 0

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    def _exists(self) -> bool:
        with self._transport(f"look up collection '{self.name}'"):
            return self._client.collection_exists(self.name)

    def _create(self) -> None:
        with self._transport(f"create collection '{self.name}'"):
            self._client.create_collection(
                collection_name=self.name,
                vectors_config=self._models.VectorParams(
                    size=self.dimension,
                    distance=self._models.Distance.COSINE,
                ),
            )

    def _is_ready(self) -> bool:
        with self._transport(f"read status of '{self.name}'"):
            info = self._client.get_collection(self.name)
        return info.status == self._models.CollectionStatus.GREEN

    def _drop(self) -> None:
        with self._transport(f"delete collection '{self.name}'"):
            self._client.delete_collection(self.name)

    def _upsert(self, records: list[IndexRecord]) -> int:
        points = [
            self._models.PointStruct(
                id=self._point_id(record.id),
                vector=record.vector,
                payload={**record.metadata, _RECORD_ID_KEY: record.id},
            )
            for record in records
        ]
        with self._transport(f"upsert into '{self.name}'"):
            self._client.upsert(collection_name=self.name, points=points, wait=True)
        return len(points)

    def _query(self, vector: list[float], k: int) -> list[IndexHit]:
        if not self._exists():
            return []

        with self._transport(f"query '{self.name}'"):
            response = self._client.query_points(
                collection_name=self.name,
                query=vector,
                limit=k,
                with_payload=True,
            )

        hits: list[IndexHit] = []
        for point in response.points:
            payload = dict(point.payload or {})
            record_id = payload.pop(_RECORD_ID_KEY, str(point.id))
            hits.append(IndexHit(
                id=record_id,
                score=point.score if point.score is not None else 0.0,
                metadata=payload,
            ))
        return hits

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _point_id(self, record_id: str) -> str:
        return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{self.name}/{record_id}"))

    @contextmanager
    def _transport(self, what: str) -> Iterator[None]:
        try:
            yield
        except self._transport_errors as exc:
            raise TransportFailureError(f"Qdrant failed to {what}: {exc}") from exc
