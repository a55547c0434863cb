"""FAISS vector index — local, zero infrastructure.

Cosine similarity is inner product over L2-normalised vectors. String record
ids are mapped to int64 FAISS ids through ``IndexIDMap2`` so upserting an
existing id replaces it. When ``path`` is set the index and its metadata are
written to disk after every upsert and loaded on construction.
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import Any

import numpy as np

from agentic_rag.errors import ConfigurationError
from agentic_rag.vectorstore.base import DEFAULT_INDEX_NAME, VectorIndex
from agentic_rag.vectorstore.schemas import IndexHit, IndexRecord

logger = logging.getLogger(__name__)

_INDEX_FILE = "index.faiss"
_META_FILE = "metadata.json"


class FAISSIndex(VectorIndex):
    """FAISS-backed vector index with id overwrite and optional persistence."""

    def __init__(
        self,
        name: str = DEFAULT_INDEX_NAME,
        dimension: int = 768,
        path: str | None = None,
        **kwargs: Any,
    ):
        try:
            import faiss
        except ImportError as exc:
            raise ImportError(
                "faiss-cpu required: pip install agentic-rag[faiss]"
            ) from exc

        super().__init__(name=name, dimension=dimension, **kwargs)
        self._faiss = faiss
        self._dir = Path(path) / name if path else None
        self._index: Any = None
        self._ids: dict[str, int] = {}  # record id -> faiss int id
        self._metadata: dict[int, dict] = {}  # faiss int id -> metadata
        self._next_id = 0

        if self._dir is not None and (self._dir / _INDEX_FILE).exists():
            self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def count(self) -> int:
        return 0 if self._index is None else int(self._index.ntotal)

    # ------------------------------------------------------------------
    # Backend hooks
    # ------------------------------------------------------------------

    def _exists(self) -> bool:
        return self._index is not None

    def _create(self) -> None:
        self._index = self._faiss.IndexIDMap2(self._faiss.IndexFlatIP(self.dimension))
        self._ids.clear()
        self._metadata.clear()
        self._next_id = 0
        self._save()

    def _drop(self) -> None:
        self._index = None
        self._ids.clear()
        self._metadata.clear()
        self._next_id = 0
        if self._dir is not None and self._dir.exists():
            shutil.rmtree(self._dir)

    def _upsert(self, records: list[IndexRecord]) -> int:
        # Last write wins when the same id appears twice in one call
        latest: dict[str, IndexRecord] = {r.id: r for r in records}

        replaced = [self._ids[rid] for rid in latest if rid in self._ids]
        if replaced:
            self._index.remove_ids(np.array(replaced, dtype=np.int64))

        int_ids: list[int] = []
        for rid, record in latest.items():
            int_id = self._ids.get(rid)
            if int_id is None:
                int_id = self._next_id
                self._next_id += 1
                self._ids[rid] = int_id
            self._metadata[int_id] = dict(record.metadata)
            int_ids.append(int_id)

        vectors = np.array([r.vector for r in latest.values()], dtype=np.float32)
        self._faiss.normalize_L2(vectors)
        self._index.add_with_ids(vectors, np.array(int_ids, dtype=np.int64))

        self._save()
        return len(records)

    def _query(self, vector: list[float], k: int) -> list[IndexHit]:
        if self._index is None or self._index.ntotal == 0:
            return []

        query_vec = np.array([vector], dtype=np.float32)
        self._faiss.normalize_L2(query_vec)
        scores, indices = self._index.search(query_vec, min(k, self._index.ntotal))

        reverse = {int_id: rid for rid, int_id in self._ids.items()}
        hits: list[IndexHit] = []
        for score, idx in zip(scores[0], indices[0], strict=True):
            if idx == -1:
                continue
            int_id = int(idx)
            hits.append(IndexHit(
                id=reverse[int_id],
                score=float(score),
                metadata=dict(self._metadata.get(int_id, {})),
            ))
        return hits

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save(self) -> None:
        if self._dir is None or self._index is None:
            return
        self._dir.mkdir(parents=True, exist_ok=True)
        self._faiss.write_index(self._index, str(self._dir / _INDEX_FILE))
        with open(self._dir / _META_FILE, "w", encoding="utf-8") as fh:
            json.dump(
                {
                    "dimension": self.dimension,
                    "ids": self._ids,
                    "metadata": {str(k): v for k, v in self._metadata.items()},
                    "next_id": self._next_id,
                },
                fh,
            )

    def _load(self) -> None:
        with open(self._dir / _META_FILE, encoding="utf-8") as fh:
            data = json.load(fh)

        stored_dim = data.get("dimension", self.dimension)
        if stored_dim != self.dimension:
            raise ConfigurationError(
                f"Persisted index '{self.name}' has dimension {stored_dim}, "
                f"configured dimension is {self.dimension}; reindex with --force-reindex"
            )

        self._index = self._faiss.read_index(str(self._dir / _INDEX_FILE))
        self._ids = {k: int(v) for k, v in data["ids"].items()}
        self._metadata = {int(k): v for k, v in data["metadata"].items()}
        self._next_id = data.get("next_id", len(self._ids))
        logger.info("FAISSIndex loaded from %s (%d records)", self._dir, self.count())
