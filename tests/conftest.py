"""Shared fixtures for tests — mock providers and an in-memory index, no network calls."""

from __future__ import annotations

import hashlib
import textwrap
from pathlib import Path

import numpy as np
import pytest

from agentic_rag.documents.base import DocumentSource
from agentic_rag.documents.schemas import Document, DocumentChunk
from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.errors import TransportFailureError
from agentic_rag.llm.base import LLMProvider
from agentic_rag.vectorstore.base import VectorIndex
from agentic_rag.vectorstore.schemas import IndexHit, IndexRecord
from agentic_rag.weather.base import WeatherReading, WeatherSource

DIM = 64  # Small dimension for fast tests


# ---------------------------------------------------------------------------
# Mock providers
# ---------------------------------------------------------------------------


class MockEmbedder(EmbeddingProvider):
    """Deterministic hash embeddings; texts in ``fail_on`` raise a transport error."""

    def __init__(self, dim: int = DIM, fail_on: set[str] | None = None):
        self._dim = dim
        self.fail_on = fail_on or set()
        self.calls: list[list[str]] = []

    def embed_texts(self, texts: list[str]) -> list[list[float]]:
        self.calls.append(list(texts))
        for t in texts:
            if t in self.fail_on:
                raise TransportFailureError(f"embedding service down for {t!r}")
        return [self._hash_embed(t) for t in texts]

    def embed_query(self, query: str) -> list[float]:
        return self._hash_embed(query)

    @property
    def dimension(self) -> int:
        return self._dim

    def _hash_embed(self, text: str) -> list[float]:
        h = hashlib.sha256(text.encode()).digest()
        vec = np.array([h[i % len(h)] / 255.0 + 0.01 for i in range(self._dim)], dtype=np.float32)
        vec /= np.linalg.norm(vec)
        return vec.tolist()


class ScriptedLLM(LLMProvider):
    """Answers by the first rule whose marker appears in the prompt.

    A rule's response may be an exception instance, which is raised instead.
    """

    def __init__(self, rules: list[tuple[str, object]] | None = None, default: object = ""):
        self.model = "scripted-llm"
        self.rules = list(rules or [])
        self.default = default
        self.prompts: list[str] = []
        self.systems: list[str | None] = []

    def generate(self, prompt: str, system: str | None = None) -> str:
        self.prompts.append(prompt)
        self.systems.append(system)
        response = self.default
        for marker, candidate in self.rules:
            if marker in prompt:
                response = candidate
                break
        if isinstance(response, BaseException):
            raise response
        return str(response)


class FakeIndex(VectorIndex):
    """In-memory cosine index that records lifecycle events in order."""

    def __init__(self, dimension: int = DIM, **kwargs):
        super().__init__(dimension=dimension, **kwargs)
        self.events: list[str] = []
        self.records: dict[str, IndexRecord] = {}
        self.upsert_batches: list[list[str]] = []
        self.created = False
        self.query_error: Exception | None = None

    def count(self) -> int:
        return len(self.records)

    def _exists(self) -> bool:
        return self.created

    def _create(self) -> None:
        self.events.append("create")
        self.created = True

    def _drop(self) -> None:
        self.events.append("drop")
        self.created = False
        self.records.clear()

    def _upsert(self, records: list[IndexRecord]) -> int:
        self.events.append("upsert")
        self.upsert_batches.append([r.id for r in records])
        for r in records:
            self.records[r.id] = r
        return len(records)

    def _query(self, vector: list[float], k: int) -> list[IndexHit]:
        self.events.append("query")
        if self.query_error is not None:
            raise self.query_error
        q = np.asarray(vector, dtype=np.float32)
        hits = []
        for r in self.records.values():
            v = np.asarray(r.vector, dtype=np.float32)
            denom = float(np.linalg.norm(q) * np.linalg.norm(v)) or 1.0
            hits.append(IndexHit(id=r.id, score=float(q @ v) / denom, metadata=dict(r.metadata)))
        hits.sort(key=lambda h: h.score, reverse=True)
        return hits[:k]


class StubWeatherSource(WeatherSource):
    def __init__(self, reading: WeatherReading | None = None):
        self.reading = reading
        self.locations: list[str] = []

    def fetch_current(self, location: str) -> WeatherReading | None:
        self.locations.append(location)
        return self.reading


class StubDocumentSource(DocumentSource):
    """One chunk per document, metadata supplied by the test."""

    def __init__(self, documents: list[Document]):
        self.documents = documents
        self.loads = 0

    def load_documents(self) -> list[Document]:
        self.loads += 1
        return list(self.documents)

    def split_documents(self, documents: list[Document]) -> list[DocumentChunk]:
        return [
            DocumentChunk(text=d.text, metadata={**d.metadata, "chunk": 0}) for d in documents
        ]


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def embedder() -> MockEmbedder:
    return MockEmbedder()


@pytest.fixture
def index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def paris_reading() -> WeatherReading:
    return WeatherReading(
        location="Paris",
        temperature=18.2,
        feels_like=17.6,
        description="clear sky",
        humidity=60,
        wind_speed=3,
    )


@pytest.fixture
def sample_markdown() -> str:
    return textwrap.dedent("""\
        # Refund Policy

        Customers may request a full refund within 30 days of purchase.
        Refunds are issued to the original payment method.

        ## Exceptions

        Digital downloads and gift cards are not refundable once delivered.
    """)


@pytest.fixture
def data_dir(tmp_path: Path, sample_markdown: str) -> Path:
    d = tmp_path / "data"
    (d / "policies").mkdir(parents=True)
    (d / "policies" / "refunds.md").write_text(sample_markdown, encoding="utf-8")
    (d / "shipping.txt").write_text(
        "Orders ship within two business days.\n\nExpress delivery is available.",
        encoding="utf-8",
    )
    (d / "ignored.pdf").write_bytes(b"%PDF-1.4")
    (d / "empty.md").write_text("   \n", encoding="utf-8")
    return d
