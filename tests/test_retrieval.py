"""Tests for the retriever — mock embedder, in-memory index."""

from __future__ import annotations

import pytest
from conftest import DIM, FakeIndex, MockEmbedder

from agentic_rag.embeddings.batching import zero_vector
from agentic_rag.errors import ConfigurationError, TransportFailureError
from agentic_rag.retrieval.retriever import Retriever
from agentic_rag.retrieval.schemas import DEFAULT_TOP_K, RetrievedChunk
from agentic_rag.vectorstore.schemas import TEXT_KEY, IndexRecord

TEXTS = [
    "Refunds are available within 30 days.",
    "Orders ship within two business days.",
    "Gift cards are not refundable.",
    "Support is available by email.",
    "Express delivery costs extra.",
    "Warranty covers manufacturing defects.",
]


@pytest.fixture
def filled_index(embedder: MockEmbedder) -> FakeIndex:
    index = FakeIndex()
    index.upsert([
        IndexRecord(
            id=f"doc_{i}",
            vector=embedder.embed_query(text),
            metadata={"source": f"kb/{i}.md", "title": f"Doc {i}", TEXT_KEY: text},
        )
        for i, text in enumerate(TEXTS)
    ])
    return index


class TestRetrievedChunk:
    def test_source_prefers_source(self):
        chunk = RetrievedChunk(text="t", score=1.0, metadata={"source": "a.md", "title": "A"})
        assert chunk.source == "a.md"

    def test_source_falls_back_to_title(self):
        assert RetrievedChunk(text="t", score=1.0, metadata={"title": "A"}).source == "A"

    def test_source_unknown(self):
        assert RetrievedChunk(text="t", score=1.0).source == "unknown"


class TestRetriever:
    def test_default_top_k(self, embedder: MockEmbedder, filled_index: FakeIndex):
        chunks = Retriever(embedder, filled_index).retrieve("refund policy")
        assert DEFAULT_TOP_K == 4
        assert len(chunks) == 4

    def test_best_match_first(self, embedder: MockEmbedder, filled_index: FakeIndex):
        chunks = Retriever(embedder, filled_index).retrieve(TEXTS[2], k=3)
        assert chunks[0].text == TEXTS[2]
        assert chunks[0].score == pytest.approx(1.0, abs=1e-5)
        assert [c.score for c in chunks] == sorted((c.score for c in chunks), reverse=True)

    def test_text_moved_out_of_metadata(self, embedder: MockEmbedder, filled_index: FakeIndex):
        chunk = Retriever(embedder, filled_index).retrieve(TEXTS[0], k=1)[0]
        assert TEXT_KEY not in chunk.metadata
        assert chunk.metadata["source"] == "kb/0.md"
        assert chunk.source == "kb/0.md"

    def test_explicit_k(self, embedder: MockEmbedder, filled_index: FakeIndex):
        assert len(Retriever(embedder, filled_index, top_k=2).retrieve("x")) == 2
        assert len(Retriever(embedder, filled_index, top_k=2).retrieve("x", k=5)) == 5

    def test_empty_index_creates_and_returns_nothing(self, embedder: MockEmbedder):
        index = FakeIndex()
        assert Retriever(embedder, index).retrieve("anything") == []
        assert index.events[0] == "create"

    def test_threshold_can_empty_result(self, embedder: MockEmbedder, filled_index: FakeIndex):
        filled_index.similarity_threshold = 1.01
        assert Retriever(embedder, filled_index).retrieve(TEXTS[0]) == []

    def test_zero_vector_chunks_are_not_relevant(self, embedder: MockEmbedder):
        index = FakeIndex()
        index.upsert([
            IndexRecord(id="doc_0", vector=zero_vector(DIM), metadata={TEXT_KEY: "garbage chunk"}),
        ])
        assert Retriever(embedder, index).retrieve("refunds") == []

    def test_transport_failure_is_empty(self, embedder: MockEmbedder, filled_index: FakeIndex):
        filled_index.query_error = TransportFailureError("index unreachable")
        assert Retriever(embedder, filled_index).retrieve("refunds") == []

    def test_dimension_mismatch_propagates(self, filled_index: FakeIndex):
        with pytest.raises(ConfigurationError):
            Retriever(MockEmbedder(dim=DIM // 2), filled_index).retrieve("refunds")
