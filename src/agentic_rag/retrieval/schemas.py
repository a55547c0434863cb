"""Data models for retrieval operations."""

from __future__ import annotations

from dataclasses import dataclass, field

from agentic_rag.vectorstore.schemas import MetadataValue

# Single top-K default shared by every call site.
DEFAULT_TOP_K = 4


@dataclass(frozen=True)
class RetrievedChunk:
    """A chunk of indexed text returned for a question."""

    text: str
    score: float
    metadata: dict[str, MetadataValue] = field(default_factory=dict)

    @property
    def source(self) -> str:
        return str(self.metadata.get("source") or self.metadata.get("title") or "unknown")


RetrievalResult = list[RetrievedChunk]
