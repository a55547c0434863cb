"""Abstract base class for document sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from agentic_rag.documents.schemas import Document, DocumentChunk


class DocumentSource(ABC):
    """Supplies documents and splits them into chunks for ingestion."""

    @abstractmethod
    def load_documents(self) -> list[Document]:
        """Load every available document."""

    @abstractmethod
    def split_documents(self, documents: list[Document]) -> list[DocumentChunk]:
        """Split documents into chunks, in document order."""

    @classmethod
    def source_name(cls) -> str:
        """Return human-readable source name."""
        return cls.__name__
