"""Data models for loaded documents and their chunks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Document:
    """A whole source document before splitting."""

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DocumentChunk:
    """A retrievable piece of a document.

    ``metadata`` is validated against the index's allow-list at ingestion.
    """

    text: str
    metadata: dict[str, Any] = field(default_factory=dict)
