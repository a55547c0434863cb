"""Data models for vector index operations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from agentic_rag.errors import ConfigurationError

# Metadata key under which the chunk text itself is stored.
TEXT_KEY = "text"

MetadataValue = str | int | float | bool | list[str]


class ChunkMetadata(BaseModel):
    """Allow-listed metadata accepted by the index.

    Any key outside this schema, or a value of the wrong type, is rejected.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    source: str = ""
    title: str = ""
    page: int | None = None
    chunk: int | None = None
    tags: list[str] = Field(default_factory=list)


def sanitize_metadata(raw: Mapping[str, Any] | None) -> dict[str, MetadataValue]:
    """Validate chunk metadata and flatten it to index-safe scalars.

    Args:
        raw: Metadata supplied by the document source.

    Returns:
        A dict of primitive / string-list values without ``None`` entries.

    Raises:
        ConfigurationError: Unknown keys or values of the wrong type.
    """
    try:
        meta = ChunkMetadata.model_validate(dict(raw or {}))
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(f"Invalid chunk metadata: {problems}") from exc
    return meta.model_dump(exclude_none=True)


@dataclass
class IndexRecord:
    """A vector with its id and sanitized metadata, ready for upsert."""

    id: str
    vector: list[float]
    metadata: dict[str, MetadataValue] = field(default_factory=dict)


@dataclass(frozen=True)
class IndexHit:
    """A raw nearest-neighbour hit returned by the index."""

    id: str
    score: float
    metadata: dict[str, MetadataValue] = field(default_factory=dict)
