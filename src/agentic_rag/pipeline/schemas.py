"""Data models for the ingestion pipeline."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class IngestResult:
    """Result of an ingestion run."""

    documents_count: int = 0
    chunks_count: int = 0
    records_upserted: int = 0
    failed_embeddings: int = 0
    reindexed: bool = False
