"""Ingestion pipeline — documents into the vector index."""

from agentic_rag.pipeline.ingest import IngestPipeline
from agentic_rag.pipeline.schemas import IngestResult

__all__ = ["IngestPipeline", "IngestResult"]
