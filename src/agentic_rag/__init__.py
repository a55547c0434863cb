"""Agentic RAG — question routing over retrieval and specialized tools."""

__version__ = "0.1.0"
