"""Document sources — load files and split them into chunks."""

from agentic_rag.documents.base import DocumentSource
from agentic_rag.documents.loader import DirectorySource
from agentic_rag.documents.schemas import Document, DocumentChunk
from agentic_rag.documents.splitter import TextSplitter

__all__ = ["DirectorySource", "Document", "DocumentChunk", "DocumentSource", "TextSplitter"]
