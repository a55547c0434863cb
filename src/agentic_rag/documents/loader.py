"""Directory document source — markdown and plain-text files on disk."""

from __future__ import annotations

import logging
from pathlib import Path

from agentic_rag.documents.base import DocumentSource
from agentic_rag.documents.schemas import Document, DocumentChunk
from agentic_rag.documents.splitter import TextSplitter

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".txt")


class DirectorySource(DocumentSource):
    """Load every matching file under ``data_dir`` and split it into chunks."""

    def __init__(
        self,
        data_dir: str | Path = "data",
        extensions: list[str] | tuple[str, ...] = DEFAULT_EXTENSIONS,
        splitter: TextSplitter | None = None,
    ):
        self.data_dir = Path(data_dir)
        self.extensions = {e.lower() for e in extensions}
        self.splitter = splitter or TextSplitter()

    def load_documents(self) -> list[Document]:
        if not self.data_dir.is_dir():
            logger.error("Directory not found: %s", self.data_dir)
            return []

        documents: list[Document] = []
        for path in sorted(self.data_dir.rglob("*")):
            if not path.is_file() or path.suffix.lower() not in self.extensions:
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
                continue
            if not text.strip():
                continue
            documents.append(Document(
                text=text,
                metadata={
                    "source": str(path.relative_to(self.data_dir)),
                    "title": _title_of(text, path),
                },
            ))

        logger.info("Loaded %d documents from %s", len(documents), self.data_dir)
        return documents

    def split_documents(self, documents: list[Document]) -> list[DocumentChunk]:
        chunks: list[DocumentChunk] = []
        for doc in documents:
            for i, text in enumerate(self.splitter.split_text(doc.text)):
                chunks.append(DocumentChunk(text=text, metadata={**doc.metadata, "chunk": i}))

        logger.info("Split %d documents into %d chunks", len(documents), len(chunks))
        return chunks


def _title_of(text: str, path: Path) -> str:
    """First markdown heading, else the file stem."""
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("#"):
            return stripped.lstrip("#").strip() or path.stem
        if stripped:
            break
    return path.stem
