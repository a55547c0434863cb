"""Paragraph-aware character splitter with overlap."""

from __future__ import annotations

import re

from agentic_rag.errors import ConfigurationError

_PARAGRAPH_BREAK = re.compile(r"\n{2,}")


class TextSplitter:
    """Pack paragraphs into chunks of at most ``chunk_size`` characters.

    Consecutive chunks share up to ``chunk_overlap`` trailing characters of
    the previous chunk. Paragraphs longer than ``chunk_size`` are cut with a
    sliding window.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200):
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be positive, got {chunk_size}")
        if not 0 <= chunk_overlap < chunk_size:
            raise ConfigurationError(
                f"chunk_overlap must be in [0, chunk_size), got {chunk_overlap}"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap

    def split_text(self, text: str) -> list[str]:
        chunks: list[str] = []
        current = ""

        for piece in self._pieces(text):
            candidate = f"{current}\n\n{piece}" if current else piece
            if len(candidate) <= self.chunk_size:
                current = candidate
                continue

            chunks.append(current)
            tail = self._tail(current)
            if tail and len(tail) + 2 + len(piece) <= self.chunk_size:
                current = f"{tail}\n\n{piece}"
            else:
                current = piece

        if current:
            chunks.append(current)
        return chunks

    def _pieces(self, text: str) -> list[str]:
        pieces: list[str] = []
        step = self.chunk_size - self.chunk_overlap

        for para in _PARAGRAPH_BREAK.split(text):
            para = para.strip()
            if not para:
                continue
            if len(para) <= self.chunk_size:
                pieces.append(para)
                continue
            for start in range(0, len(para), step):
                pieces.append(para[start : start + self.chunk_size])
                if start + self.chunk_size >= len(para):
                    break
        return pieces

    def _tail(self, text: str) -> str:
        if self.chunk_overlap == 0:
            return ""
        tail = text[-self.chunk_overlap :]
        # Start the overlap on a word boundary
        space = tail.find(" ")
        if 0 <= space < len(tail) - 1:
            tail = tail[space + 1 :]
        return tail.strip()
