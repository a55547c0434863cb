"""Citation extraction — map [1], [2], [1-3] in an answer back to chunks."""

from __future__ import annotations

import re
from collections.abc import Sequence

from agentic_rag.agent.schemas import Citation
from agentic_rag.retrieval.schemas import RetrievedChunk

# Matches [1], [2], [3,4], [1-3], etc.
_CITATION_RE = re.compile(r"\[(\d+(?:\s*[,\-]\s*\d+)*)\]")

_SNIPPET_CHARS = 200


def extract_citations(answer: str, chunks: Sequence[RetrievedChunk]) -> list[Citation]:
    """Return citations for every in-range reference in ``answer``, by index."""
    cited: set[int] = set()
    for match in _CITATION_RE.finditer(answer):
        for part in match.group(1).split(","):
            part = part.strip()
            if "-" in part:
                start, end = (int(p) for p in part.split("-", 1))
                cited.update(range(start, end + 1))
            else:
                cited.add(int(part))

    citations: list[Citation] = []
    for idx in sorted(cited):
        if 1 <= idx <= len(chunks):
            chunk = chunks[idx - 1]
            snippet = chunk.text
            if len(snippet) > _SNIPPET_CHARS:
                snippet = snippet[:_SNIPPET_CHARS] + "..."
            citations.append(Citation(
                index=idx, source=chunk.source, text=snippet, score=chunk.score,
            ))
    return citations
