"""Data models for classification, tool results, and agent responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from agentic_rag.errors import MalformedOutputError


class QueryCategory(StrEnum):
    """How a question gets answered."""

    RAG = "rag"
    WEATHER = "weather"
    MATH = "math"
    GENERAL = "general"


@dataclass(frozen=True)
class Classification:
    """Routing label for one question."""

    category: QueryCategory
    confidence: float
    reasoning: str = ""

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Classification:
        """Build from a model's JSON payload.

        The category may be given as ``category`` or ``type``.

        Raises:
            MalformedOutputError: Unknown category or a confidence that is not
                a number in [0, 1].
        """
        raw_category = payload.get("category", payload.get("type"))
        try:
            category = QueryCategory(str(raw_category).strip().lower())
        except ValueError as exc:
            raise MalformedOutputError(f"Unknown query category: {raw_category!r}") from exc

        confidence = payload.get("confidence")
        if isinstance(confidence, bool) or not isinstance(confidence, int | float):
            raise MalformedOutputError(f"Confidence is not a number: {confidence!r}")
        if not 0.0 <= confidence <= 1.0:
            raise MalformedOutputError(f"Confidence out of range [0, 1]: {confidence}")

        return cls(
            category=category,
            confidence=float(confidence),
            reasoning=str(payload.get("reasoning") or ""),
        )


DEFAULT_CLASSIFICATION = Classification(
    category=QueryCategory.RAG,
    confidence=0.5,
    reasoning="Default classification due to error in classification process",
)


@dataclass(frozen=True)
class Citation:
    """A ``[n]`` reference in a RAG answer mapped back to its chunk."""

    index: int
    source: str
    text: str
    score: float = 0.0


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: an answer or an error, never both."""

    tool: str
    answer: str | None = None
    error: str | None = None
    citations: list[Citation] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(
        cls, tool: str, answer: str, citations: list[Citation] | None = None
    ) -> ToolResult:
        return cls(tool=tool, answer=answer, citations=citations or [])

    @classmethod
    def failure(cls, tool: str, error: str) -> ToolResult:
        return cls(tool=tool, error=error)


@dataclass
class AgentResponse:
    """Final answer for one question plus how it was produced."""

    question: str
    answer: str
    session_id: str | None = None
    classification: Classification | None = None
    route: list[str] = field(default_factory=list)
    citations: list[Citation] = field(default_factory=list)
    error: str | None = None
