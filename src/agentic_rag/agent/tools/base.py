"""Base class for specialized tools.

A tool never raises for a runtime failure: it returns ``ToolResult.failure``
and the orchestrator turns that into the tool's ``apology`` text.
``ConfigurationError`` is the exception; it propagates.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

from agentic_rag.agent.schemas import Citation, ToolResult
from agentic_rag.errors import ConfigurationError, MalformedOutputError
from agentic_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)

DEFAULT_APOLOGY = (
    "I apologize, but I encountered an error while processing your query. "
    "Please try again later."
)


class BaseTool(ABC):
    """Shared plumbing: model access and failure capture."""

    name: ClassVar[str] = "tool"
    apology: ClassVar[str] = DEFAULT_APOLOGY

    def __init__(self, llm_provider: LLMProvider):
        self.llm_provider = llm_provider

    def _generate(self, prompt: str, system: str | None = None) -> str:
        text = self.llm_provider.generate(prompt, system=system).strip()
        if not text:
            raise MalformedOutputError(f"{self.name} tool got an empty model response")
        return text

    def _guarded(self, call: Callable[[], tuple[str, list[Citation] | None]]) -> ToolResult:
        try:
            answer, citations = call()
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.warning("Error handling %s query: %s", self.name, exc)
            return ToolResult.failure(self.name, str(exc) or exc.__class__.__name__)
        return ToolResult.success(self.name, answer, citations)


class Tool(BaseTool):
    """A tool that answers from the question alone."""

    def run(self, question: str) -> ToolResult:
        """Answer ``question``; failures come back as ``ToolResult.failure``."""
        return self._guarded(lambda: (self._answer(question), None))

    @abstractmethod
    def _answer(self, question: str) -> str:
        """Produce the answer text; may raise."""
