"""General tool — plain assistant answer, also the RAG-empty fallback."""

from __future__ import annotations

from agentic_rag.agent.prompts import GENERAL_PROMPT
from agentic_rag.agent.tools.base import Tool


class GeneralTool(Tool):
    name = "general"

    def _answer(self, question: str) -> str:
        return self._generate(GENERAL_PROMPT.format(question=question))
