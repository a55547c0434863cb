"""RAG synthesis tool — answer from retrieved chunks with citations."""

from __future__ import annotations

import logging

from agentic_rag.agent.citations import extract_citations
from agentic_rag.agent.prompts import RAG_SYSTEM_PROMPT, build_rag_prompt
from agentic_rag.agent.schemas import ToolResult
from agentic_rag.agent.tools.base import BaseTool
from agentic_rag.llm.base import LLMProvider
from agentic_rag.retrieval.schemas import RetrievedChunk

logger = logging.getLogger(__name__)


class RagTool(BaseTool):
    """Synthesize an answer conditioned on retrieved document chunks.

    Retrieval itself, and the fallback when it finds nothing, belong to the
    orchestrator; this tool only ever sees a non-empty context.
    """

    name = "rag"

    def __init__(self, llm_provider: LLMProvider, system_prompt: str = RAG_SYSTEM_PROMPT):
        super().__init__(llm_provider)
        self.system_prompt = system_prompt

    def synthesize(self, question: str, chunks: list[RetrievedChunk]) -> ToolResult:
        def call():
            prompt = build_rag_prompt(
                question=question,
                context_texts=[c.text for c in chunks],
                sources=[c.source for c in chunks],
            )
            answer = self._generate(prompt, system=self.system_prompt)
            citations = extract_citations(answer, chunks)
            logger.info(
                "RAG answer from %d chunks, %d citations", len(chunks), len(citations)
            )
            return answer, citations

        return self._guarded(call)
