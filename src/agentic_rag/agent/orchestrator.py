"""Orchestrator — classify, route, fall back, always answer.

Per question: Start → Classified → Routed → ToolExecuted → Completed.
Nothing is kept between questions; the session id is passed through as-is.
"""

from __future__ import annotations

import logging

from agentic_rag.agent.classifier import QueryClassifier
from agentic_rag.agent.schemas import AgentResponse, QueryCategory, ToolResult
from agentic_rag.agent.tools.base import BaseTool, Tool
from agentic_rag.agent.tools.general import GeneralTool
from agentic_rag.agent.tools.rag import RagTool
from agentic_rag.errors import InvalidQuestionError
from agentic_rag.retrieval.retriever import Retriever

logger = logging.getLogger(__name__)

ERROR_ANSWER = "I encountered an error while processing your query: {error}"

RETRIEVAL_STEP = "retrieval"


def validate_question(question: str) -> str:
    """Return the stripped question or raise ``InvalidQuestionError``."""
    if not isinstance(question, str) or not question.strip():
        raise InvalidQuestionError("Question is required and must be a non-empty string")
    return question.strip()


class Orchestrator:
    """Route each question to a tool or to retrieval + synthesis.

    ``run`` never raises for a non-empty question: tool failures become the
    tool's apology and anything else becomes ``ERROR_ANSWER``.
    """

    def __init__(
        self,
        classifier: QueryClassifier,
        retriever: Retriever,
        rag_tool: RagTool,
        general_tool: GeneralTool,
        weather_tool: Tool,
        math_tool: Tool,
        top_k: int | None = None,
    ):
        self.classifier = classifier
        self.retriever = retriever
        self.rag_tool = rag_tool
        self.general_tool = general_tool
        self.top_k = top_k
        self._routes: dict[QueryCategory, Tool] = {
            QueryCategory.WEATHER: weather_tool,
            QueryCategory.MATH: math_tool,
            QueryCategory.GENERAL: general_tool,
        }
        self._tools: dict[str, BaseTool] = {
            t.name: t for t in (rag_tool, general_tool, weather_tool, math_tool)
        }

    def answer(self, question: str, session_id: str | None = None) -> str:
        """Return only the answer text for ``question``."""
        return self.run(question, session_id=session_id).answer

    def run(self, question: str, session_id: str | None = None) -> AgentResponse:
        """Answer ``question`` and report how the answer was produced.

        Raises:
            InvalidQuestionError: ``question`` is empty or whitespace-only.
        """
        question = validate_question(question)
        response = AgentResponse(question=question, answer="", session_id=session_id)
        logger.info("Processing query (session=%s): %r", session_id, question)

        try:
            classification = self.classifier.classify(question)
            response.classification = classification
            result = self._route(question, classification.category, response.route)
        except Exception as exc:
            logger.exception("Error in agent workflow")
            response.error = str(exc) or exc.__class__.__name__
            response.answer = ERROR_ANSWER.format(error=response.error)
            return response

        if result.ok:
            response.answer = result.answer or ""
            response.citations = list(result.citations)
        else:
            response.error = result.error
            response.answer = self._tools[result.tool].apology

        logger.info("Query completed via %s", " -> ".join(response.route))
        return response

    def _route(
        self,
        question: str,
        category: QueryCategory,
        route: list[str],
    ) -> ToolResult:
        tool = self._routes.get(category)
        if tool is not None:
            logger.info("Routing to %s tool", tool.name)
            route.append(tool.name)
            return tool.run(question)

        logger.info("Handling as RAG query")
        route.append(RETRIEVAL_STEP)
        chunks = self.retriever.retrieve(question, k=self.top_k)
        if not chunks:
            logger.info("No relevant documents found, falling back to general tool")
            route.append(self.general_tool.name)
            return self.general_tool.run(question)

        route.append(self.rag_tool.name)
        return self.rag_tool.synthesize(question, chunks)
