"""Agent — query classification, tools, and the routing orchestrator."""

from agentic_rag.agent.classifier import QueryClassifier
from agentic_rag.agent.orchestrator import ERROR_ANSWER, Orchestrator, validate_question
from agentic_rag.agent.schemas import (
    DEFAULT_CLASSIFICATION,
    AgentResponse,
    Citation,
    Classification,
    QueryCategory,
    ToolResult,
)

__all__ = [
    "DEFAULT_CLASSIFICATION",
    "ERROR_ANSWER",
    "AgentResponse",
    "Citation",
    "Classification",
    "Orchestrator",
    "QueryCategory",
    "QueryClassifier",
    "ToolResult",
    "validate_question",
]
