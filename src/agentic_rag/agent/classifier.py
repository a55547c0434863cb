"""Query classifier — one model call, JSON label, safe default on failure."""

from __future__ import annotations

import logging

from agentic_rag.agent.parsing import extract_json_object
from agentic_rag.agent.prompts import CLASSIFICATION_PROMPT
from agentic_rag.agent.schemas import DEFAULT_CLASSIFICATION, Classification
from agentic_rag.errors import ConfigurationError
from agentic_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)


class QueryClassifier:
    """Label a question as rag, weather, math, or general.

    Any failure yields ``DEFAULT_CLASSIFICATION`` (rag, 0.5): retrieval has
    its own empty-result fallback, so it is the safest route. Configuration
    errors still propagate. There are no retries.
    """

    def __init__(self, llm_provider: LLMProvider):
        self.llm_provider = llm_provider

    def classify(self, question: str) -> Classification:
        try:
            text = self.llm_provider.generate(CLASSIFICATION_PROMPT.format(question=question))
            classification = Classification.from_payload(extract_json_object(text))
        except ConfigurationError:
            raise
        except Exception as exc:
            logger.warning("Error classifying query, defaulting to rag: %s", exc)
            return DEFAULT_CLASSIFICATION

        logger.info(
            "Query classified as %s (confidence=%.2f)",
            classification.category,
            classification.confidence,
        )
        return classification
