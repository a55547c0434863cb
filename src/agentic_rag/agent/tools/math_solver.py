"""Math tool — step-by-step solution from the model.

No arithmetic is evaluated locally; correctness rests with the model.
"""

from __future__ import annotations

from agentic_rag.agent.prompts import MATH_PROMPT
from agentic_rag.agent.tools.base import Tool


class MathTool(Tool):
    name = "math"
    apology = (
        "I apologize, but I encountered an error while processing your math query. "
        "Please try again later."
    )

    def _answer(self, question: str) -> str:
        return self._generate(MATH_PROMPT.format(question=question))
