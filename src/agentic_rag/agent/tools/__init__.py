"""Specialized tools — weather, math, general, and RAG synthesis."""

from agentic_rag.agent.tools.base import DEFAULT_APOLOGY, BaseTool, Tool
from agentic_rag.agent.tools.general import GeneralTool
from agentic_rag.agent.tools.math_solver import MathTool
from agentic_rag.agent.tools.rag import RagTool
from agentic_rag.agent.tools.weather import WeatherTool, format_weather

__all__ = [
    "DEFAULT_APOLOGY",
    "BaseTool",
    "GeneralTool",
    "MathTool",
    "RagTool",
    "Tool",
    "WeatherTool",
    "format_weather",
]
