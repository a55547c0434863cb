"""LLM providers — Ollama, OpenAI."""

from agentic_rag.llm.base import LLMProvider
from agentic_rag.llm.factory import available_providers, get_llm_provider

__all__ = ["LLMProvider", "available_providers", "get_llm_provider"]
