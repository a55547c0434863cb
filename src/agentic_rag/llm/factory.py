"""LLM provider factory — registry and lazy import.

Every call builds a new provider. ``AppContext`` keeps the one instance the
application shares.
"""

from __future__ import annotations

import importlib
import logging

from agentic_rag.errors import ConfigurationError
from agentic_rag.llm.base import LLMProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Provider registry: (provider_key, module_path, class_name)
# ---------------------------------------------------------------------------

_PROVIDER_REGISTRY: list[tuple[str, str, str]] = [
    ("ollama", "agentic_rag.llm.ollama_provider", "OllamaLLMProvider"),
    ("openai", "agentic_rag.llm.openai_provider", "OpenAILLMProvider"),
]


def get_llm_provider(
    provider: str = "ollama",
    **kwargs,
) -> LLMProvider:
    """Build an LLM provider by name.

    Args:
        provider: One of ``ollama``, ``openai``.
        **kwargs: Passed to the provider constructor.

    Returns:
        A new ``LLMProvider`` instance.
    """
    key = provider.lower()

    for reg_key, module_path, cls_name in _PROVIDER_REGISTRY:
        if reg_key == key:
            mod = importlib.import_module(module_path)
            cls = getattr(mod, cls_name)
            instance = cls(**kwargs)
            logger.info("LLM provider ready: %s", cls_name)
            return instance

    available = [k for k, _, _ in _PROVIDER_REGISTRY]
    raise ConfigurationError(f"Unknown LLM provider '{provider}'. Available: {available}")


def available_providers() -> list[str]:
    """Return names of registered LLM providers."""
    return [k for k, _, _ in _PROVIDER_REGISTRY]
