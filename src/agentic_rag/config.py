"""Application settings loaded from YAML with environment variable overrides."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Settings sections
# ---------------------------------------------------------------------------


class EmbeddingSettings(BaseModel):
    provider: str = "ollama"
    model: str = "nomic-embed-text"
    base_url: str | None = None
    dimension: int = 768
    batch_size: int = 5  # per-item fan-out width; the rate-limit control
    timeout: float = 60.0


class VectorStoreSettings(BaseModel):
    backend: str = "faiss"
    index_name: str = "documents"
    path: str | None = "local_data/vectorstore"
    url: str | None = None
    api_key: str | None = None
    similarity_threshold: float = 0.0
    ready_timeout: float = 60.0
    poll_interval: float = 1.0


class LLMSettings(BaseModel):
    provider: str = "ollama"
    model: str = "llama3.1:8b"
    base_url: str | None = None
    temperature: float = 0.2
    max_tokens: int = 2048
    timeout: float = 120.0


class RetrievalSettings(BaseModel):
    top_k: int = 4


class IngestionSettings(BaseModel):
    data_dir: str = "data"
    extensions: list[str] = Field(default_factory=lambda: [".md", ".txt"])
    chunk_size: int = 1000
    chunk_overlap: int = 200
    upsert_batch_size: int = 10


class WeatherSettings(BaseModel):
    api_key: str | None = None
    base_url: str = "https://api.openweathermap.org/data/2.5"
    default_location: str = "Delhi"
    units: str = "metric"
    timeout: float = 10.0


# ---------------------------------------------------------------------------
# Root settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    embedding: EmbeddingSettings = Field(default_factory=EmbeddingSettings)
    vectorstore: VectorStoreSettings = Field(default_factory=VectorStoreSettings)
    llm: LLMSettings = Field(default_factory=LLMSettings)
    retrieval: RetrievalSettings = Field(default_factory=RetrievalSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    weather: WeatherSettings = Field(default_factory=WeatherSettings)


# env var -> (section, field)
_ENV_OVERRIDES: list[tuple[str, str, str]] = [
    ("OPENWEATHER_API_KEY", "weather", "api_key"),
    ("OLLAMA_BASE_URL", "embedding", "base_url"),
    ("OLLAMA_BASE_URL", "llm", "base_url"),
    ("QDRANT_URL", "vectorstore", "url"),
    ("QDRANT_API_KEY", "vectorstore", "api_key"),
    ("AGENTIC_RAG_VECTORSTORE", "vectorstore", "backend"),
    ("AGENTIC_RAG_LLM_PROVIDER", "llm", "provider"),
    ("AGENTIC_RAG_EMBEDDING_PROVIDER", "embedding", "provider"),
]


def _find_settings_file() -> Path | None:
    """Return AGENTIC_RAG_SETTINGS if set, else walk up from cwd looking for settings.yaml."""
    explicit = os.getenv("AGENTIC_RAG_SETTINGS")
    if explicit:
        return Path(explicit)

    profile = os.getenv("AGENTIC_RAG_PROFILE", "")
    names = [f"settings-{profile}.yaml", "settings.yaml"] if profile else ["settings.yaml"]

    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        for name in names:
            candidate = parent / name
            if candidate.exists():
                return candidate
    return None


def _apply_env_overrides(raw: dict[str, Any]) -> dict[str, Any]:
    for env_name, section, key in _ENV_OVERRIDES:
        value = os.getenv(env_name)
        if value:
            raw[section] = {**(raw.get(section) or {}), key: value}
    return raw


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from YAML file, falling back to defaults.

    Args:
        path: Explicit settings file. When omitted, ``settings.yaml`` is
            searched for from the working directory upwards.

    Returns:
        Validated ``Settings`` with environment overrides applied.
    """
    settings_path = Path(path) if path else _find_settings_file()

    raw: dict[str, Any] = {}
    if settings_path is not None:
        with open(settings_path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}

    return Settings(**_apply_env_overrides(raw))
