"""Application context — every shared client, built once and passed around.

The CLI (or any host process) calls ``build_context`` at startup and hands
the result to ``build_orchestrator`` / ``build_ingest_pipeline``. Nothing in
the core reaches for module-level client handles.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from agentic_rag.agent.classifier import QueryClassifier
from agentic_rag.agent.orchestrator import Orchestrator
from agentic_rag.agent.tools import GeneralTool, MathTool, RagTool, WeatherTool
from agentic_rag.config import Settings, load_settings
from agentic_rag.documents.base import DocumentSource
from agentic_rag.documents.loader import DirectorySource
from agentic_rag.documents.splitter import TextSplitter
from agentic_rag.embeddings.base import EmbeddingProvider
from agentic_rag.embeddings.factory import get_embedding_provider
from agentic_rag.errors import ConfigurationError
from agentic_rag.llm.base import LLMProvider
from agentic_rag.llm.factory import get_llm_provider
from agentic_rag.pipeline.ingest import IngestPipeline
from agentic_rag.retrieval.retriever import Retriever
from agentic_rag.vectorstore.base import VectorIndex
from agentic_rag.vectorstore.factory import get_vector_index
from agentic_rag.weather.base import WeatherSource
from agentic_rag.weather.openweather import OpenWeatherSource

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Initialized clients shared by every request in the process.

    The factories build a fresh client per call, so this is the only place
    that holds on to them.
    """

    settings: Settings
    llm: LLMProvider
    embedder: EmbeddingProvider
    index: VectorIndex
    weather: WeatherSource


def build_context(settings: Settings | None = None) -> AppContext:
    """Construct all clients from settings.

    Raises:
        ConfigurationError: Unknown backend/provider or mismatched dimensions.
    """
    settings = settings or load_settings()

    embedder = get_embedding_provider(
        settings.embedding.provider,
        model=settings.embedding.model,
        base_url=settings.embedding.base_url,
        dimension=settings.embedding.dimension,
        timeout=settings.embedding.timeout,
    )
    if embedder.dimension != settings.embedding.dimension:
        raise ConfigurationError(
            f"Embedding provider reports dimension {embedder.dimension}, "
            f"settings declare {settings.embedding.dimension}"
        )

    index = get_vector_index(settings.vectorstore.backend, **_index_kwargs(settings))

    llm = get_llm_provider(
        settings.llm.provider,
        model=settings.llm.model,
        base_url=settings.llm.base_url,
        temperature=settings.llm.temperature,
        max_tokens=settings.llm.max_tokens,
        timeout=settings.llm.timeout,
    )

    weather = OpenWeatherSource(
        api_key=settings.weather.api_key,
        base_url=settings.weather.base_url,
        units=settings.weather.units,
        timeout=settings.weather.timeout,
    )

    logger.info(
        "Context ready: llm=%s embedding=%s index=%s",
        llm.provider_name(),
        embedder.provider_name(),
        index.store_name(),
    )
    return AppContext(settings=settings, llm=llm, embedder=embedder, index=index, weather=weather)


def build_orchestrator(ctx: AppContext) -> Orchestrator:
    """Wire the classifier, retriever, and tools around the shared clients."""
    general = GeneralTool(ctx.llm)
    return Orchestrator(
        classifier=QueryClassifier(ctx.llm),
        retriever=Retriever(ctx.embedder, ctx.index, top_k=ctx.settings.retrieval.top_k),
        rag_tool=RagTool(ctx.llm),
        general_tool=general,
        weather_tool=WeatherTool(
            ctx.llm,
            ctx.weather,
            default_location=ctx.settings.weather.default_location,
        ),
        math_tool=MathTool(ctx.llm),
        top_k=ctx.settings.retrieval.top_k,
    )


def build_ingest_pipeline(
    ctx: AppContext,
    source: DocumentSource | None = None,
) -> IngestPipeline:
    """Ingestion over ``source`` (defaults to the configured data directory)."""
    ingestion = ctx.settings.ingestion
    if source is None:
        source = DirectorySource(
            data_dir=ingestion.data_dir,
            extensions=ingestion.extensions,
            splitter=TextSplitter(ingestion.chunk_size, ingestion.chunk_overlap),
        )
    return IngestPipeline(
        embedding_provider=ctx.embedder,
        vector_index=ctx.index,
        source=source,
        embed_batch_size=ctx.settings.embedding.batch_size,
        upsert_batch_size=ingestion.upsert_batch_size,
    )


def _index_kwargs(settings: Settings) -> dict:
    vs = settings.vectorstore
    kwargs: dict = {
        "name": vs.index_name,
        "dimension": settings.embedding.dimension,
        "similarity_threshold": vs.similarity_threshold,
        "ready_timeout": vs.ready_timeout,
        "poll_interval": vs.poll_interval,
    }
    if vs.backend.lower() == "qdrant":
        kwargs.update(url=vs.url, api_key=vs.api_key, path=None if vs.url else vs.path)
    else:
        kwargs["path"] = vs.path
    return kwargs
