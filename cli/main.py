"""CLI entry point — Typer app for agentic-rag commands.

Usage:
    agentic-rag ingest --data-dir data --force-reindex
    agentic-rag ask "What is our refund policy?"
    agentic-rag classify "What's the weather in Paris?"
    agentic-rag status
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from agentic_rag import __version__

app = typer.Typer(
    name="agentic-rag",
    help="Agentic RAG — ingest documents, route and answer questions.",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    log_level: str = typer.Option(
        os.getenv("LOG_LEVEL", "WARNING"), "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
    settings_file: Path | None = typer.Option(
        None, "--settings", help="Path to settings.yaml",
    ),
) -> None:
    """Configure logging and settings for every command."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    if settings_file is not None:
        os.environ["AGENTIC_RAG_SETTINGS"] = str(settings_file)


def _context():
    from agentic_rag.context import build_context
    from agentic_rag.errors import ConfigurationError

    try:
        return build_context()
    except ConfigurationError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc.message}")
        raise typer.Exit(code=2) from exc


@app.command()
def ingest(
    data_dir: Path | None = typer.Option(
        None, "--data-dir", "-d", help="Directory of .md/.txt documents",
    ),
    force_reindex: bool = typer.Option(
        False, "--force-reindex", help="Drop the index before ingesting",
    ),
) -> None:
    """Load, chunk, embed and index the document directory."""
    from agentic_rag.context import build_ingest_pipeline
    from agentic_rag.documents.loader import DirectorySource
    from agentic_rag.documents.splitter import TextSplitter

    ctx = _context()
    source = None
    if data_dir is not None:
        ingestion = ctx.settings.ingestion
        source = DirectorySource(
            data_dir=data_dir,
            extensions=ingestion.extensions,
            splitter=TextSplitter(ingestion.chunk_size, ingestion.chunk_overlap),
        )

    result = build_ingest_pipeline(ctx, source=source).ingest(force_reindex=force_reindex)

    if not result.documents_count:
        console.print("[yellow]No documents found to ingest.[/]")
        return

    console.print("\n[bold green]Ingestion complete[/]")
    console.print(f"  Documents: {result.documents_count}")
    console.print(f"  Chunks: {result.chunks_count}")
    console.print(f"  Records upserted: {result.records_upserted}")
    if result.failed_embeddings:
        console.print(
            f"  [yellow]Warning:[/] {result.failed_embeddings} chunk(s) "
            "stored with zero vectors after embedding failures",
        )


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    session: str | None = typer.Option(
        None, "--session", "-s", help="Session id passed through to the response",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show category, route and citations",
    ),
) -> None:
    """Route a question to the right tool and print the answer."""
    from agentic_rag.context import build_orchestrator
    from agentic_rag.errors import InvalidQuestionError

    orchestrator = build_orchestrator(_context())
    try:
        response = orchestrator.run(question, session_id=session)
    except InvalidQuestionError as exc:
        console.print(f"[bold red]Error:[/] {exc.message}")
        raise typer.Exit(code=1) from exc

    console.print(f"\n[bold]Q:[/] {response.question}")
    console.print(f"\n[bold green]A:[/] {response.answer}")

    if verbose:
        if response.classification is not None:
            console.print(
                f"\n[dim]Category: {response.classification.category} "
                f"(confidence {response.classification.confidence:.2f})[/]",
            )
        console.print(f"[dim]Route: {' -> '.join(response.route)}[/]")
        for c in response.citations:
            console.print(f"[dim]  [{c.index}] {c.source} (score: {c.score:.3f})[/]")


@app.command()
def classify(
    question: str = typer.Argument(..., help="Question to classify"),
) -> None:
    """Show how a question would be routed."""
    from agentic_rag.agent.classifier import QueryClassifier

    ctx = _context()
    result = QueryClassifier(ctx.llm).classify(question)

    table = Table(title="Classification")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Category", str(result.category))
    table.add_row("Confidence", f"{result.confidence:.2f}")
    table.add_row("Reasoning", result.reasoning)
    console.print(table)


@app.command()
def status() -> None:
    """Show system status (installed providers, config, index)."""
    from agentic_rag.embeddings.factory import available_providers as emb_providers
    from agentic_rag.llm.factory import available_providers as llm_providers
    from agentic_rag.vectorstore.factory import available_stores

    console.print(f"\n[bold green]agentic-rag[/] v{__version__}\n")

    table = Table(title="Available Components")
    table.add_column("Layer", style="cyan")
    table.add_column("Available")

    table.add_row("Embedding Providers", ", ".join(emb_providers()))
    table.add_row("Vector Stores", ", ".join(available_stores()))
    table.add_row("LLM Providers", ", ".join(llm_providers()))
    console.print(table)

    ctx = _context()
    index = ctx.index
    exists = index.exists()
    console.print(
        f"\nIndex [cyan]{index.name}[/] ({index.store_name()}, dim={index.dimension}): "
        + (f"{index.count()} records" if exists else "[yellow]not created[/]"),
    )


if __name__ == "__main__":
    app()
