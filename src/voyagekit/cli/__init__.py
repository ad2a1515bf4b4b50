"""
CLI for voyagekit.

Provides command-line access to the embeddings, multimodal embeddings and
rerank endpoints.
"""

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from voyagekit.client import VoyageClient
from voyagekit.core.config import load_config
from voyagekit.core.logging_setup import configure_logging
from voyagekit.errors import VoyageError
from voyagekit.multimodal import MultimodalContent, MultimodalInput, encode_image_base64
from voyagekit.types import EmbeddingResponse, Model, UsageObject

# Initialize Rich Console
console = Console()

app = typer.Typer(
    name="voyagekit",
    help="Voyage AI embeddings and reranking from the command line",
    add_completion=False,
)

# Number of vector components shown per embedding
PREVIEW_SIZE = 5


def get_client(config_path: Optional[Path], verbose: bool) -> VoyageClient:
    """
    Build a client from .env, an optional config file and VOYAGE_* variables.

    Args:
        config_path: Optional YAML/JSON config file
        verbose: Enable debug logging

    Returns:
        VoyageClient configured for this invocation
    """
    load_dotenv()
    cfg = load_config(config_path)
    configure_logging(cfg.logging, verbose=verbose)
    return VoyageClient.from_config(cfg)


def _render_usage(usage: UsageObject) -> Table:
    table = Table.grid(padding=1)
    table.add_column(style="bold")
    table.add_column()
    table.add_row("Total Tokens:", str(usage.total_tokens))
    if usage.text_tokens is not None:
        table.add_row("Text Tokens:", str(usage.text_tokens))
    if usage.image_pixels is not None:
        table.add_row("Image Pixels:", str(usage.image_pixels))
    return table


def _render_embeddings(response: EmbeddingResponse, title: str) -> None:
    table = Table(title=title)
    table.add_column("Index", justify="right")
    table.add_column("Dimension", justify="right")
    table.add_column(f"First {PREVIEW_SIZE} values")

    for item in sorted(response.data, key=lambda x: x.index):
        preview = ", ".join(f"{v:.4f}" for v in item.embedding[:PREVIEW_SIZE])
        table.add_row(str(item.index), str(len(item.embedding)), preview)

    console.print(table)
    console.print(
        Panel(_render_usage(response.usage), title=f"[bold]{response.model}[/bold]", expand=False)
    )


def _document_at(documents: list[str], index: int) -> str:
    return documents[index] if 0 <= index < len(documents) else ""


@app.command()
def embed(
    texts: list[str] = typer.Argument(..., help="Texts to embed"),
    model: str = typer.Option(Model.VOYAGE_3_5_LITE, "--model", "-m", help="Embedding model"),
    input_type: Optional[str] = typer.Option(
        None, "--input-type", help="Input type: query or document"
    ),
    output_dimension: Optional[int] = typer.Option(
        None, "--output-dimension", "-d", help="Size of the returned vectors"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Embed one or more texts."""
    try:
        with get_client(config, verbose) as client:
            response = client.embed(
                texts,
                model,
                input_type=input_type,
                output_dimension=output_dimension,
            )
    except (VoyageError, OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _render_embeddings(response, f"Embeddings ({len(response.data)})")


@app.command()
def multimodal(
    text: Optional[list[str]] = typer.Option(None, "--text", "-t", help="Text content item"),
    image: Optional[list[Path]] = typer.Option(
        None, "--image", "-i", help="Local image file (PNG, JPEG, GIF, WEBP)"
    ),
    image_url: Optional[list[str]] = typer.Option(None, "--image-url", "-u", help="Image URL"),
    model: str = typer.Option(Model.VOYAGE_MULTIMODAL_3, "--model", "-m", help="Multimodal model"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Embed a single input made of text and images."""
    items = [MultimodalInput.from_text(t) for t in text or []]
    items.extend(MultimodalInput.from_image_url(u) for u in image_url or [])

    if not items and not image:
        console.print("[bold red]Error:[/bold red] Provide at least one --text, --image or --image-url")
        raise typer.Exit(1)

    try:
        for path in image or []:
            with path.open("rb") as f:
                items.append(MultimodalInput.from_image_base64(encode_image_base64(f)))

        with get_client(config, verbose) as client:
            response = client.multimodal_embed([MultimodalContent(content=items)], model)
    except (VoyageError, OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _render_embeddings(response, "Multimodal Embedding")


@app.command()
def rerank(
    query: str = typer.Argument(..., help="Query to rank documents against"),
    documents: list[str] = typer.Argument(..., help="Documents to rerank"),
    model: str = typer.Option(Model.RERANK_2_LITE, "--model", "-m", help="Reranker model"),
    top_k: Optional[int] = typer.Option(None, "--top-k", "-k", help="Number of results"),
    return_documents: bool = typer.Option(
        True, "--return-documents/--no-return-documents", help="Echo documents in the response"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file (YAML/JSON)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Rerank documents by relevance to a query."""
    try:
        with get_client(config, verbose) as client:
            response = client.rerank(
                query,
                documents,
                model,
                top_k=top_k,
                return_documents=return_documents,
            )
    except (VoyageError, OSError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title=f"Reranking for '{query}'")
    table.add_column("Rank", justify="right")
    table.add_column("Index", justify="right")
    table.add_column("Score", justify="right", style="yellow")
    table.add_column("Document")

    for rank, item in enumerate(response.data, 1):
        document = item.document if item.document is not None else _document_at(documents, item.index)
        table.add_row(str(rank), str(item.index), f"{item.relevance_score:.3f}", document)

    console.print(table)
    console.print(
        Panel(_render_usage(response.usage), title=f"[bold]{response.model}[/bold]", expand=False)
    )


def main() -> None:
    """Entry point for the voyagekit command."""
    app()


if __name__ == "__main__":
    main()
