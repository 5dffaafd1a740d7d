"""CLI for Model Scout - search and compare AI models."""

from __future__ import annotations

import asyncio
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from model_scout.models import CatalogIndex, ModelSummary

app = typer.Typer(
    name="model-scout",
    help="Search, rank and compare AI models from the models.dev catalog.",
    no_args_is_help=True,
)

console = Console()
error_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from model_scout import __version__

        typer.echo(f"model-scout v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logs."),
    ] = False,
) -> None:
    """Search, rank and compare AI models."""
    from model_scout.logging import configure_logging

    configure_logging(json_output=False, log_level="DEBUG" if verbose else "WARNING")


def load_catalog() -> CatalogIndex:
    """Fetch and normalize the catalog, exiting with an error on failure."""
    from model_scout.catalog import CatalogClient, CatalogFetchError, CatalogStore
    from model_scout.settings import settings

    client = CatalogClient(url=settings.catalog_url, timeout=settings.request_timeout)
    store = CatalogStore(client, refresh_interval=settings.refresh_interval)
    try:
        return asyncio.run(store.get())
    except CatalogFetchError as e:
        error_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e


def _fmt_number(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:,.0f}" if float(value).is_integer() else f"{value:,.2f}"


def _fmt_price(summary: ModelSummary) -> str:
    price_in = summary.price_in_per_m_tokens
    price_out = summary.price_out_per_m_tokens
    if price_in is None and price_out is None:
        return "-"
    return f"${price_in if price_in is not None else '?'} / ${price_out if price_out is not None else '?'}"


def _summary_table(title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("Context", justify="right")
    table.add_column("Output", justify="right")
    table.add_column("Price in/out per 1M")
    return table


@app.command()
def info() -> None:
    """Show configuration."""
    from model_scout import __version__
    from model_scout.settings import settings

    console.print(f"[bold]Model Scout[/bold] v{__version__}")
    console.print()
    console.print("[bold]Configuration:[/bold]")
    console.print(f"  Catalog URL: {settings.catalog_url}")
    console.print(f"  Refresh Interval: {settings.refresh_interval:.0f}s")
    console.print(f"  Server: {settings.host}:{settings.port}")
    console.print(f"  Default Sort: {settings.default_sort}")
    console.print(f"  Page Size: {settings.default_page_size} (max {settings.max_page_size})")
    if settings.warm_secret:
        console.print("  Warm Secret: [green]configured[/green]")
    else:
        console.print("  Warm Secret: [yellow]not configured[/yellow]")


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Free-text or id query")] = "",
    provider: Annotated[
        list[str] | None, typer.Option("--provider", "-p", help="Provider id (repeatable)")
    ] = None,
    sort: Annotated[str, typer.Option("--sort", "-s", help="Sort mode")] = "best",
    open_weights: Annotated[bool, typer.Option("--open-weights", help="Open weights only")] = False,
    tool_call: Annotated[bool, typer.Option("--tool-call", help="Tool calling only")] = False,
    min_context: Annotated[float | None, typer.Option("--min-context")] = None,
    max_price_in: Annotated[float | None, typer.Option("--max-price-in")] = None,
    hide_deprecated: Annotated[bool, typer.Option("--hide-deprecated")] = False,
    page: Annotated[int, typer.Option("--page", min=1)] = 1,
    page_size: Annotated[int, typer.Option("--page-size", min=1, max=50)] = 25,
) -> None:
    """Search the catalog."""
    from model_scout.models import SORT_OPTIONS, SearchRequest
    from model_scout.search import is_sort_option, search_summaries

    if not is_sort_option(sort):
        error_console.print(f"[red]Error:[/red] sort must be one of {', '.join(SORT_OPTIONS)}")
        raise typer.Exit(2)

    catalog = load_catalog()
    result = search_summaries(
        catalog.summaries,
        SearchRequest(
            query=query.strip(),
            providers=provider or [],
            open_weights=open_weights,
            tool_call=tool_call,
            min_context=min_context,
            max_price_in=max_price_in,
            hide_deprecated=hide_deprecated,
            page=page,
            page_size=page_size,
            sort=sort,
        ),
    )

    table = _summary_table(f"{result.total} models (page {page})")
    for summary in result.items:
        table.add_row(
            summary.id,
            summary.name or "",
            _fmt_number(summary.context_tokens),
            _fmt_number(summary.output_tokens),
            _fmt_price(summary),
        )
    console.print(table)
    if not result.used_strict:
        console.print("[yellow]No exact matches, showing partial matches[/yellow]")


@app.command()
def show(model_id: Annotated[str, typer.Argument(help="Model id, e.g. openai/gpt-4o")]) -> None:
    """Show the details of one model."""
    catalog = load_catalog()
    detail = catalog.by_id.get(model_id)
    if detail is None:
        error_console.print(f"[red]Error:[/red] Model not found for id: {model_id}")
        raise typer.Exit(1)

    model = detail.normalized
    console.print(f"[bold]{model.name}[/bold] ({model.id})")
    console.print(f"  Provider: {model.provider.name}")
    console.print(f"  Family: {model.family or '-'}")
    console.print(f"  Status: {model.status or 'active'}")
    console.print(f"  Input: {', '.join(model.modalities.input) or '-'}")
    console.print(f"  Output: {', '.join(model.modalities.output) or '-'}")
    console.print(f"  Context: {_fmt_number(model.limits.context)}")
    console.print(f"  Max output: {_fmt_number(model.limits.output)}")
    console.print(f"  Released: {model.dates.release or '-'}")
    console.print(f"  Updated: {model.dates.last_updated or '-'}")
    for label, value in (
        ("Tool calling", model.tool_call),
        ("Structured output", model.structured_output),
        ("Reasoning", model.reasoning),
        ("Open weights", model.open_weights),
    ):
        marker = {True: "[green]yes[/green]", False: "[red]no[/red]"}.get(value, "unknown")
        console.print(f"  {label}: {marker}")


@app.command()
def alternatives(
    model_id: Annotated[str, typer.Argument(help="Base model id")],
    limit: Annotated[int, typer.Option("--limit", "-n", min=1, max=20)] = 6,
) -> None:
    """Rank open-weights alternatives to a model."""
    from model_scout.search import find_alternatives

    catalog = load_catalog()
    base = catalog.summary_by_id.get(model_id)
    if base is None:
        error_console.print(f"[red]Error:[/red] Model not found for id: {model_id}")
        raise typer.Exit(1)

    table = Table(title=f"Open-weights alternatives to {base.id}")
    table.add_column("Score", justify="right", style="bold")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Reasons")
    for item in find_alternatives(catalog.summaries, base, limit):
        table.add_row(str(item.score), item.id, ", ".join(item.reasons))
    console.print(table)


@app.command()
def serve(
    host: Annotated[
        str | None,
        typer.Option("--host", "-h", help="Host to bind to"),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Port to bind to"),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option("--reload", help="Enable auto-reload for development"),
    ] = False,
) -> None:
    """Start the HTTP server."""
    import uvicorn

    from model_scout.settings import settings

    actual_host = host or settings.host
    actual_port = port or settings.port

    console.print("[green]Starting Model Scout...[/green]")
    console.print(f"  Catalog: {settings.catalog_url}")
    console.print(f"  API: http://{actual_host}:{actual_port}/")
    console.print(f"  Health: http://{actual_host}:{actual_port}/health")
    console.print()

    uvicorn.run(
        "model_scout.server:app",
        host=actual_host,
        port=actual_port,
        reload=reload,
    )
