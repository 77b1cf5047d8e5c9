"""Topomap CLI.

Command-line interface for the topology layout engine.
Uses Click for command parsing and Rich for output formatting.
"""

import logging
from pathlib import Path

import click
from dotenv import load_dotenv

# Load .env file if present
load_dotenv()
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from topomap.config import get_settings
from topomap.errors import TopomapError
from topomap.hierarchy import build_hierarchy
from topomap.layout import LAYOUT_LABELS, LayoutRegistry, apply_layout
from topomap.model.inventory import network_stats, validate_node_addresses
from topomap.model.loader import DocumentLoader, TopologyDocument
from topomap.viz import HierarchyView, stats_table

console = Console()


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )


def _fail(error: TopomapError) -> None:
    console.print(f"[bold red]Error:[/bold red] {error.message}")
    if error.details:
        console.print(f"[dim]Details: {error.details}[/dim]")
    raise SystemExit(1)


@click.group()
@click.version_option(package_name="topomap-engine")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default=None,
    help="Logging level (defaults to TOPOMAP_LOG_LEVEL)",
)
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Network asset topology layout.

    Infers CIDR containment between network assets and computes
    diagram layouts for the topology editor.
    """
    try:
        settings = get_settings()
    except TopomapError as e:
        _fail(e)
    ctx.obj = settings
    _configure_logging((log_level or settings.log_level).upper())


@main.command("info")
def info() -> None:
    """Show version information."""
    from topomap import __version__

    console.print(
        Panel(
            f"[bold]Topomap[/bold] v{__version__}\n\n"
            "CIDR hierarchy inference and diagram layouts\n"
            "for network asset topologies.",
            title="About",
            border_style="blue",
        )
    )


@main.command("layouts")
def layouts() -> None:
    """List available layouts."""
    labels = {t.value: label for t, label in LAYOUT_LABELS.items()}
    table = Table(title="Layouts", show_header=True, header_style="bold cyan")
    table.add_column("Name")
    table.add_column("Description")
    for name in LayoutRegistry.list_types():
        table.add_row(name, labels.get(name, "-"))
    console.print(table)


@main.command("stats")
@click.argument("document", type=click.Path(exists=True, path_type=Path))
def stats(document: Path) -> None:
    """Show asset counts for a topology document.

    DOCUMENT: Path to an exported diagram (JSON or YAML)
    """
    try:
        doc = DocumentLoader().load(document)
    except TopomapError as e:
        _fail(e)

    console.print(stats_table(network_stats(doc.nodes), len(doc.edges)))


@main.command("validate")
@click.argument("document", type=click.Path(exists=True, path_type=Path))
def validate(document: Path) -> None:
    """Check the address fields of every node.

    Exits with status 1 if any node holds an invalid address.

    DOCUMENT: Path to an exported diagram (JSON or YAML)
    """
    try:
        doc = DocumentLoader().load(document)
    except TopomapError as e:
        _fail(e)

    table = Table(title="Address Validation", show_header=True, header_style="bold yellow")
    table.add_column("Node")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Details")

    failures = 0
    for node in doc.nodes:
        result = validate_node_addresses(node)
        if result.valid:
            table.add_row(node.label, node.type.value, "[green]OK[/green]", ", ".join(result.addresses) or "-")
        else:
            failures += 1
            table.add_row(node.label, node.type.value, "[red]INVALID[/red]", "; ".join(result.errors))

    console.print(table)
    if failures:
        console.print(f"[bold red]{failures} node(s) with invalid addresses[/bold red]")
        raise SystemExit(1)
    console.print("[green]✓[/green] All addresses valid")


@main.command("hierarchy")
@click.argument("document", type=click.Path(exists=True, path_type=Path))
def hierarchy(document: Path) -> None:
    """Show the inferred CIDR containment tree.

    DOCUMENT: Path to an exported diagram (JSON or YAML)
    """
    try:
        doc = DocumentLoader().load(document)
    except TopomapError as e:
        _fail(e)

    result = build_hierarchy(doc.nodes)
    HierarchyView(doc.nodes, result, console=console).show()
    console.print(f"[dim]{len(result.parent_of)} containment relationship(s) inferred[/dim]")


@main.command("layout")
@click.argument("document", type=click.Path(exists=True, path_type=Path))
@click.option(
    "--type",
    "-l",
    "layout_type",
    type=str,
    default=None,
    help="Layout name (see 'topomap layouts'; defaults to TOPOMAP_DEFAULT_LAYOUT)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the result here instead of stdout",
)
@click.option("--iterations", type=click.IntRange(min=1), default=None, help="Force-directed iterations")
@click.option("--columns", type=click.IntRange(min=0), default=None, help="Grid column count")
@click.pass_obj
def layout(
    settings,
    document: Path,
    layout_type: str | None,
    output: Path | None,
    iterations: int | None,
    columns: int | None,
) -> None:
    """Apply a layout to a topology document.

    DOCUMENT: Path to an exported diagram (JSON or YAML)
    """
    loader = DocumentLoader()
    try:
        doc = loader.load(document)
        name = layout_type or settings.default_layout
        result = apply_layout(
            doc.nodes,
            doc.edges,
            name,
            iterations=iterations or settings.force_iterations,
            columns=settings.grid_columns if columns is None else columns,
        )
        out = TopologyDocument(nodes=result.nodes, edges=result.edges)

        if output is None:
            click.echo(loader.dump(out))
        else:
            loader.save(out, output)
            console.print(
                f"[green]✓[/green] {name}: {len(out.nodes)} nodes, "
                f"{len(out.edges)} edges written to {output}"
            )
    except TopomapError as e:
        _fail(e)


@main.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", type=int, default=8000, show_default=True, help="Bind port")
def serve(host: str, port: int) -> None:
    """Run the layout HTTP API."""
    import uvicorn

    from topomap.web import create_app

    console.print(f"[dim]Docs available at http://{host}:{port}/docs[/dim]")
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    main()
