"""
graphgen CLI

Command-line interface for the layered graph generator.
Provides commands for generating a graph and inspecting an exported one.

Commands:
    graphgen generate          Generate a graph, print it and save it as JSON
    graphgen inspect <path>    Summarize a previously exported graph

Usage:
    $ graphgen generate --depth 4 --new-vertices-count 3
    $ graphgen generate            # prompts for both numbers
    $ graphgen inspect graph.json
"""

import logging
from collections import Counter
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from graphgen import __version__
from graphgen.generator import GraphGenerator
from graphgen.models import (
    DEFAULT_OUTPUT_PATH,
    EdgeColor,
    GenerationParams,
    GenerationReport,
    GraphInvariantError,
)
from graphgen.printing import print_graph, read_graph_file, write_to_file

# Initialize Typer app and Rich console
app = typer.Typer(
    name="graphgen",
    help="graphgen: Random layered graph generator with colored edges",
    add_completion=False,
)
console = Console()

COLOR_STYLES = {
    EdgeColor.GREY: "white",
    EdgeColor.GREEN: "green",
    EdgeColor.YELLOW: "yellow",
    EdgeColor.RED: "red",
}


def setup_logging(level: str = "WARNING") -> None:
    """Configure logging for the CLI."""
    log_level = getattr(logging, level.upper(), logging.WARNING)
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def generate(
    depth: int = typer.Option(
        ...,
        "--depth",
        "-d",
        prompt="Depth",
        min=0,
        help="Maximum number of depth layers (0 yields an empty graph)",
    ),
    new_vertices_count: int = typer.Option(
        ...,
        "--new-vertices-count",
        "-n",
        prompt="Vertices count",
        min=0,
        help="Number of child attempts per vertex and layer",
    ),
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT_PATH),
        "--output",
        "-o",
        help="Where to write the JSON document",
        dir_okay=False,
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        "-s",
        help="Seed the random source for a reproducible graph",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Do not print the JSON document to stdout",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """
    Generate a layered graph.

    This command:
    1. Grows a tree-like skeleton of grey edges layer by layer
    2. Adds green self-loops, yellow and red cross-layer edges
    3. Prints the graph as JSON
    4. Writes the JSON to the output file
    """
    setup_logging(log_level)

    params = GenerationParams(depth=depth, new_vertices_count=new_vertices_count)
    generator = GraphGenerator(params, seed=seed)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Generating graph...", total=None)

        try:
            graph, report = generator.generate_with_report()
        except GraphInvariantError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

        progress.update(task, description="Rendering JSON...")
        graph_json = print_graph(graph)
        try:
            write_to_file(graph_json, output)
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

    if not quiet:
        typer.echo(graph_json, nl=False)

    _print_generation_summary(report, output)


@app.command()
def inspect(
    path: Path = typer.Argument(
        ...,
        help="Path to an exported graph document",
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """
    Summarize an exported graph.

    Shows:
    - Number of vertices on each depth layer
    - Number of edges of each color
    """
    try:
        document = read_graph_file(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[bold blue]Graph:[/bold blue] {path}\n")

    vertices = document["vertices"]
    edges = document["edges"]
    if not vertices:
        console.print("[yellow]The graph is empty.[/yellow]")
        raise typer.Exit(0)

    _print_depth_table(Counter(vertex["depth"] for vertex in vertices))
    _print_color_table(Counter(edge["color"] for edge in edges), len(edges))


# Helper functions for output formatting

def _print_generation_summary(report: GenerationReport, output: Path) -> None:
    """Print a summary panel after generating."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("Requested depth", str(report.params.depth))
    table.add_row("Vertices per attempt", str(report.params.new_vertices_count))
    table.add_row("Layers", str(report.depth))
    table.add_row("Vertices", str(report.vertex_count))
    for color in EdgeColor:
        style = COLOR_STYLES[color]
        table.add_row(
            f"[{style}]{color.value.capitalize()} edges[/{style}]",
            str(report.color_counts[color]),
        )
    table.add_row("Generation time", f"{report.generation_time_seconds:.2f}s")
    table.add_row("Output", str(output))

    panel = Panel(table, title="[bold green]✓ Graph Generated[/bold green]", border_style="green")
    console.print(panel)


def _print_depth_table(depth_counts: Counter) -> None:
    """Print the number of vertices on each layer."""
    table = Table(title="Vertices by Depth", box=box.ROUNDED)
    table.add_column("Depth", style="cyan", justify="right")
    table.add_column("Vertices", justify="right")

    for depth in sorted(depth_counts):
        table.add_row(str(depth), str(depth_counts[depth]))
    table.add_row("", "")
    table.add_row("[bold]Total[/bold]", f"[bold]{sum(depth_counts.values())}[/bold]")

    console.print(table)


def _print_color_table(color_counts: Counter, total: int) -> None:
    """Print the number of edges of each color."""
    table = Table(title="Edges by Color", box=box.ROUNDED)
    table.add_column("Color", style="bold")
    table.add_column("Count", justify="right")
    table.add_column("Percentage", justify="right")

    for color in EdgeColor:
        style = COLOR_STYLES[color]
        count = color_counts.get(color.value, 0)
        percentage = f"{(count / total) * 100:.1f}%" if total else "-"
        table.add_row(f"[{style}]{color.value}[/{style}]", str(count), percentage)
    table.add_row("", "", "")
    table.add_row("[bold]Total[/bold]", f"[bold]{total}[/bold]", "100%" if total else "-")

    console.print(table)


# Version command
@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
    ),
) -> None:
    """
    graphgen: Random layered graph generator with colored edges.
    """
    if version:
        console.print(f"[bold]graphgen[/bold] version {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        raise typer.Exit()


if __name__ == "__main__":
    app()
