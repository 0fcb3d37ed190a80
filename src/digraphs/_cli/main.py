import logging
from collections import defaultdict
from typing import Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from digraphs._builders import reachability_graph, sequence_graph
from digraphs._errors import GraphCycleError, GraphError
from digraphs._graph import Graph, GraphBuilder, topologically_sorted_nodes, transitive_closure

from .config import ConfigError, DigraphsConfig, get_config

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors)
err_console = Console(stderr=True)
# Console for stdout (results)
out_console = Console()


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Digraphs CLI."""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Configure rich logging handler to output to stderr
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[
            RichHandler(
                console=err_console,
                show_time=False,
                show_path=verbose,
                rich_tracebacks=True,
            ),
        ],
    )


def _load_config() -> DigraphsConfig:
    try:
        config = get_config()
    except ConfigError as e:
        err_console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    logger.debug("Using configuration: %r", config)
    return config


def parse_edge(token: str, separator: str) -> tuple[str, str]:
    """Split an edge argument such as ``a->b`` into its endpoints.

    Raises:
        typer.BadParameter: If the token has no separator or an empty endpoint.

    """
    source, found, target = token.partition(separator)
    source = source.strip()
    target = target.strip()
    if not found or not source or not target:
        msg = f"Invalid edge '{token}'. Expected format: 'SOURCE{separator}TARGET'"
        raise typer.BadParameter(msg)
    return source, target


def _graph_from_arguments(edges: list[str], nodes: list[str], config: DigraphsConfig) -> Graph[str]:
    builder: GraphBuilder[str] = GraphBuilder(directed=config.directed, allows_self_loops=config.allow_self_loops)
    for node in nodes:
        builder.add_node(node)
    for token in edges:
        builder.put_edge(*parse_edge(token, config.edge_separator))
    return builder.build()


def _print_edges(graph: Graph[str], title: str) -> None:
    table = Table(show_header=True, header_style="bold cyan", box=None)
    table.add_column("Source")
    table.add_column("Target")
    for source, target in graph.edges:
        table.add_row(escape(source), escape(target))

    out_console.print(
        Panel(
            table,
            title=f"[bold]{title}[/bold]",
            subtitle=f"[dim]{len(graph)} nodes, {len(graph.edges)} edges[/dim]",
            border_style="cyan",
        ),
    )


def _fail(error: GraphError) -> typer.Exit:
    err_console.print(f"[red]✗ {escape(str(error))}[/red]")
    return typer.Exit(code=1)


@app.command()
def sequence(
    elements: Annotated[list[str], typer.Argument(help="Elements of the sequence, in order")],
) -> None:
    """Show the graph linking each element of a sequence to the next one."""
    try:
        graph = sequence_graph(elements)
    except GraphError as e:
        raise _fail(e) from e
    _print_edges(graph, "Sequence graph")


@app.command()
def closure(
    edges: Annotated[list[str] | None, typer.Argument(help="Edges, such as 'a->b'")] = None,
    *,
    node: Annotated[list[str] | None, typer.Option("--node", "-n", help="Additional isolated node")] = None,
) -> None:
    """Show the transitive closure of a graph."""
    config = _load_config()
    try:
        graph = _graph_from_arguments(edges or [], node or [], config)
        result = transitive_closure(graph)
    except GraphError as e:
        raise _fail(e) from e
    _print_edges(result, "Transitive closure")


@app.command()
def sort(
    edges: Annotated[list[str] | None, typer.Argument(help="Edges, such as 'a->b'")] = None,
    *,
    node: Annotated[list[str] | None, typer.Option("--node", "-n", help="Additional isolated node")] = None,
) -> None:
    """Print the nodes of a directed graph in topological order, one per line."""
    config = _load_config()
    try:
        graph = _graph_from_arguments(edges or [], node or [], config)
        for sorted_node in topologically_sorted_nodes(graph):
            out_console.print(escape(sorted_node), highlight=False)
    except GraphCycleError as e:
        remaining = ", ".join(sorted(map(str, e.remaining)))
        err_console.print(f"[red]✗ Graph has at least one cycle among: {escape(remaining)}[/red]")
        raise typer.Exit(code=1) from e
    except GraphError as e:
        raise _fail(e) from e


@app.command()
def reach(
    roots: Annotated[list[str], typer.Argument(help="Nodes to start from")],
    *,
    edge: Annotated[list[str] | None, typer.Option("--edge", "-e", help="Edge, such as 'a->b'")] = None,
    forward_only: Annotated[
        bool,
        typer.Option("--forward-only", help="Follow successors only, not predecessors"),
    ] = False,
) -> None:
    """Show the part of a graph reachable from the given roots."""
    config = _load_config()
    successors: defaultdict[str, list[str]] = defaultdict(list)
    predecessors: defaultdict[str, list[str]] = defaultdict(list)
    for token in edge or []:
        source, target = parse_edge(token, config.edge_separator)
        successors[source].append(target)
        predecessors[target].append(source)

    try:
        graph = reachability_graph(roots, dict(successors), {} if forward_only else dict(predecessors))
    except GraphError as e:
        raise _fail(e) from e
    _print_edges(graph, "Reachable graph")
    out_console.print(f"[cyan]Nodes:[/cyan] {escape(', '.join(graph.nodes))}")
