import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from depq._graph import CycleDetectedError, DepthLimitExceededError, Graph, NodeNotFoundError
from depq._io import InputFormat, OutputFormat, ParseError, RankDir, dump_path, load_path

from .config import ConfigError, get_config
from .graph_query import TraversalOrder, resolve_starts, sort_values, walk_edges, walk_paths, walk_tree

app = typer.Typer()

logger = logging.getLogger(__name__)
# Console for stderr (info/errors). Results go to stdout through typer.echo
# so that node values are printed verbatim.
err_console = Console(stderr=True)

FileArgument = Annotated[
    Path,
    typer.Argument(help="Input file, '-' for stdin"),
]
FromOption = Annotated[
    InputFormat | None,
    typer.Option("-f", "--from", help="Input format (guessed from the file extension by default)"),
]
PathOption = Annotated[
    bool,
    typer.Option("-P", "--path", help="Print the full path to every visited node"),
]
StartOption = Annotated[
    list[str] | None,
    typer.Option("-S", "--start", help="Start node (repeatable, defaults to the graph roots)"),
]
MaxDepthOption = Annotated[
    int | None,
    typer.Option("--max-depth", min=0, help="Stop expanding paths once they hold this many nodes"),
]


@app.callback()
def callback(
    *,
    verbose: bool = typer.Option(default=False, help="Enable verbose output"),
) -> None:
    """Query dependency graphs given as edge lists."""
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


def _fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error: {escape(message)}[/red]")
    raise typer.Exit(code=1)


def _load_graph(file: Path, from_: InputFormat | None) -> Graph[str]:
    try:
        return load_path(file, from_)
    except ParseError as e:
        _fail(f"can't load {file}: {e}")
    except OSError as e:
        _fail(f"can't read {file}: {e}")


def _default_max_depth() -> int:
    try:
        return get_config().default_max_depth
    except ConfigError as e:
        _fail(str(e))


def _resolve_starts(graph: Graph[str], start: list[str] | None) -> list[int]:
    try:
        starts = resolve_starts(graph, start)
    except NodeNotFoundError as e:
        _fail(str(e))
    logger.debug(f"Start nodes: {[graph.values[i] for i in starts]}")
    return starts


@app.command()
def show(
    file: FileArgument = Path("-"),
    *,
    from_: FromOption = None,
    inverted: Annotated[
        bool,
        typer.Option("-I", "--inverted", help="Reverse every edge before writing"),
    ] = False,
    to: Annotated[
        OutputFormat | None,
        typer.Option("-t", "--to", help="Output format (guessed from the output extension by default)"),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output file, '-' for stdout"),
    ] = Path("-"),
    rankdir: Annotated[
        RankDir | None,
        typer.Option("-R", "--rankdir", help="Graphviz rank direction (dot output only)"),
    ] = None,
) -> None:
    """Print the graph, optionally inverted or in another format."""
    graph = _load_graph(file, from_)
    if inverted:
        graph = graph.invert()

    try:
        dump_path(output, graph, to, rankdir=rankdir)
    except OSError as e:
        _fail(f"can't write {output}: {e}")


@app.command()
def roots(
    file: FileArgument = Path("-"),
    *,
    from_: FromOption = None,
) -> None:
    """Print the nodes that have no incoming edge."""
    graph = _load_graph(file, from_)
    for i in graph.find_roots():
        typer.echo(graph.values[i])


@app.command()
def dfs(
    file: FileArgument = Path("-"),
    *,
    from_: FromOption = None,
    path: PathOption = False,
    start: StartOption = None,
    tree: Annotated[
        bool,
        typer.Option("-T", "--tree", help="Print the traversal as an indented tree"),
    ] = False,
    max_depth: MaxDepthOption = None,
) -> None:
    """Traverse the graph depth-first."""
    graph = _load_graph(file, from_)
    starts = _resolve_starts(graph, start)
    default_max_depth = _default_max_depth()

    try:
        if path:
            walk_paths(
                graph,
                starts,
                typer.echo,
                order=TraversalOrder.DFS,
                max_depth=max_depth,
                default_max_depth=default_max_depth,
            )
        elif tree:
            walk_tree(graph, starts, typer.echo, max_depth=max_depth, default_max_depth=default_max_depth)
        else:
            walk_edges(
                graph,
                starts,
                typer.echo,
                order=TraversalOrder.DFS,
                max_depth=max_depth,
                default_max_depth=default_max_depth,
            )
    except DepthLimitExceededError as e:
        _fail(f"{e} (pass --max-depth to bound the traversal)")


@app.command()
def bfs(
    file: FileArgument = Path("-"),
    *,
    from_: FromOption = None,
    path: PathOption = False,
    start: StartOption = None,
    max_depth: MaxDepthOption = None,
) -> None:
    """Traverse the graph breadth-first."""
    graph = _load_graph(file, from_)
    starts = _resolve_starts(graph, start)
    default_max_depth = _default_max_depth()

    walk = walk_paths if path else walk_edges
    try:
        walk(
            graph,
            starts,
            typer.echo,
            order=TraversalOrder.BFS,
            max_depth=max_depth,
            default_max_depth=default_max_depth,
        )
    except DepthLimitExceededError as e:
        _fail(f"{e} (pass --max-depth to bound the traversal)")


@app.command()
def tsort(
    file: FileArgument = Path("-"),
    *,
    from_: FromOption = None,
) -> None:
    """Print the nodes in topological order.

    If the graph contains a cycle, the nodes that could not be ordered are
    reported on stderr, then printed after the ordered ones, and the command
    exits with status 1.
    """
    graph = _load_graph(file, from_)
    try:
        sort_values(graph, typer.echo)
    except CycleDetectedError as e:
        logger.warning("Graph contains a loop")
        remaining = sorted(e.residual)
        for i in remaining:
            err_console.print(f"loop: {escape(graph.values[i])}", highlight=False)
        for i in remaining:
            typer.echo(graph.values[i])
        raise typer.Exit(code=1) from e


def main() -> None:
    app()
