"""Graph query functions for CLI commands.

This module turns traversal and sorting results into output lines.
These are the functional core - lines are handed to an `emit` callback,
no I/O and no Rich rendering happens here.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from depq._graph import (
    DEFAULT_MAX_DEPTH,
    Graph,
    bfs,
    bfs_path,
    check_max_depth,
    dfs,
    dfs_path,
    topological_sort,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

type EmitFn = Callable[[str], object]


class TraversalOrder(StrEnum):
    BFS = "bfs"
    DFS = "dfs"


def resolve_starts(graph: Graph[str], starts: Sequence[str] | None) -> list[int]:
    """Map start values to indices, defaulting to the graph roots.

    Raises:
        NodeNotFoundError: If a start value is not in the graph.

    """
    if not starts:
        return graph.find_roots()
    return [graph.index_of(value) for value in starts]


def walk_edges(
    graph: Graph[str],
    starts: Sequence[int],
    emit: EmitFn,
    *,
    order: TraversalOrder,
    max_depth: int | None = None,
    default_max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Emit `predecessor node depth` for every traversed edge.

    Start nodes have no predecessor, produce no line and are always
    expanded; the depth bound applies from their children on.

    Raises:
        DepthLimitExceededError: If `max_depth` is None and the traversal
            reaches `default_max_depth`.

    """
    values = graph.values

    def visit(depth: int, node: int, predecessor: int | None) -> bool:
        if predecessor is None:
            return True
        emit(f"{values[predecessor]} {values[node]} {depth}")
        return check_max_depth(depth + 1, max_depth, default_max_depth)

    traverse = bfs if order is TraversalOrder.BFS else dfs
    traverse(graph, starts, visit)


def walk_paths(
    graph: Graph[str],
    starts: Sequence[int],
    emit: EmitFn,
    *,
    order: TraversalOrder,
    max_depth: int | None = None,
    default_max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Emit the space-separated path from a start node to every visited node.

    Raises:
        DepthLimitExceededError: If `max_depth` is None and a path reaches
            `default_max_depth` nodes.

    """
    values = graph.values

    def visit(path: tuple[int, ...]) -> bool:
        emit(" ".join(values[i] for i in path))
        return check_max_depth(len(path), max_depth, default_max_depth)

    traverse = bfs_path if order is TraversalOrder.BFS else dfs_path
    traverse(graph, starts, visit)


def walk_tree(
    graph: Graph[str],
    starts: Sequence[int],
    emit: EmitFn,
    *,
    max_depth: int | None = None,
    default_max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Emit a depth-first outline, one `* value` bullet per visited node.

    Each level is indented by four spaces.
    """
    values = graph.values

    def visit(depth: int, node: int, _predecessor: int | None) -> bool:
        emit(f"{'    ' * depth}* {values[node]}")
        return check_max_depth(depth + 1, max_depth, default_max_depth)

    dfs(graph, starts, visit)


def sort_values(graph: Graph[str], emit: EmitFn) -> None:
    """Emit the values of `graph` in topological order.

    Raises:
        CycleDetectedError: If the graph contains a cycle. Values ordered
            before the sort got stuck have already been emitted.

    """
    topological_sort(graph, lambda node: emit(graph.values[node]))
