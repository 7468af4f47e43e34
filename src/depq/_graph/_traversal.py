"""Breadth-first and depth-first traversal over a Graph.

None of the traversals keep a visited set: a node reachable through several
paths is visited once per path. On a cyclic graph the traversal only ends
when the visit callback stops expanding, so callers must bound the depth.

Visit callbacks return True to expand the node's children and False to
prune that node's subtree. Other queued work is not affected.
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from ._graph import Graph

type VisitFn = Callable[[int, int, int | None], bool]
"""Visit callback receiving (depth, node, predecessor)."""

type PathVisitFn = Callable[[tuple[int, ...]], bool]
"""Visit callback receiving the path from a start node to the current node."""


def _valid_starts(graph: Graph, starts: Iterable[int]) -> list[int]:
    n = len(graph.values)
    return [i for i in starts if 0 <= i < n]


def bfs(graph: Graph, starts: Iterable[int], visit: VisitFn) -> None:
    """Traverse breadth-first from every start node at once.

    Args:
        graph: The graph to traverse.
        starts: Start indices, seeded at depth 0 in the given order.
            Indices outside the graph are ignored.
        visit: Called as `visit(depth, node, predecessor)` for every
            dequeued record. `predecessor` is None for start nodes.

    Example:
        >>> g = Graph.from_edges([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])
        >>> seen = []
        >>> bfs(g, [0], lambda d, n, p: seen.append((d, n, p)) or True)
        >>> seen
        [(0, 0, None), (1, 1, 0), (1, 2, 0), (2, 3, 1), (2, 3, 2)]

    """
    queue: deque[tuple[int, int, int | None]] = deque((0, i, None) for i in _valid_starts(graph, starts))
    while queue:
        depth, node, predecessor = queue.popleft()
        if not visit(depth, node, predecessor):
            continue
        queue.extend((depth + 1, child, node) for child in graph.deps.get(node, ()))


def bfs_path(graph: Graph, starts: Iterable[int], visit: PathVisitFn) -> None:
    """Traverse breadth-first, passing the full path to each visit.

    Queue order and pruning are the same as `bfs`.
    """
    queue: deque[tuple[int, ...]] = deque((i,) for i in _valid_starts(graph, starts))
    while queue:
        path = queue.popleft()
        if not visit(path):
            continue
        queue.extend((*path, child) for child in graph.deps.get(path[-1], ()))


def dfs(graph: Graph, starts: Iterable[int], visit: VisitFn) -> None:
    """Traverse depth-first in preorder from every start node.

    Start nodes are handled in the given order and children in insertion
    order, so the visit order matches a left-to-right reading of the input.
    The callback contract is the same as `bfs`.
    """
    stack: list[tuple[int, int, int | None]] = [(0, i, None) for i in _valid_starts(graph, starts)]
    stack.reverse()
    while stack:
        depth, node, predecessor = stack.pop()
        if not visit(depth, node, predecessor):
            continue
        stack.extend((depth + 1, child, node) for child in reversed(graph.deps.get(node, ())))


def dfs_path(graph: Graph, starts: Iterable[int], visit: PathVisitFn) -> None:
    """Traverse depth-first, passing the full path to each visit."""
    stack: list[tuple[int, ...]] = [(i,) for i in _valid_starts(graph, starts)]
    stack.reverse()
    while stack:
        path = stack.pop()
        if not visit(path):
            continue
        stack.extend((*path, child) for child in reversed(graph.deps.get(path[-1], ())))
