"""Topological sorting for Graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from ._graph import Graph


class CycleDetectedError(ValueError):
    """Raised when a topological sort runs into a cycle.

    The sort still runs to completion before raising, so the nodes that
    could be ordered have already been emitted.

    Attributes:
        residual: Indices that were never emitted. Covers every node on an
            unresolved cycle or reachable only through one.
        emitted: Indices emitted before the sort got stuck, a valid partial
            topological order.

    """

    def __init__(self, residual: frozenset[int], emitted: tuple[int, ...]) -> None:
        self.residual = residual
        self.emitted = emitted
        super().__init__(f"Cycle detected in graph ({len(residual)} nodes left unordered)")


def topological_sort(graph: Graph, visit: Callable[[int], object]) -> None:
    """Emit the nodes of `graph` in topological order.

    Kahn's algorithm with a single LIFO ready stack: roots are popped in
    ascending order, and a node freed by the last emitted node is popped
    before roots that were ready earlier.

    Args:
        graph: The graph to sort. It is not modified.
        visit: Called with each node index as soon as it is ordered.

    Raises:
        CycleDetectedError: If some nodes could not be ordered.

    Example:
        >>> g = Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        >>> topological_sort(g, print)
        0
        1
        2

    """
    deps = {source: list(targets) for source, targets in graph.deps.items()}
    # The inverted graph interns values in its own order; remap it so that
    # its indices match the input graph.
    rdeps = {target: list(sources) for target, sources in graph.invert().remap(graph.values).deps.items()}

    stack = [node for node in reversed(graph.find_roots()) if node not in rdeps]
    emitted: list[int] = []

    while stack:
        node = stack.pop()
        visit(node)
        emitted.append(node)
        targets = deps.pop(node, None)
        if targets is None:
            continue
        for target in reversed(targets):
            sources = rdeps.get(target)
            if sources is None:
                continue
            sources[:] = [s for s in sources if s != node]
            if not sources:
                del rdeps[target]
                stack.append(target)

    if deps:
        residual = frozenset(range(len(graph.values))) - frozenset(emitted)
        raise CycleDetectedError(residual, tuple(emitted))


def topological_order(graph: Graph) -> list[int]:
    """Return the node indices of `graph` in topological order.

    Raises:
        CycleDetectedError: If the graph contains a cycle.

    """
    order: list[int] = []
    topological_sort(graph, order.append)
    return order
