"""Index-based directed graph with value interning."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ._algorithms import topological_order

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping, Sequence


class NodeNotFoundError(LookupError):
    """Raised when a value is not a node of the graph."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Node not found: {value}")


class RemapError(ValueError):
    """Raised when a graph cannot be reindexed onto the given value order."""


@dataclass(frozen=True, slots=True)
class Edge[T]:
    """A directed edge from `source` to `target`."""

    source: T
    target: T

    def __iter__(self) -> Iterator[T]:
        yield self.source
        yield self.target

    def inverted(self) -> Edge[T]:
        """Return the edge with its endpoints swapped."""
        return Edge(self.target, self.source)


@dataclass(frozen=True, slots=True)
class Graph[T]:
    """A directed graph over interned values.

    Every value gets a stable integer index in first-seen order. All
    algorithms work on indices; values only appear at the boundary.

    Attributes:
        values: Node values, the index of a value is its position.
        value_to_index: Inverse of `values`.
        deps: Mapping from a source index to its destination indices in
            edge insertion order. Duplicates and self-loops are kept.

    """

    values: tuple[T, ...] = ()
    value_to_index: dict[T, int] = field(default_factory=dict)
    deps: dict[int, tuple[int, ...]] = field(default_factory=dict)

    @classmethod
    def from_edges(cls, edges: Iterable[Edge[T] | tuple[T, T]]) -> Graph[T]:
        """Build a graph from a stream of (source, target) edges.

        Example:
            >>> graph = Graph.from_edges([("a", "b"), ("a", "c")])
            >>> graph.values
            ('a', 'b', 'c')
            >>> graph.deps
            {0: (1, 2)}

        """
        builder: _Builder[T] = _Builder()
        for source, target in edges:
            builder.add_edge(source, target)
        return builder.build()

    @classmethod
    def from_mapping(cls, mapping: Mapping[T, Sequence[T]]) -> Graph[T]:
        """Build a graph from a source -> destinations mapping.

        Sources are read in sorted order, so the result does not depend on
        the key order of the mapping. A source with no destinations becomes
        an isolated node.
        """
        builder: _Builder[T] = _Builder()
        for source in sorted(mapping):  # type: ignore[type-var]
            targets = mapping[source]
            if not targets:
                builder.intern(source)
            for target in targets:
                builder.add_edge(source, target)
        return builder.build()

    def index_of(self, value: T) -> int:
        """Return the index of `value`.

        Raises:
            NodeNotFoundError: If `value` is not in the graph.

        """
        try:
            return self.value_to_index[value]
        except KeyError:
            raise NodeNotFoundError(value) from None

    def find_roots(self) -> list[int]:
        """Return the indices with no incoming edge, ascending."""
        referenced: set[int] = set()
        for targets in self.deps.values():
            referenced.update(targets)
        return [i for i in range(len(self.values)) if i not in referenced]

    def to_edges(self) -> list[Edge[T]]:
        """Return all edges in canonical order.

        Sources are visited by ascending index, destinations in insertion
        order. Feeding the result to `from_edges` rebuilds the same graph.
        """
        return [Edge(self.values[source], self.values[target]) for source, target in self.to_index_edges()]

    def to_index_edges(self) -> list[tuple[int, int]]:
        """Return all edges as index pairs, in the same order as `to_edges`."""
        edges: list[tuple[int, int]] = []
        for source in range(len(self.values)):
            edges.extend((source, target) for target in self.deps.get(source, ()))
        return edges

    def to_mapping(self) -> dict[T, list[T]]:
        """Return a source -> destinations mapping with sorted keys.

        Isolated nodes are kept with an empty destination list so that
        `from_mapping` restores them.
        """
        referenced: set[int] = set()
        for targets in self.deps.values():
            referenced.update(targets)

        mapping: dict[T, list[T]] = {}
        for index, value in enumerate(self.values):
            targets = self.deps.get(index)
            if targets is not None:
                mapping[value] = [self.values[t] for t in targets]
            elif index not in referenced:
                mapping[value] = []
        return {k: mapping[k] for k in sorted(mapping)}  # type: ignore[type-var]

    def invert(self) -> Graph[T]:
        """Return a new graph with every edge reversed.

        The result interns values in the order they appear in the inverted
        edge stream, so its indices generally differ from this graph's.
        Use `remap(self.values)` to line them up again.
        """
        return Graph.from_edges(edge.inverted() for edge in self.to_edges())

    def remap(self, values: Iterable[T]) -> Graph[T]:
        """Return the same logical graph reindexed onto `values`.

        Args:
            values: The new value order. Must contain every value that
                takes part in an edge, each exactly once.

        Raises:
            RemapError: If a value is missing from or repeated in `values`.

        """
        new_values = tuple(values)
        value_to_index: dict[T, int] = {}
        for i, value in enumerate(new_values):
            if value in value_to_index:
                msg = f"Duplicate value in remap order: {value!r}"
                raise RemapError(msg)
            value_to_index[value] = i

        def reindex(old: int) -> int:
            value = self.values[old]
            try:
                return value_to_index[value]
            except KeyError:
                msg = f"Value missing from remap order: {value!r}"
                raise RemapError(msg) from None

        deps = {
            reindex(source): tuple(reindex(target) for target in targets)
            for source, targets in self.deps.items()
        }
        return Graph(values=new_values, value_to_index=value_to_index, deps=deps)

    def topological_order(self) -> list[int]:
        """Return the indices in topological order.

        Raises:
            CycleDetectedError: If the graph contains a cycle.

        """
        return topological_order(self)

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self.values)

    def __contains__(self, value: object) -> bool:
        """Check if a value is a node of the graph."""
        return value in self.value_to_index


class _Builder[T]:
    """Accumulates edges while interning values in first-seen order."""

    def __init__(self) -> None:
        self._values: list[T] = []
        self._value_to_index: dict[T, int] = {}
        self._deps: dict[int, list[int]] = {}

    def intern(self, value: T) -> int:
        index = self._value_to_index.get(value)
        if index is None:
            index = len(self._values)
            self._value_to_index[value] = index
            self._values.append(value)
        return index

    def add_edge(self, source: T, target: T) -> None:
        # Source is interned before target so that first-seen order follows
        # the reading order of each edge.
        source_index = self.intern(source)
        target_index = self.intern(target)
        self._deps.setdefault(source_index, []).append(target_index)

    def build(self) -> Graph[T]:
        return Graph(
            values=tuple(self._values),
            value_to_index=dict(self._value_to_index),
            deps={k: tuple(v) for k, v in self._deps.items()},
        )
