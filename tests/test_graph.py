"""Tests for Graph construction, roots, serialization order and transforms."""

import pytest

from depq._graph import Edge, Graph, NodeNotFoundError, RemapError


def _edge_pairs(graph: Graph[str]) -> list[tuple[str, str]]:
    return [(e.source, e.target) for e in graph.to_edges()]


class TestEdge:
    def test_unpacks_like_a_pair(self) -> None:
        source, target = Edge("a", "b")
        assert (source, target) == ("a", "b")

    def test_inverted(self) -> None:
        assert Edge("a", "b").inverted() == Edge("b", "a")


class TestGraphConstruction:
    """Tests for Graph.from_edges."""

    def test_empty_graph(self) -> None:
        graph = Graph.from_edges([])
        assert graph.values == ()
        assert graph.deps == {}
        assert len(graph) == 0

    def test_interns_in_first_seen_order(self) -> None:
        graph = Graph.from_edges([("b", "a"), ("c", "b"), ("a", "d")])
        assert graph.values == ("b", "a", "c", "d")
        assert graph.value_to_index == {"b": 0, "a": 1, "c": 2, "d": 3}

    def test_value_table_is_bijective(self) -> None:
        graph = Graph.from_edges([("x", "y"), ("y", "z"), ("z", "x")])
        for i, value in enumerate(graph.values):
            assert graph.value_to_index[value] == i

    def test_deps_keep_insertion_order(self) -> None:
        graph = Graph.from_edges([("a", "c"), ("a", "b"), ("a", "d")])
        assert graph.deps == {0: (1, 2, 3)}

    def test_duplicates_and_self_loops_are_kept(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("a", "b"), ("a", "a")])
        assert graph.deps == {0: (1, 1, 0)}

    def test_accepts_edge_objects(self) -> None:
        graph = Graph.from_edges([Edge("a", "b"), Edge("b", "c")])
        assert graph.values == ("a", "b", "c")
        assert graph.deps == {0: (1,), 1: (2,)}

    def test_contains(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        assert "a" in graph
        assert "b" in graph
        assert "c" not in graph

    def test_works_with_integers(self) -> None:
        graph = Graph.from_edges([(3, 1), (1, 2)])
        assert graph.values == (3, 1, 2)
        assert graph.find_roots() == [0]


class TestGraphFromMapping:
    def test_sources_are_read_in_sorted_order(self) -> None:
        graph = Graph.from_mapping({"b": ["c"], "a": ["b", "d"]})
        assert graph.values == ("a", "b", "d", "c")
        assert _edge_pairs(graph) == [("a", "b"), ("a", "d"), ("b", "c")]

    def test_empty_destination_list_makes_isolated_node(self) -> None:
        graph = Graph.from_mapping({"a": [], "b": ["c"]})
        assert graph.values == ("a", "b", "c")
        assert graph.find_roots() == [0, 1]
        assert graph.to_edges() == [Edge("b", "c")]


class TestIndexOf:
    def test_known_value(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        assert graph.index_of("b") == 1

    def test_unknown_value(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        with pytest.raises(NodeNotFoundError, match="Node not found: z") as excinfo:
            graph.index_of("z")
        assert excinfo.value.value == "z"


class TestFindRoots:
    def test_single_root(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c")])
        assert graph.find_roots() == [0]

    def test_multiple_roots_sorted_ascending(self) -> None:
        graph = Graph.from_edges([("c", "x"), ("a", "x"), ("b", "a")])
        # c=0, x=1, a=2, b=3; a has an incoming edge from b
        assert graph.find_roots() == [0, 3]

    def test_empty_when_every_node_has_an_incoming_edge(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c"), ("c", "a")])
        assert graph.find_roots() == []

    def test_self_loop_is_not_a_root(self) -> None:
        graph = Graph.from_edges([("a", "a"), ("b", "a")])
        assert graph.find_roots() == [1]

    def test_empty_graph(self) -> None:
        assert Graph.from_edges([]).find_roots() == []


class TestToEdges:
    def test_canonical_order_groups_by_source_index(self) -> None:
        edges = [("a", "b"), ("c", "d"), ("a", "c"), ("b", "d")]
        graph = Graph.from_edges(edges)
        assert _edge_pairs(graph) == [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]

    def test_round_trip_preserves_multiset_and_per_source_order(self) -> None:
        edges = [("x", "z"), ("y", "x"), ("x", "y"), ("x", "z"), ("z", "z")]
        graph = Graph.from_edges(edges)
        rebuilt = Graph.from_edges(graph.to_edges())

        assert sorted(_edge_pairs(graph)) == sorted(edges)
        for source in ("x", "y", "z"):
            assert [t for s, t in _edge_pairs(graph) if s == source] == [t for s, t in edges if s == source]
        assert rebuilt == graph

    def test_index_edges_follow_the_same_order(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        assert graph.to_index_edges() == [(0, 1), (0, 2), (1, 2)]


class TestToMapping:
    def test_sorted_keys_and_ordered_destinations(self) -> None:
        graph = Graph.from_edges([("b", "d"), ("a", "c"), ("a", "b")])
        assert graph.to_mapping() == {"a": ["c", "b"], "b": ["d"]}
        assert list(graph.to_mapping()) == ["a", "b"]

    def test_keeps_isolated_nodes(self) -> None:
        graph = Graph.from_mapping({"a": [], "b": ["c"]})
        assert graph.to_mapping() == {"a": [], "b": ["c"]}


class TestInvert:
    def test_reverses_every_edge(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        inverted = graph.invert()
        assert sorted(_edge_pairs(inverted)) == [("b", "a"), ("c", "a"), ("c", "b")]

    def test_reinterns_values_in_inverted_stream_order(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        # inverted stream: b a, c a, c b
        assert graph.invert().values == ("b", "a", "c")

    def test_does_not_alias_source_graph(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        inverted = graph.invert()
        assert inverted.value_to_index is not graph.value_to_index
        assert inverted.deps is not graph.deps
        assert graph.deps == {0: (1,)}

    def test_inverted_and_remapped_scenario(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")])
        rgraph = graph.invert().remap(graph.values)

        assert rgraph.values == ("a", "b", "c")
        assert rgraph.find_roots() == [2]
        assert sorted(_edge_pairs(rgraph)) == [("b", "a"), ("c", "a"), ("c", "b")]

    def test_double_inversion_round_trip(self) -> None:
        edges = [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"), ("d", "d"), ("a", "b")]
        graph = Graph.from_edges(edges)
        restored = graph.invert().invert().remap(graph.values)
        assert sorted(_edge_pairs(restored)) == sorted(_edge_pairs(graph))


class TestRemap:
    def test_reindexes_onto_given_order(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c")])
        remapped = graph.remap(["c", "b", "a"])

        assert remapped.values == ("c", "b", "a")
        assert remapped.value_to_index == {"c": 0, "b": 1, "a": 2}
        assert remapped.deps == {2: (1,), 1: (0,)}
        assert _edge_pairs(remapped) == [("b", "c"), ("a", "b")]

    def test_extra_values_become_isolated_nodes(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        remapped = graph.remap(["z", "a", "b"])
        assert remapped.find_roots() == [0, 1]

    def test_missing_value_raises(self) -> None:
        graph = Graph.from_edges([("a", "b"), ("b", "c")])
        with pytest.raises(RemapError, match="missing"):
            graph.remap(["a", "b"])

    def test_duplicate_value_raises(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        with pytest.raises(RemapError, match="Duplicate"):
            graph.remap(["a", "b", "a"])

    def test_source_graph_is_untouched(self) -> None:
        graph = Graph.from_edges([("a", "b")])
        graph.remap(["b", "a"])
        assert graph.values == ("a", "b")
        assert graph.deps == {0: (1,)}
