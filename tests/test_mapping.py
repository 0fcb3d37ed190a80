"""Tests for transform and transformed."""

import pytest

from digraphs import Graph, InvalidArgumentError, transform, transformed


@pytest.fixture
def two_edges() -> Graph[str]:
    """Graph with nodes {a, b, c, d} and edges {(a, c), (b, d)}, no self-loops."""
    return Graph.from_edges([("a", "c"), ("b", "d")])


class TestTransformed:
    """Tests for transformation through a mapping."""

    def test_merging_targets(self, two_edges: Graph[str]) -> None:
        result = transformed(two_edges, {"a": "a", "b": "b", "c": "e", "d": "e"})
        assert set(result.nodes) == {"a", "b", "e"}
        assert set(result.edges) == {("a", "e"), ("b", "e")}

    def test_injective_mapping_keeps_topology(self, two_edges: Graph[str]) -> None:
        result = transformed(two_edges, {"a": 1, "b": 2, "c": 3, "d": 4})
        assert result == Graph.from_edges([(1, 3), (2, 4)])

    def test_keeps_flags(self) -> None:
        graph = Graph.from_edges([("a", "b")], directed=False, allows_self_loops=True)
        result = transformed(graph, {"a": "x", "b": "y"})
        assert not result.directed
        assert result.allows_self_loops

    def test_collapsing_edge_without_self_loops(self, two_edges: Graph[str]) -> None:
        with pytest.raises(InvalidArgumentError, match="not injective") as excinfo:
            transformed(two_edges, {"a": "x", "b": "b", "c": "x", "d": "d"})
        assert excinfo.value.node == "a"

    def test_collapsing_edge_with_self_loops(self) -> None:
        graph = Graph.from_edges([("a", "c"), ("b", "d")], allows_self_loops=True)
        result = transformed(graph, {"a": "x", "b": "x", "c": "x", "d": "y"})
        assert set(result.nodes) == {"x", "y"}
        assert set(result.edges) == {("x", "x"), ("x", "y")}

    def test_merging_into_fewer_nodes(self) -> None:
        graph = Graph.from_edges([("a", "c"), ("b", "d")], allows_self_loops=True)
        result = transformed(graph, {"a": "x", "b": "x", "c": "y", "d": "y"})
        assert set(result.nodes) == {"x", "y"}
        assert result.edges == (("x", "y"),)

    def test_isolated_nodes_mapped(self) -> None:
        graph = Graph.from_edges([], nodes=["a", "b"])
        result = transformed(graph, {"a": "x", "b": "x"})
        assert result.nodes == ("x",)

    def test_node_absent_from_mapping(self, two_edges: Graph[str]) -> None:
        with pytest.raises(InvalidArgumentError, match="absent") as excinfo:
            transformed(two_edges, {"a": "a", "b": "b", "c": "c"})
        assert excinfo.value.node == "d"

    def test_node_mapped_to_none(self, two_edges: Graph[str]) -> None:
        with pytest.raises(InvalidArgumentError, match="None") as excinfo:
            transformed(two_edges, {"a": "a", "b": None, "c": "c", "d": "d"})
        assert excinfo.value.node == "b"


class TestTransform:
    """Tests for transformation through a function."""

    def test_function(self, two_edges: Graph[str]) -> None:
        result = transform(two_edges, str.upper)
        assert set(result.edges) == {("A", "C"), ("B", "D")}

    def test_function_called_per_node_and_endpoint(self, two_edges: Graph[str]) -> None:
        calls: list[str] = []

        def mapping(node: str) -> str:
            calls.append(node)
            return node

        transform(two_edges, mapping)
        assert len(calls) == len(two_edges) + 2 * len(two_edges.edges)

    def test_function_exception_propagates(self, two_edges: Graph[str]) -> None:
        def mapping(node: str) -> str:
            raise LookupError(node)

        with pytest.raises(LookupError):
            transform(two_edges, mapping)

    def test_function_returning_none(self, two_edges: Graph[str]) -> None:
        with pytest.raises(InvalidArgumentError) as excinfo:
            transform(two_edges, lambda node: None if node == "c" else node)
        assert excinfo.value.node == "c"
        assert excinfo.value.callback == "mapping"
