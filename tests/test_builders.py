"""Tests for reachability_graph and sequence_graph."""

import pytest

from digraphs import Graph, InvalidArgumentError, reachability_graph, sequence_graph


class TestReachabilityGraph:
    """Tests for building graphs by frontier expansion."""

    def test_successors_and_predecessors(self) -> None:
        succs = {1: {2, 3}, 2: {4}, 3: set(), 4: set()}
        preds = {1: set(), 2: {1}, 3: set(), 4: {3}}
        expected = Graph.from_edges([(1, 2), (1, 3), (2, 4), (3, 4)])
        assert reachability_graph({1}, succs.get, preds.get) == expected

    def test_mappings_treat_missing_nodes_as_leaves(self) -> None:
        graph = reachability_graph({"a"}, {"a": ["b"]}, {})
        assert set(graph.nodes) == {"a", "b"}
        assert graph.edges == (("a", "b"),)

    def test_predecessor_of_seen_node_adds_nothing(self) -> None:
        without = reachability_graph({"a"}, {"a": ["b"]}, {})
        with_preds = reachability_graph({"a"}, {"a": ["b"]}, {"b": ["a"]})
        assert with_preds == without

    def test_backward_expansion(self) -> None:
        graph = reachability_graph({"c"}, {}, {"c": ["b"], "b": ["a"]})
        assert set(graph.nodes) == {"a", "b", "c"}
        assert set(graph.edges) == {("a", "b"), ("b", "c")}

    def test_self_loop_from_predecessor(self) -> None:
        succs = {1: [2], 2: []}
        preds = {1: [1], 2: []}
        graph = reachability_graph({1}, succs, preds)
        assert graph.allows_self_loops
        assert graph == Graph.from_edges([(1, 1), (1, 2)], allows_self_loops=True)

    def test_roots_without_edges(self) -> None:
        succs: dict[int, list[int]] = {1: [], 2: []}
        graph = reachability_graph({1, 2}, succs.get, succs.get)
        assert set(graph.nodes) == {1, 2}
        assert graph.edges == ()

    def test_cycle_terminates(self) -> None:
        graph = reachability_graph(["a"], {"a": ["b"], "b": ["c"], "c": ["a"]}, {})
        assert len(graph) == 3
        assert len(graph.edges) == 3

    def test_each_node_expanded_once(self) -> None:
        calls: list[str] = []

        def successors(node: str) -> list[str]:
            calls.append(node)
            return {"a": ["b", "c"], "b": ["c"], "c": ["a"]}[node]

        reachability_graph(["a"], successors, {})
        assert sorted(calls) == ["a", "b", "c"]

    def test_breadth_first_node_order(self) -> None:
        graph = reachability_graph(["a"], {"a": ["b", "c"], "b": ["d"]}, {})
        assert graph.nodes == ("a", "b", "c", "d")

    def test_roots_are_copied(self) -> None:
        roots = ["a"]
        graph = reachability_graph(roots, {}, {})
        roots.append("b")
        assert graph.nodes == ("a",)

    def test_none_roots(self) -> None:
        with pytest.raises(InvalidArgumentError, match="roots"):
            reachability_graph(None, {}, {})  # type: ignore[arg-type]

    def test_none_root_element(self) -> None:
        with pytest.raises(InvalidArgumentError, match="roots"):
            reachability_graph(["a", None], {}, {})

    def test_none_function(self) -> None:
        with pytest.raises(InvalidArgumentError, match="predecessors") as excinfo:
            reachability_graph(["a"], {}, None)  # type: ignore[arg-type]
        assert excinfo.value.callback == "predecessors"

    def test_function_returning_none(self) -> None:
        with pytest.raises(InvalidArgumentError, match="successors function returned None") as excinfo:
            reachability_graph(["a"], lambda _: None, {})
        assert excinfo.value.callback == "successors"
        assert excinfo.value.node == "a"

    def test_function_returning_none_element(self) -> None:
        with pytest.raises(InvalidArgumentError, match="None element") as excinfo:
            reachability_graph(["a"], {}, {"a": [None]})
        assert excinfo.value.callback == "predecessors"

    def test_function_returning_non_iterable(self) -> None:
        with pytest.raises(InvalidArgumentError, match="non-iterable int") as excinfo:
            reachability_graph(["a"], lambda _: 5, {})
        assert excinfo.value.callback == "successors"
        assert excinfo.value.node == "a"
        assert isinstance(excinfo.value.__cause__, TypeError)

    def test_callback_exception_propagates(self) -> None:
        def successors(node: str) -> list[str]:
            raise KeyError(node)

        with pytest.raises(KeyError):
            reachability_graph(["a"], successors, {})


class TestSequenceGraph:
    """Tests for building the "has as next element" graph of a sequence."""

    def test_simple_sequence(self) -> None:
        graph = sequence_graph(["a", "b", "c"])
        assert set(graph.nodes) == {"a", "b", "c"}
        assert set(graph.edges) == {("a", "b"), ("b", "c")}

    def test_repeated_elements(self) -> None:
        graph = sequence_graph(["a", "b", "a", "b"])
        assert set(graph.nodes) == {"a", "b"}
        assert set(graph.edges) == {("a", "b"), ("b", "a")}

    def test_adjacent_duplicates_make_self_loop(self) -> None:
        graph = sequence_graph(["a", "a", "b"])
        assert graph.has_edge("a", "a")
        assert graph.allows_self_loops

    def test_converging_edges(self) -> None:
        graph = sequence_graph(["a", "c", "b", "c"])
        assert graph.predecessors("c") == frozenset({"a", "b"})

    def test_empty(self) -> None:
        graph = sequence_graph([])
        assert len(graph) == 0
        assert graph.edges == ()

    def test_singleton(self) -> None:
        graph = sequence_graph(["a"])
        assert graph.nodes == ("a",)
        assert graph.edges == ()

    def test_accepts_iterator(self) -> None:
        graph = sequence_graph(iter(range(3)))
        assert set(graph.edges) == {(0, 1), (1, 2)}

    def test_none_element(self) -> None:
        with pytest.raises(InvalidArgumentError):
            sequence_graph(["a", None])
