"""Graph algorithms: reachability, transitive closure and topological ordering."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Collection, Hashable, Iterable, Iterator, Mapping

from digraphs._errors import GraphCycleError, InvalidArgumentError

from ._graph import Graph, GraphBuilder

logger = logging.getLogger(__name__)


def reachable_nodes[N: Hashable](graph: Graph[N], node: N) -> tuple[N, ...]:
    """Return the nodes reachable from ``node``, itself included, in breadth-first order.

    Raises:
        InvalidArgumentError: If ``node`` is not in the graph.

    """
    if node not in graph:
        msg = f"Node {node!r} is not an element of this graph"
        raise InvalidArgumentError(msg, node=node)
    adjacency = graph.successor_map
    visited: dict[N, None] = {node: None}
    queue = deque([node])
    while queue:
        current = queue.popleft()
        for successor in adjacency[current]:
            if successor not in visited:
                visited[successor] = None
                queue.append(successor)
    return tuple(visited)


def transitive_closure[N: Hashable](graph: Graph[N]) -> Graph[N]:
    """Compute the transitive closure of a graph, understood as not implying reflexivity.

    The result has an edge ``(a, b)`` for every ``a != b`` such that a
    non-empty path leads from ``a`` to ``b``. A self-loop ``(n, n)`` is kept
    only when the input graph has that very edge, even if ``n`` lies on a
    cycle.

    The result keeps the directedness of ``graph`` and allows self-loops.

    Example:
        >>> graph = Graph.from_edges([("a", "b"), ("b", "c")])
        >>> transitive_closure(graph).has_edge("a", "c")
        True

    """
    # Reflexive closure first: every node reaches itself
    builder: GraphBuilder[N] = GraphBuilder(directed=graph.directed, allows_self_loops=True)
    for node in graph.nodes:
        for reached in reachable_nodes(graph, node):
            builder.put_edge(node, reached)

    # Then drop each self-loop the original graph does not have
    adjacency = graph.successor_map
    stripped = 0
    for node in graph.nodes:
        if node not in adjacency[node]:
            builder.remove_edge(node, node)
            stripped += 1

    closure = builder.build()
    logger.debug(
        "Transitive closure: %d edges in, %d edges out, %d reflexive loops stripped",
        len(graph.edges),
        len(closure.edges),
        stripped,
    )
    return closure


class TopologicalOrderIterator[N: Hashable](Iterator[N]):
    """Lazy topological ordering of a directed graph (Kahn's algorithm).

    Nodes are produced one at a time, every node before its successors.
    Ties between simultaneously ready nodes are broken first-in first-out,
    starting from the graph's node order, so the output is deterministic.

    The iterator cannot be restarted. When every node has been produced it
    raises ``StopIteration``; if nodes remain that never reached in-degree
    zero, the graph has a cycle and ``GraphCycleError`` is raised instead,
    on this and every later call.
    """

    def __init__(self, graph: Graph[N]) -> None:
        if not graph.directed:
            msg = "Topological order is only defined for directed graphs"
            raise InvalidArgumentError(msg)
        self._adjacency = graph.successor_map
        self._roots: deque[N] = deque()
        self._non_roots_to_in_degree: dict[N, int] = {}
        for node in graph.nodes:
            in_degree = graph.in_degree(node)
            if in_degree == 0:
                self._roots.append(node)
            else:
                self._non_roots_to_in_degree[node] = in_degree

    def __iter__(self) -> TopologicalOrderIterator[N]:
        return self

    def __next__(self) -> N:
        if not self._roots:
            if self._non_roots_to_in_degree:
                logger.debug("Cycle detected: %d nodes left unsorted", len(self._non_roots_to_in_degree))
                raise GraphCycleError(self._non_roots_to_in_degree)
            raise StopIteration

        node = self._roots.popleft()
        for successor in self._adjacency[node]:
            in_degree = self._non_roots_to_in_degree[successor] - 1
            if in_degree == 0:
                del self._non_roots_to_in_degree[successor]
                self._roots.append(successor)
            else:
                self._non_roots_to_in_degree[successor] = in_degree
        return node


class TopologicallySortedNodes[N: Hashable](Collection[N]):
    """Re-iterable, sized view of the nodes of a graph in topological order.

    Each iteration starts a fresh ``TopologicalOrderIterator``.
    """

    __slots__ = ("_graph",)

    def __init__(self, graph: Graph[N]) -> None:
        if not graph.directed:
            msg = "Topological order is only defined for directed graphs"
            raise InvalidArgumentError(msg)
        self._graph = graph

    def __iter__(self) -> Iterator[N]:
        return TopologicalOrderIterator(self._graph)

    def __len__(self) -> int:
        return len(self._graph)

    def __contains__(self, node: object) -> bool:
        return node in self._graph


def topologically_sorted_nodes[N: Hashable](graph: Graph[N]) -> TopologicallySortedNodes[N]:
    """Return a lazy, re-iterable view of ``graph``'s nodes in topological order.

    Cycles are only detected while iterating: ``GraphCycleError`` is raised
    once all the nodes that can be ordered have been produced.
    """
    return TopologicallySortedNodes(graph)


def topological_order[N: Hashable](graph: Graph[N]) -> list[N]:
    """Return the nodes of a directed graph in topological order.

    Raises:
        GraphCycleError: If the graph contains a cycle.
        InvalidArgumentError: If the graph is undirected.

    """
    return list(TopologicalOrderIterator(graph))


def has_cycle(graph: Graph[Hashable]) -> bool:
    """Check if a directed graph contains a cycle (self-loops included)."""
    try:
        topological_order(graph)
    except GraphCycleError:
        return True
    return False


def topological_sort[T: Hashable](successors: Mapping[T, Iterable[T]]) -> list[T]:
    """Sort an adjacency mapping topologically.

    Convenience entry point for callers holding a plain dict rather than a
    ``Graph``. Nodes only mentioned as successors are included; repeated
    successors count as one edge. Ordering and tie-breaking are those of
    ``TopologicalOrderIterator``, keys first in mapping order.

    Raises:
        GraphCycleError: If the mapping describes a cycle, self-loops included.

    Example:
        >>> topological_sort({"a": ["b"], "b": ["c"]})
        ['a', 'b', 'c']

    """
    graph = Graph.from_edges(
        ((node, succ) for node, succs in successors.items() for succ in succs),
        nodes=successors,
        allows_self_loops=True,
    )
    return topological_order(graph)
