"""Immutable graph value and its mutable builder."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from digraphs._errors import InvalidArgumentError

logger = logging.getLogger(__name__)


def _check_node(node: object, what: str = "node") -> None:
    if node is None:
        msg = f"{what} must not be None"
        raise InvalidArgumentError(msg)


def _empty_adjacency() -> Mapping:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True, eq=False)
class Graph[N: Hashable]:
    """A simple graph: no parallel edges, optionally directed and with self-loops.

    This is a pure, immutable value. Nodes iterate in insertion order, which
    keeps every algorithm built on top of it deterministic. Instances are
    normally obtained from a builder function or from ``GraphBuilder.build()``.

    For an undirected graph the edge ``(a, b)`` is the same edge as ``(b, a)``:
    ``successors``, ``predecessors`` and ``adjacent_nodes`` coincide and
    ``edges`` lists each pair once.

    Attributes:
        directed: Whether edges are ordered pairs.
        allows_self_loops: Whether an edge may start and end at the same node.
        _successors: Insertion-ordered mapping from node to its direct successors.
        _predecessors: Insertion-ordered mapping from node to its direct predecessors.

    """

    directed: bool = True
    allows_self_loops: bool = False
    _successors: Mapping[N, tuple[N, ...]] = field(default_factory=_empty_adjacency)
    _predecessors: Mapping[N, tuple[N, ...]] = field(default_factory=_empty_adjacency)

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[tuple[N, N]],
        *,
        nodes: Iterable[N] = (),
        directed: bool = True,
        allows_self_loops: bool = False,
    ) -> Graph[N]:
        """Build a graph from (source, target) pairs and optional isolated nodes.

        Example:
            >>> graph = Graph.from_edges([("a", "b"), ("b", "c")])
            >>> sorted(graph.successors("a"))
            ['b']

        """
        builder: GraphBuilder[N] = GraphBuilder(directed=directed, allows_self_loops=allows_self_loops)
        for node in nodes:
            builder.add_node(node)
        for source, target in edges:
            builder.put_edge(source, target)
        return builder.build()

    @property
    def nodes(self) -> tuple[N, ...]:
        """All nodes, in insertion order."""
        return tuple(self._successors)

    @property
    def edges(self) -> tuple[tuple[N, N], ...]:
        """All edges as (source, target) pairs, grouped by source in node order."""
        if self.directed:
            return tuple((node, succ) for node, succs in self._successors.items() for succ in succs)
        seen: set[frozenset[N]] = set()
        edges: list[tuple[N, N]] = []
        for node, neighbours in self._successors.items():
            for other in neighbours:
                key = frozenset((node, other))
                if key not in seen:
                    seen.add(key)
                    edges.append((node, other))
        return tuple(edges)

    @property
    def successor_map(self) -> Mapping[N, tuple[N, ...]]:
        """Read-only, insertion-ordered adjacency (node to direct successors)."""
        return self._successors

    def _require(self, node: N) -> None:
        if node not in self._successors:
            msg = f"Node {node!r} is not an element of this graph"
            raise InvalidArgumentError(msg, node=node)

    def successors(self, node: N) -> frozenset[N]:
        """Get the nodes reachable from ``node`` by one edge."""
        self._require(node)
        return frozenset(self._successors[node])

    def predecessors(self, node: N) -> frozenset[N]:
        """Get the nodes from which ``node`` is reachable by one edge."""
        self._require(node)
        return frozenset(self._predecessors[node])

    def adjacent_nodes(self, node: N) -> frozenset[N]:
        """Get every node sharing an edge with ``node``, in either direction."""
        self._require(node)
        return frozenset(self._successors[node]) | frozenset(self._predecessors[node])

    def in_degree(self, node: N) -> int:
        """Number of distinct edges ending at ``node``."""
        self._require(node)
        return len(self._predecessors[node])

    def out_degree(self, node: N) -> int:
        """Number of distinct edges starting at ``node``."""
        self._require(node)
        return len(self._successors[node])

    def has_edge(self, source: N, target: N) -> bool:
        """Check whether the edge exists. Unknown endpoints simply give False."""
        return target in self._successors.get(source, ())

    def roots(self) -> frozenset[N]:
        """Get nodes with no predecessors."""
        return frozenset(n for n, preds in self._predecessors.items() if not preds)

    def leaves(self) -> frozenset[N]:
        """Get nodes with no successors."""
        return frozenset(n for n, succs in self._successors.items() if not succs)

    def subgraph(self, nodes: Iterable[N]) -> Graph[N]:
        """Create the subgraph induced by ``nodes``.

        Edges are kept only if both endpoints are in the node set.

        Raises:
            InvalidArgumentError: If one of ``nodes`` is not in this graph.

        """
        keep = frozenset(nodes)
        for node in keep:
            self._require(node)
        builder: GraphBuilder[N] = GraphBuilder(directed=self.directed, allows_self_loops=self.allows_self_loops)
        for node in self.nodes:
            if node in keep:
                builder.add_node(node)
        for source, target in self.edges:
            if source in keep and target in keep:
                builder.put_edge(source, target)
        return builder.build()

    def _edge_keys(self) -> frozenset[object]:
        if self.directed:
            return frozenset(self.edges)
        return frozenset(frozenset(edge) for edge in self.edges)

    def __eq__(self, other: object) -> bool:
        """Graphs are equal when directedness, nodes and edges match.

        Self-loop allowance and insertion order do not take part.
        """
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self.directed == other.directed
            and frozenset(self._successors) == frozenset(other._successors)
            and self._edge_keys() == other._edge_keys()
        )

    def __hash__(self) -> int:
        return hash((self.directed, frozenset(self._successors), self._edge_keys()))

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self._successors)

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph."""
        return node in self._successors

    def __iter__(self) -> Iterator[N]:
        return iter(self._successors)

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, allows_self_loops={self.allows_self_loops}, nodes={list(self.nodes)!r}, edges={list(self.edges)!r})"


class GraphBuilder[N: Hashable]:
    """Mutable accumulator of nodes and edges producing ``Graph`` snapshots.

    Adjacency is kept in dicts used as insertion-ordered sets, so adding a
    node or an edge twice is a no-op.
    """

    __slots__ = ("_predecessors", "_successors", "allows_self_loops", "directed")

    def __init__(self, *, directed: bool = True, allows_self_loops: bool = False) -> None:
        self.directed = directed
        self.allows_self_loops = allows_self_loops
        self._successors: dict[N, dict[N, None]] = {}
        self._predecessors: dict[N, dict[N, None]] = {}

    @classmethod
    def like(cls, graph: Graph[object]) -> GraphBuilder[N]:
        """Create an empty builder with the same directedness and self-loop allowance."""
        return cls(directed=graph.directed, allows_self_loops=graph.allows_self_loops)

    @classmethod
    def copy_of(cls, graph: Graph[N]) -> GraphBuilder[N]:
        """Create a builder pre-filled with the nodes and edges of ``graph``."""
        builder: GraphBuilder[N] = cls.like(graph)
        for node in graph.nodes:
            builder.add_node(node)
        for source, target in graph.edges:
            builder.put_edge(source, target)
        return builder

    def add_node(self, node: N) -> bool:
        """Add a node. Returns True if it was not already present."""
        _check_node(node)
        if node in self._successors:
            return False
        self._successors[node] = {}
        self._predecessors[node] = {}
        return True

    def put_edge(self, source: N, target: N) -> bool:
        """Add an edge, adding its endpoints as nodes if needed.

        Returns:
            True if the edge was not already present.

        Raises:
            InvalidArgumentError: If an endpoint is None, or if the edge is a
                self-loop and this builder disallows self-loops.

        """
        _check_node(source, "edge source")
        _check_node(target, "edge target")
        if source == target and not self.allows_self_loops:
            msg = f"Cannot add self-loop on node {source!r}: this graph does not allow self-loops"
            raise InvalidArgumentError(msg, node=source)
        self.add_node(source)
        self.add_node(target)
        if target in self._successors[source]:
            return False
        self._successors[source][target] = None
        self._predecessors[target][source] = None
        if not self.directed:
            self._successors[target][source] = None
            self._predecessors[source][target] = None
        return True

    def remove_edge(self, source: N, target: N) -> bool:
        """Remove an edge if present. Returns True if something was removed."""
        if target not in self._successors.get(source, {}):
            return False
        del self._successors[source][target]
        del self._predecessors[target][source]
        if not self.directed:
            self._successors[target].pop(source, None)
            self._predecessors[source].pop(target, None)
        return True

    def __contains__(self, node: object) -> bool:
        return node in self._successors

    def build(self) -> Graph[N]:
        """Snapshot the current state into an immutable ``Graph``."""
        graph: Graph[N] = Graph(
            directed=self.directed,
            allows_self_loops=self.allows_self_loops,
            _successors=MappingProxyType({n: tuple(succs) for n, succs in self._successors.items()}),
            _predecessors=MappingProxyType({n: tuple(preds) for n, preds in self._predecessors.items()}),
        )
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Built graph with %d nodes and %d edges", len(graph), len(graph.edges))
        return graph
