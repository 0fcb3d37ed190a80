"""Directed graph construction and analysis toolkit."""

__all__ = [
    "Graph",
    "GraphBuilder",
    "GraphCycleError",
    "GraphError",
    "InvalidArgumentError",
    "TopologicalOrderIterator",
    "TopologicallySortedNodes",
    "has_cycle",
    "reachability_graph",
    "reachable_nodes",
    "sequence_graph",
    "topological_order",
    "topological_sort",
    "topologically_sorted_nodes",
    "transform",
    "transformed",
    "transitive_closure",
]

from ._builders import reachability_graph, sequence_graph
from ._errors import GraphCycleError, GraphError, InvalidArgumentError
from ._graph import (
    Graph,
    GraphBuilder,
    TopologicalOrderIterator,
    TopologicallySortedNodes,
    has_cycle,
    reachable_nodes,
    topological_order,
    topological_sort,
    topologically_sorted_nodes,
    transitive_closure,
)
from ._mapping import transform, transformed
