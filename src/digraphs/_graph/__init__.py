"""Graph module providing the graph value type and its algorithms.

This module contains:
- Graph[N]: A generic, immutable simple graph
- GraphBuilder[N]: The mutable accumulator that produces Graph snapshots
- transitive_closure: Non-reflexive transitive closure
- TopologicalOrderIterator and friends: Kahn's algorithm, lazy and cycle-safe
"""

from ._algorithms import (
    TopologicalOrderIterator,
    TopologicallySortedNodes,
    has_cycle,
    reachable_nodes,
    topological_order,
    topological_sort,
    topologically_sorted_nodes,
    transitive_closure,
)
from ._graph import Graph, GraphBuilder

__all__ = [
    "Graph",
    "GraphBuilder",
    "TopologicalOrderIterator",
    "TopologicallySortedNodes",
    "has_cycle",
    "reachable_nodes",
    "topological_order",
    "topological_sort",
    "topologically_sorted_nodes",
    "transitive_closure",
]
