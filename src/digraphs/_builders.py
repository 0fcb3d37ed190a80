"""Functions building graphs from reachability relations and from sequences."""

import logging
from collections import deque
from collections.abc import Callable, Hashable, Iterable, Mapping
from itertools import pairwise

from ._errors import InvalidArgumentError
from ._graph import Graph, GraphBuilder

logger = logging.getLogger(__name__)

type NeighboursFunction[N] = Callable[[N], Iterable[N] | None] | Mapping[N, Iterable[N]]


def _as_function[N](neighbours: NeighboursFunction[N] | None, name: str) -> Callable[[N], Iterable[N] | None]:
    """Normalize a neighbours argument to a callable.

    A mapping is read with ``.get``, so nodes it does not mention have no
    neighbours.
    """
    if neighbours is None:
        msg = f"The {name} function must not be None"
        raise InvalidArgumentError(msg, callback=name)
    if isinstance(neighbours, Mapping):
        return lambda node: neighbours.get(node, ())
    if not callable(neighbours):
        msg = f"The {name} function must be callable or a mapping, got {type(neighbours).__name__}"
        raise InvalidArgumentError(msg, callback=name)
    return neighbours


def _neighbours_of[N](function: Callable[[N], Iterable[N] | None], name: str, node: N) -> tuple[N, ...]:
    """Call a neighbours function and check what it returned."""
    result = function(node)
    if result is None:
        msg = f"The {name} function returned None for node {node!r}"
        raise InvalidArgumentError(msg, node=node, callback=name)
    try:
        neighbours = tuple(result)
    except TypeError as e:
        msg = f"The {name} function returned a non-iterable {type(result).__name__} for node {node!r}"
        raise InvalidArgumentError(msg, node=node, callback=name) from e
    if any(neighbour is None for neighbour in neighbours):
        msg = f"The {name} function returned a None element for node {node!r}"
        raise InvalidArgumentError(msg, node=node, callback=name)
    return neighbours


def reachability_graph[N: Hashable](
    roots: Iterable[N],
    successors: NeighboursFunction[N],
    predecessors: NeighboursFunction[N],
) -> Graph[N]:
    """Build the graph corresponding to the given roots and reachability relations.

    The returned graph is directed, allows self-loops, and contains as nodes:

    - the given roots *R*, union
    - the transitive closure of the successors function on *R*, union
    - the transitive closure of the predecessors function on *R*;

    and as edges all pairs *(a, b)* such that *b* is a direct successor of *a*
    or *a* is a direct predecessor of *b*.

    Nodes are expanded breadth-first, each exactly once, successors before
    predecessors.

    Args:
        roots: The initial nodes.
        successors: Callable returning the direct successors of a node, or a
            mapping from node to successors (missing nodes have none).
        predecessors: Same, for direct predecessors.

    Returns:
        A new Graph.

    Raises:
        InvalidArgumentError: If an argument or a root is None, or if a
            function returns None or an iterable containing None.

    Example:
        >>> graph = reachability_graph({"a"}, {"a": ["b"]}, {})
        >>> graph.edges
        (('a', 'b'),)

    """
    if roots is None:
        msg = "roots must not be None"
        raise InvalidArgumentError(msg)
    successors_of = _as_function(successors, "successors")
    predecessors_of = _as_function(predecessors, "predecessors")

    initial = tuple(roots)
    if any(root is None for root in initial):
        msg = "roots must not contain None"
        raise InvalidArgumentError(msg)

    to_consider = deque(initial)
    seen = set(initial)
    builder: GraphBuilder[N] = GraphBuilder(directed=True, allows_self_loops=True)

    while to_consider:
        current = to_consider.popleft()
        builder.add_node(current)
        for successor in _neighbours_of(successors_of, "successors", current):
            builder.put_edge(current, successor)
            if successor not in seen:
                to_consider.append(successor)
                seen.add(successor)
        for predecessor in _neighbours_of(predecessors_of, "predecessors", current):
            builder.put_edge(predecessor, current)
            if predecessor not in seen:
                to_consider.append(predecessor)
                seen.add(predecessor)

    logger.debug("Expanded %d root(s) into %d reachable node(s)", len(set(initial)), len(seen))
    return builder.build()


def sequence_graph[N: Hashable](elements: Iterable[N]) -> Graph[N]:
    """Build the "has as next element" graph of a sequence.

    For example, the sequence *(a, b, c)* gives nodes *{a, b, c}* and edges
    *{(a, b), (b, c)}*, and *(a, b, a, b)* gives nodes *{a, b}* and edges
    *{(a, b), (b, a)}*.

    The returned graph is directed and allows self-loops; it has one iff the
    sequence holds the same element at consecutive positions. Its nodes are
    the distinct elements, so a singleton sequence gives one node and no edge.

    Raises:
        InvalidArgumentError: If an element is None.

    """
    if elements is None:
        msg = "elements must not be None"
        raise InvalidArgumentError(msg)
    items = list(elements)
    builder: GraphBuilder[N] = GraphBuilder(directed=True, allows_self_loops=True)
    for item in items:
        builder.add_node(item)
    for first, second in pairwise(items):
        builder.put_edge(first, second)
    return builder.build()
