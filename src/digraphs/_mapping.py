"""Transformation of a graph through a node mapping."""

import logging
from collections.abc import Callable, Hashable, Mapping

from ._errors import InvalidArgumentError
from ._graph import Graph, GraphBuilder

logger = logging.getLogger(__name__)

_ABSENT = object()


def transform[E: Hashable, F: Hashable](graph: Graph[E], mapping: Callable[[E], F | None]) -> Graph[F]:
    """Return a transformation of a graph that uses a given mapping function.

    Each node *e* becomes ``mapping(e)`` and each edge *(a, b)* becomes the
    edge *(mapping(a), mapping(b))*. The function is called once per node
    and once per edge endpoint; whatever it raises propagates unchanged.

    The result has the same directedness and self-loop allowance as
    ``graph``. It has the same topology iff the mapping is injective on the
    nodes; otherwise distinct nodes merge and, when ``graph`` allows
    self-loops, new loops may appear.

    For example, the graph with nodes *{a, b, c, d}* and edges
    *{(a, c), (b, d)}* under *{a: a, b: b, c: e, d: e}* gives nodes
    *{a, b, e}* and edges *{(a, e), (b, e)}*.

    Raises:
        InvalidArgumentError: If the mapping gives None for a node, or if
            ``graph`` disallows self-loops and some edge has both endpoints
            mapped to the same value.

    """
    builder: GraphBuilder[F] = GraphBuilder.like(graph)

    def image(node: E) -> F:
        target = mapping(node)
        if target is None:
            msg = f"Node {node!r} is mapped to None"
            raise InvalidArgumentError(msg, node=node, callback="mapping")
        return target

    for node in graph.nodes:
        builder.add_node(image(node))

    for source, target in graph.edges:
        new_source = image(source)
        new_target = image(target)
        if new_source == new_target and not graph.allows_self_loops:
            msg = (
                f"Mapping is not injective: edge ({source!r}, {target!r}) collapses onto "
                f"{new_source!r}, but this graph does not allow self-loops"
            )
            raise InvalidArgumentError(msg, node=source, callback="mapping")
        builder.put_edge(new_source, new_target)

    result = builder.build()
    if len(result) != len(graph):
        logger.debug("Mapping merged %d node(s) into %d", len(graph), len(result))
    return result


def transformed[E: Hashable, F: Hashable](graph: Graph[E], mapping: Mapping[E, F]) -> Graph[F]:
    """Return a transformation of a graph that uses a given mapping.

    Same as ``transform`` with a lookup in ``mapping`` as function.

    Raises:
        InvalidArgumentError: If some node of ``graph`` is absent from
            ``mapping`` or associated to None, or if ``graph`` disallows
            self-loops and the mapping makes an edge collapse onto one node.

    """

    def lookup(node: E) -> F | None:
        target = mapping.get(node, _ABSENT)
        if target is _ABSENT:
            msg = f"Node {node!r} is absent from the mapping"
            raise InvalidArgumentError(msg, node=node, callback="mapping")
        return target

    return transform(graph, lookup)
