"""Exceptions raised by the graph toolkit."""

from collections.abc import Hashable, Iterable


class GraphError(Exception):
    """Base class for errors raised by digraphs."""


class InvalidArgumentError(GraphError, ValueError):
    """Raised when a caller breaks the contract of an operation.

    Attributes:
        node: The offending node, when one can be identified.
        callback: Name of the callback that produced the bad value, if any.

    """

    def __init__(self, msg: str, *, node: object = None, callback: str | None = None) -> None:
        self.node = node
        self.callback = callback
        super().__init__(msg)


class GraphCycleError(GraphError):
    """Raised when a topological order is requested for a graph with a cycle."""

    def __init__(self, remaining: Iterable[Hashable]) -> None:
        self.remaining = frozenset(remaining)
        super().__init__(f"Cycle detected in graph: {len(self.remaining)} node(s) never became ready")
