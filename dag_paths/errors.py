"""
Error types raised by the path counting engine.

Every detected inconsistency is a hard failure: a silently wrong count
is worse than an explicit error.
"""

from typing import Iterable, Optional


class PathCountError(Exception):
    """Base class for all engine errors."""


class MalformedGraph(PathCountError, ValueError):
    """The definitions do not describe a valid graph."""


class InvalidQuery(PathCountError, ValueError):
    """The query cannot be evaluated against the graph."""


class UnknownLabel(InvalidQuery):
    """A query references a label that is not defined in the graph."""

    def __init__(self, label: str, role: str = "node"):
        super().__init__(f"Unknown {role} label '{label}'")
        self.label = label
        self.role = role


class EvaluationError(PathCountError, RuntimeError):
    """Evaluation could not reach a final answer."""


class CyclicGraph(EvaluationError):
    """A cycle is reachable from the start node."""

    def __init__(self, cycle: Iterable[str], message: Optional[str] = None):
        self.cycle = list(cycle)
        super().__init__(message or f"Cycle detected: {' -> '.join(self.cycle)}")


class UnreachableOrCyclic(EvaluationError):
    """The constrained engine ran out of work before resolving the start node."""

    def __init__(self, start: str, unresolved: Iterable[str] = ()):
        self.start = start
        self.unresolved = sorted(unresolved)
        message = f"Node '{start}' cannot be resolved: it does not reach the sink or lies on a cycle"
        if self.unresolved:
            message += f" (stuck on {', '.join(self.unresolved)})"
        super().__init__(message)


class Overflow(PathCountError, OverflowError):
    """A path count exceeded the configured bound."""

    def __init__(self, label: str, limit: int):
        super().__init__(f"Path count at node '{label}' exceeds {limit:,}")
        self.label = label
        self.limit = limit
