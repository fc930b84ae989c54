from typing import Dict, List, NamedTuple, Optional, Sequence, Tuple


# Type aliases for clarity
NodeName = str
Definition = Tuple[NodeName, Sequence[NodeName]]
Definitions = Sequence[Definition]
Signature = int


class PathState(NamedTuple):
    """All partial paths reaching a node with the same waypoint signature."""

    signature: Signature
    count: int


Solution = List[PathState]


class QueryResult(NamedTuple):
    """Result of a single counting query."""

    start: NodeName
    waypoints: Tuple[NodeName, ...]
    count: int
    elapsed: float = 0.0
    breakdown: Optional[Dict[Tuple[NodeName, ...], int]] = None


class CountingComparison(NamedTuple):
    """Counts for the same node obtained by two independent methods."""

    start: NodeName
    recursive_count: int
    matrix_count: int

    @property
    def matches(self) -> bool:
        return self.recursive_count == self.matrix_count
