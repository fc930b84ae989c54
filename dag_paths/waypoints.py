"""
Ordered waypoint sets and the signature bitsets built over them.
"""

from typing import Iterable, Iterator, Optional, Sequence, Tuple

from dag_paths.constants import MAX_WAYPOINTS
from dag_paths.errors import InvalidQuery
from dag_paths.graph_model import DependencyGraph
from dag_paths.path_types import NodeName, Signature


class WaypointSet:
    """
    Waypoint labels, each assigned a fixed bit position by its order.

    Bit ``i`` of a signature is set once the path has passed through the
    ``i``-th waypoint.
    """

    __slots__ = ("_labels", "_bits")

    def __init__(self, labels: Iterable[NodeName] = ()):
        labels = tuple(labels)
        duplicates = sorted({label for label in labels if labels.count(label) > 1})
        if duplicates:
            raise InvalidQuery(f"Duplicate waypoints: {', '.join(duplicates)}")
        if len(labels) > MAX_WAYPOINTS:
            raise InvalidQuery(
                f"At most {MAX_WAYPOINTS} waypoints are supported, got {len(labels)}"
            )
        self._labels = labels
        self._bits = {label: 1 << i for i, label in enumerate(labels)}

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[NodeName]:
        return iter(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._bits

    def __repr__(self) -> str:
        return f"WaypointSet({list(self._labels)!r})"

    @property
    def labels(self) -> Tuple[NodeName, ...]:
        return self._labels

    @property
    def full_signature(self) -> Signature:
        """Signature with every waypoint visited."""
        return (1 << len(self._labels)) - 1

    def bit(self, label: NodeName) -> Signature:
        """Bit for ``label``, or 0 if it is not a waypoint."""
        return self._bits.get(label, 0)

    def visited(self, signature: Signature) -> Tuple[NodeName, ...]:
        """Waypoints recorded in ``signature``, in waypoint order."""
        return tuple(label for label in self._labels if signature & self._bits[label])

    def validate(self, graph: DependencyGraph) -> "WaypointSet":
        for label in self._labels:
            graph.index_of(label, "waypoint")
        return self


def as_waypoint_set(waypoints: Optional[Sequence[NodeName]]) -> WaypointSet:
    if isinstance(waypoints, WaypointSet):
        return waypoints
    return WaypointSet(waypoints or ())
