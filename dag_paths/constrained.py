"""
Constrained path counting: paths from a start node to the sink that pass
through every waypoint.

Evaluation runs bottom-up from the sink over the reverse adjacency. Each
node's solution lists one PathState per distinct waypoint signature, so
its size is bounded by 2^|waypoints| however many paths it stands for.
A node is resolved once all of its targets are; nodes whose targets are
not ready yet go back to the end of the worklist.
"""

import logging
from collections import deque
from enum import Enum
from typing import Deque, Dict, List, Optional, Sequence, Set, Tuple

from dag_paths.constants import MAX_PATH_COUNT
from dag_paths.errors import Overflow, UnreachableOrCyclic
from dag_paths.graph_model import DependencyGraph
from dag_paths.path_types import NodeName, PathState
from dag_paths.waypoints import WaypointSet, as_waypoint_set

logger = logging.getLogger(__name__)


class NodeStatus(Enum):
    UNRESOLVED = "unresolved"
    PENDING = "pending"
    RESOLVED = "resolved"


class SolutionTable:
    """
    Per-node solutions of one constrained evaluation.

    An unresolved node has no solution at all, which keeps it distinct
    from a resolved node with zero qualifying paths (an empty solution).
    Each entry is written exactly once.
    """

    def __init__(self, graph: DependencyGraph, waypoints: WaypointSet):
        self.graph = graph
        self.waypoints = waypoints
        self._status = [NodeStatus.UNRESOLVED] * len(graph)
        self._solutions: List[Optional[Tuple[PathState, ...]]] = [None] * len(graph)
        self.resolved_count = 0

    def status(self, label: NodeName) -> NodeStatus:
        return self._status[self.graph.index_of(label)]

    def is_resolved(self, label: NodeName) -> bool:
        return self.status(label) is NodeStatus.RESOLVED

    def solution(self, label: NodeName) -> Optional[Tuple[PathState, ...]]:
        """Final PathStates of ``label``, or None while it is unresolved."""
        return self._solutions[self.graph.index_of(label)]

    def count(self, label: NodeName) -> int:
        """Paths from ``label`` to the sink that visit every waypoint."""
        solution = self.solution(label)
        if solution is None:
            raise UnreachableOrCyclic(label)
        full = self.waypoints.full_signature
        return sum(state.count for state in solution if state.signature == full)

    def breakdown(self, label: NodeName) -> Dict[Tuple[NodeName, ...], int]:
        """Path counts of ``label`` keyed by the waypoints each group visits."""
        solution = self.solution(label)
        if solution is None:
            raise UnreachableOrCyclic(label)
        return {self.waypoints.visited(s.signature): s.count for s in solution}

    def _is_resolved(self, index: int) -> bool:
        return self._status[index] is NodeStatus.RESOLVED

    def _mark_pending(self, index: int) -> None:
        if self._status[index] is NodeStatus.UNRESOLVED:
            self._status[index] = NodeStatus.PENDING

    def _resolve(self, index: int, solution: Tuple[PathState, ...]) -> None:
        if self._is_resolved(index):
            raise RuntimeError(
                f"Node '{self.graph.label_of(index)}' is already resolved"
            )
        self._solutions[index] = solution
        self._status[index] = NodeStatus.RESOLVED
        self.resolved_count += 1

    def _combine_targets(
        self, index: int, max_count: Optional[int]
    ) -> Tuple[PathState, ...]:
        """States of all resolved targets of ``index``, tagged with its waypoint bit."""
        label = self.graph.label_of(index)
        bit = self.waypoints.bit(label)

        states = [
            PathState(state.signature | bit, state.count)
            for target in self.graph.target_indices(index)
            for state in self._solutions[target]
        ]
        return merge_states(states, label, max_count)


def merge_states(
    states: Sequence[PathState], label: NodeName = "", max_count: Optional[int] = None
) -> Tuple[PathState, ...]:
    """Sum the counts of states with equal signatures, keeping first-seen order."""
    merged: Dict[int, int] = {}
    for state in states:
        merged[state.signature] = merged.get(state.signature, 0) + state.count

    if max_count is not None and any(count > max_count for count in merged.values()):
        raise Overflow(label, max_count)

    return tuple(PathState(signature, count) for signature, count in merged.items())


def solve_constrained(
    graph: DependencyGraph,
    start: NodeName,
    waypoints: Sequence[NodeName],
    max_count: Optional[int] = MAX_PATH_COUNT,
) -> SolutionTable:
    """
    Resolve nodes from the sink upwards until ``start`` is resolved.

    Args:
        graph: The dependency graph
        start: Label of the node whose solution is wanted
        waypoints: Labels that qualifying paths must visit
        max_count: Largest count allowed in any PathState, None for no bound

    Returns:
        The SolutionTable, with ``start`` resolved

    Raises:
        UnknownLabel: if ``start`` or a waypoint is not in the graph
        InvalidQuery: on duplicate waypoints
        UnreachableOrCyclic: if ``start`` does not reach the sink or
            depends on a cycle
        Overflow: if a merged count exceeds ``max_count``
    """
    waypoints = as_waypoint_set(waypoints).validate(graph)
    start_idx = graph.index_of(start, "start")
    sink = graph.sink_index

    table = SolutionTable(graph, waypoints)
    # A path ends at the sink, so a sink waypoint is visited from the start
    table._resolve(sink, (PathState(waypoints.bit(graph.sink), 1),))
    if start_idx == sink:
        return table

    worklist: Deque[int] = deque([sink])
    queued: Set[int] = {sink}
    stalled = 0
    retries = 0

    def enqueue(index: int) -> None:
        worklist.append(index)
        queued.add(index)
        table._mark_pending(index)

    while worklist:
        node = worklist.popleft()
        queued.discard(node)

        if not table._is_resolved(node):
            waiting = [t for t in graph.target_indices(node) if not table._is_resolved(t)]
            if waiting:
                new_work = [t for t in waiting if t not in queued]
                for target in new_work:
                    enqueue(target)
                enqueue(node)
                retries += 1
                stalled = 0 if new_work else stalled + 1
                # Every queued node has been retried since the last change
                if stalled >= len(worklist):
                    raise UnreachableOrCyclic(
                        start, (graph.label_of(i) for i in worklist)
                    )
                continue

            table._resolve(node, table._combine_targets(node, max_count))
            stalled = 0
            if node == start_idx:
                # No state at all means no path from start reaches the sink
                if not table.solution(start):
                    raise UnreachableOrCyclic(start)
                logger.debug(
                    "Resolved '%s' after %d resolutions and %d retries",
                    start,
                    table.resolved_count,
                    retries,
                )
                return table

        for predecessor in graph.predecessor_indices(node):
            if predecessor not in queued and predecessor != sink:
                enqueue(predecessor)

    raise UnreachableOrCyclic(start)


def count_constrained_paths(
    graph: DependencyGraph,
    start: NodeName,
    waypoints: Sequence[NodeName],
    max_count: Optional[int] = MAX_PATH_COUNT,
) -> int:
    """Number of paths from ``start`` to the sink visiting every waypoint."""
    return solve_constrained(graph, start, waypoints, max_count).count(start)
