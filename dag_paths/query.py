"""
Query facade and batch orchestration.

A query with no waypoints is answered by the memoized recursive
counter; any waypoint switches to the constrained engine.
"""

import time
from typing import Iterable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from dag_paths.constants import MAX_PATH_COUNT
from dag_paths.constrained import solve_constrained
from dag_paths.graph_model import DependencyGraph
from dag_paths.path_counter import PathCounter
from dag_paths.path_types import NodeName, QueryResult
from dag_paths.waypoints import as_waypoint_set

Query = Tuple[NodeName, Sequence[NodeName]]


def count_query(
    graph: DependencyGraph,
    start: NodeName,
    waypoints: Optional[Sequence[NodeName]] = None,
    max_count: Optional[int] = MAX_PATH_COUNT,
) -> int:
    """
    Count paths from ``start`` to the sink that visit all ``waypoints``.

    Labels are validated before any evaluation starts.
    """
    waypoint_set = as_waypoint_set(waypoints).validate(graph)
    graph.index_of(start, "start")

    if not waypoint_set:
        return PathCounter(graph, max_count).count(start)
    return solve_constrained(graph, start, waypoint_set, max_count).count(start)


class PathCountAnalyzer:
    """
    Runs counting queries against one shared, read-only graph.

    Unconstrained counts are cached across queries, since the count of a
    node does not depend on which query reached it.
    """

    def __init__(
        self, graph: DependencyGraph, max_count: Optional[int] = MAX_PATH_COUNT
    ):
        self.graph = graph
        self.max_count = max_count
        self._counter = PathCounter(graph, max_count)

    def run_query(
        self,
        start: NodeName,
        waypoints: Optional[Sequence[NodeName]] = None,
        with_breakdown: bool = False,
    ) -> QueryResult:
        """
        Answer one query, timing the evaluation.

        With ``with_breakdown`` the result also carries the start node's
        path counts per visited-waypoint combination (constrained queries
        only).
        """
        waypoint_set = as_waypoint_set(waypoints).validate(self.graph)
        self.graph.index_of(start, "start")

        began = time.perf_counter()
        breakdown = None
        if waypoint_set:
            table = solve_constrained(self.graph, start, waypoint_set, self.max_count)
            count = table.count(start)
            if with_breakdown:
                breakdown = table.breakdown(start)
        else:
            count = self._counter.count(start)
        elapsed = time.perf_counter() - began

        return QueryResult(
            start=start,
            waypoints=waypoint_set.labels,
            count=count,
            elapsed=elapsed,
            breakdown=breakdown,
        )

    def run_batch(
        self,
        queries: Iterable[Query],
        with_breakdown: bool = False,
        progress: bool = False,
    ) -> List[QueryResult]:
        """Answer each ``(start, waypoints)`` query in order."""
        queries = list(queries)
        return [
            self.run_query(start, waypoints, with_breakdown)
            for start, waypoints in tqdm(
                queries, desc="Queries", unit="query", disable=not progress
            )
        ]
