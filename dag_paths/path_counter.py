"""
Unconstrained path counting from any node down to the sink.

The count for a node is the sum of the counts of its targets, with the
sink counting as exactly one path. Since that value depends on the node
alone, it is cached per arena index the first time it is computed,
which keeps reconverging ("diamond") subgraphs linear in the number of
edges.

A second, independent method based on powers of the adjacency matrix
is provided as a cross-check.
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from dag_paths.constants import MAX_PATH_COUNT
from dag_paths.errors import CyclicGraph, Overflow
from dag_paths.graph_model import DependencyGraph
from dag_paths.path_types import CountingComparison, NodeName

logger = logging.getLogger(__name__)


class PathCounter:
    """
    Memoizing start-to-sink path counter bound to one graph.

    The cache only ever holds final counts, so one counter can serve any
    number of queries against the same immutable graph.
    """

    def __init__(
        self, graph: DependencyGraph, max_count: Optional[int] = MAX_PATH_COUNT
    ):
        self.graph = graph
        self.max_count = max_count
        self._cache: List[Optional[int]] = [None] * len(graph)
        self._cache[graph.sink_index] = 1

    def count(self, start: NodeName) -> int:
        """Number of distinct paths from ``start`` to the sink."""
        return self._count_from(self.graph.index_of(start, "start"))

    def cached_nodes(self) -> int:
        return sum(1 for value in self._cache if value is not None)

    def _count_from(self, index: int) -> int:
        cache = self._cache
        if cache[index] is not None:
            return cache[index]

        graph = self.graph
        # Depth-first post-order with an explicit stack; ``visiting`` holds
        # the nodes of the current descent so a back edge means a cycle.
        stack: List[Tuple[int, object]] = [(index, iter(graph.target_indices(index)))]
        visiting = {index}

        while stack:
            node, children = stack[-1]
            for child in children:
                if cache[child] is not None:
                    continue
                if child in visiting:
                    raise CyclicGraph(self._cycle_labels(stack, child))
                visiting.add(child)
                stack.append((child, iter(graph.target_indices(child))))
                break
            else:
                stack.pop()
                visiting.discard(node)
                total = sum(cache[t] for t in graph.target_indices(node))
                if self.max_count is not None and total > self.max_count:
                    raise Overflow(graph.label_of(node), self.max_count)
                cache[node] = total

        logger.debug(
            "Counted %s paths from '%s' (%d nodes cached)",
            cache[index],
            graph.label_of(index),
            self.cached_nodes(),
        )
        return cache[index]

    def _cycle_labels(self, stack, repeated: int) -> List[NodeName]:
        descent = [node for node, _ in stack]
        cycle = descent[descent.index(repeated):] + [repeated]
        return [self.graph.label_of(i) for i in cycle]


def count_paths(
    graph: DependencyGraph,
    start: NodeName,
    max_count: Optional[int] = MAX_PATH_COUNT,
) -> int:
    """
    Count all paths from ``start`` to the sink, ignoring waypoints.

    Args:
        graph: The dependency graph
        start: Label of the node to count from
        max_count: Largest count allowed for any node, None for no bound

    Returns:
        Number of distinct paths; 1 when ``start`` is the sink

    Raises:
        UnknownLabel: if ``start`` is not in the graph
        CyclicGraph: if a cycle is reachable from ``start``
        Overflow: if some partial count exceeds ``max_count``
    """
    return PathCounter(graph, max_count).count(start)


def _build_adjacency_matrix(graph: DependencyGraph) -> np.ndarray:
    """
    Adjacency matrix with exact integer entries and without the sink's
    self-loop. Repeated edges count once per occurrence.
    """
    n = len(graph)
    matrix = np.zeros((n, n), dtype=object)
    for i in range(n):
        if i == graph.sink_index:
            continue
        for j in graph.target_indices(i):
            matrix[i, j] += 1
    return matrix


def count_paths_by_matrix(graph: DependencyGraph, start: NodeName) -> int:
    """
    Count paths to the sink by summing powers of the adjacency matrix.

    Uses the property that A^k[i, sink] is the number of walks of length
    k from node i to the sink. Without cycles A is nilpotent, so the sum
    stops after at most len(graph) steps.
    """
    start_idx = graph.index_of(start, "start")
    matrix = _build_adjacency_matrix(graph)

    reach = np.zeros(len(graph), dtype=object)
    reach[graph.sink_index] = 1
    total = reach.copy()

    for _ in range(len(graph)):
        reach = matrix.dot(reach)
        if not reach.any():
            return int(total[start_idx])
        total += reach

    looping = [graph.label_of(i) for i in np.nonzero(reach)[0]]
    raise CyclicGraph(
        looping, f"Cycle detected on walks to the sink through: {', '.join(looping)}"
    )


def compare_counting_methods(
    graph: DependencyGraph, start: NodeName
) -> CountingComparison:
    """Count paths from ``start`` with both methods."""
    return CountingComparison(
        start=start,
        recursive_count=count_paths(graph, start, max_count=None),
        matrix_count=count_paths_by_matrix(graph, start),
    )
