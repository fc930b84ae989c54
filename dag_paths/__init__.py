"""
Dependency Graph Path Counting

Counts the paths from a node of a directed dependency graph down to its
sink, optionally only those passing through a set of waypoint nodes.
"""

from .path_types import (
    NodeName,
    Definition,
    Signature,
    PathState,
    QueryResult,
    CountingComparison,
)

from .errors import (
    PathCountError,
    MalformedGraph,
    InvalidQuery,
    UnknownLabel,
    EvaluationError,
    CyclicGraph,
    UnreachableOrCyclic,
    Overflow,
)

from .graph_model import DependencyGraph, build_graph, graph_from_mapping

from .parsing import parse_definitions, read_definitions

from .path_counter import (
    PathCounter,
    count_paths,
    count_paths_by_matrix,
    compare_counting_methods,
)

from .waypoints import WaypointSet

from .constrained import (
    NodeStatus,
    SolutionTable,
    merge_states,
    solve_constrained,
    count_constrained_paths,
)

from .query import count_query, PathCountAnalyzer

__version__ = "1.0.0"

__all__ = [
    # Types
    "NodeName",
    "Definition",
    "Signature",
    "PathState",
    "QueryResult",
    "CountingComparison",
    # Errors
    "PathCountError",
    "MalformedGraph",
    "InvalidQuery",
    "UnknownLabel",
    "EvaluationError",
    "CyclicGraph",
    "UnreachableOrCyclic",
    "Overflow",
    # Graph
    "DependencyGraph",
    "build_graph",
    "graph_from_mapping",
    "parse_definitions",
    "read_definitions",
    # Counting
    "PathCounter",
    "count_paths",
    "count_paths_by_matrix",
    "compare_counting_methods",
    "WaypointSet",
    "NodeStatus",
    "SolutionTable",
    "merge_states",
    "solve_constrained",
    "count_constrained_paths",
    # High-level
    "count_query",
    "PathCountAnalyzer",
]
