"""
Display and formatting utilities for counting results.

This module handles all presentation concerns, keeping them separate
from the counting logic.
"""

from typing import List, Sequence, Tuple

from dag_paths.graph_model import DependencyGraph
from dag_paths.path_types import CountingComparison, NodeName, QueryResult


class ResultFormatter:
    """Responsible for formatting query results."""

    @staticmethod
    def format_query(result: QueryResult) -> str:
        """Format the query part of a result, e.g. ``svr -> out via fft, dac``."""
        if result.waypoints:
            return f"{result.start} via {', '.join(result.waypoints)}"
        return result.start

    @staticmethod
    def format_result(result: QueryResult, show_timing: bool = True) -> str:
        line = f"{ResultFormatter.format_query(result)}: {result.count:,} paths"
        if show_timing:
            line += f" ({result.elapsed * 1000:.3f} ms)"
        return line

    @staticmethod
    def format_signature(visited: Tuple[NodeName, ...]) -> str:
        return "{" + ", ".join(visited) + "}" if visited else "{}"


class StatisticsDisplay:
    """Responsible for displaying results in a readable format."""

    @staticmethod
    def display_header(title: str, width: int = 70) -> None:
        """Display a formatted header."""
        print(f"\n{title}")
        print("=" * width)

    @staticmethod
    def display_graph_summary(graph: DependencyGraph) -> None:
        StatisticsDisplay.display_header("GRAPH")
        print(f"  Nodes: {len(graph):,}")
        print(f"  Edges: {graph.edge_count:,}")
        print(f"  Sink:  {graph.sink}")

    @staticmethod
    def display_results(results: Sequence[QueryResult], show_timing: bool = True) -> None:
        StatisticsDisplay.display_header("PATH COUNTS")
        for result in results:
            print(f"  {ResultFormatter.format_result(result, show_timing)}")

    @staticmethod
    def display_breakdown(result: QueryResult) -> None:
        """Display path counts per visited-waypoint combination."""
        if not result.breakdown:
            return

        print(f"\n{ResultFormatter.format_query(result)} by waypoints visited:")
        total = sum(result.breakdown.values())
        for visited, count in sorted(
            result.breakdown.items(), key=lambda x: (len(x[0]), x[0])
        ):
            percentage = (count / total) * 100 if total else 0.0
            bar = "█" * int(percentage / 5)
            print(
                f"  {ResultFormatter.format_signature(visited)}: "
                f"{count:,} ({percentage:.1f}%) {bar}"
            )

    @staticmethod
    def display_counting_comparison(comparisons: Sequence[CountingComparison]) -> None:
        """Display comparison between counting methods."""
        StatisticsDisplay.display_header("COUNTING METHOD COMPARISON")

        for comparison in comparisons:
            status = "✓ VALID" if comparison.matches else "✗ MISMATCH"
            print(f"\n  {comparison.start}:")
            print(f"    Recursive:        {comparison.recursive_count:,}")
            print(f"    Adjacency Matrix: {comparison.matrix_count:,}")
            print(f"    Status: {status}")


def create_summary_report(results: Sequence[QueryResult]) -> str:
    """
    Create a summary report as a string.

    Useful for saving results to a file.
    """
    lines: List[str] = []

    lines.append("PATH COUNT SUMMARY")
    lines.append("=" * 70)

    for result in results:
        lines.append(ResultFormatter.format_result(result, show_timing=False))

    total_time = sum(result.elapsed for result in results)
    lines.append(f"\nQueries: {len(results)}")
    lines.append(f"Total time: {total_time * 1000:.3f} ms")

    return "\n".join(lines)

