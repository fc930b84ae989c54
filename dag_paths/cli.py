#!/usr/bin/env python3
"""
Count paths to the sink of a dependency graph read from a definitions file.

Examples:
    dag-paths input.txt --start you
    dag-paths input.txt --start svr --waypoint fft --waypoint dac
"""

import argparse
import logging
import sys
import traceback
from typing import List, Optional

from dag_paths.constants import DEFAULT_SINK, MAX_PATH_COUNT
from dag_paths.display import StatisticsDisplay, create_summary_report
from dag_paths.errors import PathCountError
from dag_paths.graph_model import build_graph
from dag_paths.parsing import read_definitions
from dag_paths.path_counter import compare_counting_methods
from dag_paths.query import PathCountAnalyzer


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Count paths from start nodes to the sink of a dependency graph"
    )
    parser.add_argument("input", help="File of 'label: target target ...' lines")
    parser.add_argument(
        "--start",
        action="append",
        required=True,
        help="Node to count paths from (repeat for several queries)",
    )
    parser.add_argument(
        "--waypoint",
        action="append",
        default=[],
        help="Node every counted path must visit (repeatable)",
    )
    parser.add_argument(
        "--sink", default=DEFAULT_SINK, help=f"Sink label (default: {DEFAULT_SINK})"
    )
    parser.add_argument(
        "--max-count",
        type=int,
        default=MAX_PATH_COUNT,
        help="Fail when any count exceeds this bound (default: 2^64 - 1)",
    )
    parser.add_argument(
        "--no-limit", action="store_true", help="Do not bound path counts"
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help=(
            "Cross-check unconstrained counts with the adjacency matrix method; "
            "fails on any cycle that reaches the sink, even one the start never touches"
        ),
    )
    parser.add_argument(
        "--output", help="Write a summary report to this file"
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Show graph summary and waypoint breakdown"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level for engine diagnostics",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Show stack traces for errors",
    )
    return parser


def run(args: argparse.Namespace) -> int:
    definitions = read_definitions(args.input, args.sink)
    graph = build_graph(definitions, args.sink)
    max_count = None if args.no_limit else args.max_count

    if args.verbose:
        StatisticsDisplay.display_graph_summary(graph)

    analyzer = PathCountAnalyzer(graph, max_count=max_count)
    queries = [(start, args.waypoint) for start in args.start]
    results = analyzer.run_batch(
        queries, with_breakdown=args.verbose, progress=args.verbose and len(queries) > 1
    )

    StatisticsDisplay.display_results(results)
    if args.verbose:
        for result in results:
            StatisticsDisplay.display_breakdown(result)

    status = 0
    if args.verify:
        comparisons = [compare_counting_methods(graph, start) for start in args.start]
        StatisticsDisplay.display_counting_comparison(comparisons)
        if not all(comparison.matches for comparison in comparisons):
            status = 2

    if args.output:
        with open(args.output, "w", encoding="utf8") as f:
            f.write(create_summary_report(results) + "\n")
        print(f"\nSaved summary to {args.output}")

    return status


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(message)s")

    try:
        return run(args)
    except (PathCountError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.debug:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
