"""
Parsing of the ``label: target target ...`` node definition format.
"""

from pathlib import Path
from typing import Iterable, List, Tuple, Union

from dag_paths.constants import DEFAULT_SINK, LABEL_SEPARATOR
from dag_paths.errors import MalformedGraph
from dag_paths.path_types import NodeName


def parse_line(line: str, line_number: int = 0) -> Tuple[NodeName, List[NodeName]]:
    """Split one definition line into its label and target labels."""
    parts = line.split(LABEL_SEPARATOR)
    if len(parts) != 2:
        raise MalformedGraph(f"Line {line_number}: invalid definition '{line.strip()}'")

    label = parts[0].strip()
    if not label:
        raise MalformedGraph(f"Line {line_number}: missing node label")

    return label, parts[1].split()


def parse_definitions(
    lines: Iterable[str], sink: NodeName = DEFAULT_SINK
) -> List[Tuple[NodeName, List[NodeName]]]:
    """
    Parse definition lines, skipping blank ones.

    Puzzle inputs never define the sink; if no line defines it, the
    sink's self-loop definition is appended so the result can be
    passed straight to ``build_graph``.
    """
    definitions = [
        parse_line(line, number)
        for number, line in enumerate(lines, start=1)
        if line.strip()
    ]

    if all(label != sink for label, _ in definitions):
        definitions.append((sink, [sink]))

    return definitions


def read_definitions(
    path: Union[str, Path], sink: NodeName = DEFAULT_SINK
) -> List[Tuple[NodeName, List[NodeName]]]:
    """Read and parse a definitions file."""
    with open(path, "r", encoding="utf8") as f:
        return parse_definitions(f.read().splitlines(), sink)
