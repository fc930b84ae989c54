"""
Immutable dependency graph built from parsed node definitions.

Nodes are stored in an arena addressed by stable integer indices
(declaration order), with the forward and reverse adjacency computed
once at build time. Nothing exposed by this module mutates the graph
after construction.
"""

import logging
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from dag_paths.constants import DEFAULT_SINK
from dag_paths.errors import MalformedGraph, UnknownLabel
from dag_paths.path_types import Definitions, NodeName

logger = logging.getLogger(__name__)


class DependencyGraph:
    """
    Directed graph of named nodes with one designated sink.

    The sink carries a single self-loop that only marks it as terminal;
    traversals stop at the sink and never follow it. The self-loop is
    left out of the reverse adjacency.
    """

    __slots__ = ("_labels", "_index", "_targets", "_predecessors", "_sink_index")

    def __init__(
        self,
        labels: Tuple[NodeName, ...],
        targets: Tuple[Tuple[int, ...], ...],
        sink_index: int,
    ):
        self._labels = labels
        self._index = MappingProxyType({label: i for i, label in enumerate(labels)})
        self._targets = targets
        self._sink_index = sink_index

        predecessors: List[List[int]] = [[] for _ in labels]
        for source, destinations in enumerate(targets):
            if source == sink_index:
                continue
            for destination in destinations:
                predecessors[destination].append(source)
        self._predecessors = tuple(tuple(p) for p in predecessors)

    def __len__(self) -> int:
        return len(self._labels)

    def __iter__(self) -> Iterator[NodeName]:
        return iter(self._labels)

    def __contains__(self, label: object) -> bool:
        return label in self._index

    def __repr__(self) -> str:
        return (
            f"DependencyGraph(nodes={len(self)}, edges={self.edge_count}, "
            f"sink={self.sink!r})"
        )

    @property
    def sink(self) -> NodeName:
        return self._labels[self._sink_index]

    @property
    def sink_index(self) -> int:
        return self._sink_index

    @property
    def labels(self) -> Tuple[NodeName, ...]:
        return self._labels

    @property
    def edge_count(self) -> int:
        """Number of dependency edges, not counting the sink's self-loop."""
        return sum(
            len(t) for i, t in enumerate(self._targets) if i != self._sink_index
        )

    def index_of(self, label: NodeName, role: str = "node") -> int:
        """Arena index of ``label``, raising UnknownLabel if it is not defined."""
        try:
            return self._index[label]
        except KeyError:
            raise UnknownLabel(label, role) from None

    def label_of(self, index: int) -> NodeName:
        return self._labels[index]

    def target_indices(self, index: int) -> Tuple[int, ...]:
        return self._targets[index]

    def predecessor_indices(self, index: int) -> Tuple[int, ...]:
        return self._predecessors[index]

    def targets_of(self, label: NodeName) -> Tuple[NodeName, ...]:
        """Outgoing-edge targets of ``label`` in declaration order."""
        return tuple(self._labels[i] for i in self._targets[self.index_of(label)])

    def predecessors_of(self, label: NodeName) -> Tuple[NodeName, ...]:
        """Nodes that list ``label`` as one of their targets."""
        return tuple(
            self._labels[i] for i in self._predecessors[self.index_of(label)]
        )

    def as_mapping(self) -> Mapping[NodeName, Tuple[NodeName, ...]]:
        """Read-only ``label -> targets`` view of the graph."""
        return MappingProxyType(
            {
                label: tuple(self._labels[i] for i in targets)
                for label, targets in zip(self._labels, self._targets)
            }
        )

    def definitions(self) -> List[Tuple[NodeName, List[NodeName]]]:
        """Definitions that rebuild an equal graph with ``build_graph``."""
        return [(label, list(targets)) for label, targets in self.as_mapping().items()]


def _check_sink_edges(sink: NodeName, declared: Tuple[NodeName, ...]) -> None:
    if any(target != sink for target in declared) or len(declared) > 1:
        raise MalformedGraph(
            f"Sink '{sink}' may only declare its own self-loop, "
            f"got: {', '.join(declared)}"
        )


def build_graph(
    definitions: Definitions, sink: NodeName = DEFAULT_SINK
) -> DependencyGraph:
    """
    Build an immutable graph from ``(label, [target, ...])`` definitions.

    Args:
        definitions: Ordered node definitions; edge order is preserved
        sink: Label of the terminal node, which must itself be defined

    Returns:
        The validated DependencyGraph

    Raises:
        MalformedGraph: on duplicate labels, a missing sink, targets that
            are never defined, or a sink declaring edges to other nodes
    """
    labels: List[NodeName] = []
    declared: Dict[NodeName, Tuple[NodeName, ...]] = {}

    for label, targets in definitions:
        if label in declared:
            raise MalformedGraph(f"Duplicate definition of node '{label}'")
        labels.append(label)
        declared[label] = tuple(targets)

    if sink not in declared:
        raise MalformedGraph(f"Sink node '{sink}' is not defined")
    _check_sink_edges(sink, declared[sink])

    index = {label: i for i, label in enumerate(labels)}
    dangling = sorted(
        {target for targets in declared.values() for target in targets} - index.keys()
    )
    if dangling:
        raise MalformedGraph(f"Undefined edge targets: {', '.join(dangling)}")

    sink_index = index[sink]
    targets: List[Tuple[int, ...]] = []
    for i, label in enumerate(labels):
        if i == sink_index:
            targets.append((sink_index,))
        else:
            targets.append(tuple(index[t] for t in declared[label]))

    graph = DependencyGraph(tuple(labels), tuple(targets), sink_index)
    logger.debug("Built %r", graph)
    return graph


def graph_from_mapping(
    mapping: Mapping[NodeName, List[NodeName]], sink: Optional[NodeName] = None
) -> DependencyGraph:
    """Convenience wrapper for dict literals such as ``{"a": ["out"], "out": []}``."""
    return build_graph(list(mapping.items()), sink or DEFAULT_SINK)
