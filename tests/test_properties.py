"""
Property-based testing of both counters using hypothesis.

Random acyclic graphs are small enough that every path can be
enumerated, which gives an independent oracle for each count.
"""

import pytest
from hypothesis import given, settings, strategies as st

from dag_paths import (
    UnreachableOrCyclic,
    build_graph,
    count_constrained_paths,
    count_paths,
    count_paths_by_matrix,
    count_query,
)
from tests.path_enumeration import count_paths_through, enumerate_paths


@st.composite
def dag_strategy(draw, max_nodes=9):
    """Definitions of an acyclic graph; edges only point to later nodes or the sink."""
    size = draw(st.integers(min_value=1, max_value=max_nodes))
    labels = [f"n{i}" for i in range(size)]

    definitions = []
    for i, label in enumerate(labels):
        candidates = labels[i + 1 :] + ["out"]
        targets = draw(st.lists(st.sampled_from(candidates), max_size=3, unique=True))
        definitions.append((label, targets))
    definitions.append(("out", ["out"]))
    return definitions


def _waypoints(data, definitions):
    labels = [label for label, _ in definitions]
    return data.draw(st.lists(st.sampled_from(labels), max_size=3, unique=True))


class TestUnconstrainedProperties:
    @given(dag_strategy())
    @settings(max_examples=200, deadline=None)
    def test_sink_has_one_path(self, definitions):
        assert count_paths(build_graph(definitions, "out"), "out") == 1

    @given(dag_strategy())
    @settings(max_examples=200, deadline=None)
    def test_recursive_law(self, definitions):
        graph = build_graph(definitions, "out")

        for label, targets in definitions:
            if label == "out":
                continue
            assert count_paths(graph, label) == sum(count_paths(graph, t) for t in targets)

    @given(dag_strategy())
    @settings(max_examples=200, deadline=None)
    def test_matches_enumeration(self, definitions):
        graph = build_graph(definitions, "out")
        mapping = dict(definitions)

        for label in mapping:
            assert count_paths(graph, label) == len(enumerate_paths(mapping, label))

    @given(dag_strategy())
    @settings(max_examples=100, deadline=None)
    def test_matches_matrix_method(self, definitions):
        graph = build_graph(definitions, "out")

        for label, _ in definitions:
            assert count_paths(graph, label) == count_paths_by_matrix(graph, label)

    @given(dag_strategy(), st.randoms(use_true_random=False))
    @settings(max_examples=100, deadline=None)
    def test_declaration_order_is_irrelevant(self, definitions, random):
        shuffled = list(definitions)
        random.shuffle(shuffled)
        graph = build_graph(definitions, "out")
        other = build_graph(shuffled, "out")

        for label, _ in definitions:
            assert count_paths(graph, label) == count_paths(other, label)


class TestConstrainedProperties:
    @given(dag_strategy(), st.data())
    @settings(max_examples=200, deadline=None)
    def test_matches_enumeration(self, definitions, data):
        graph = build_graph(definitions, "out")
        mapping = dict(definitions)
        start = data.draw(st.sampled_from([label for label, _ in definitions]))
        waypoints = _waypoints(data, definitions)

        if count_paths(graph, start) == 0:
            with pytest.raises(UnreachableOrCyclic):
                count_constrained_paths(graph, start, waypoints)
            return

        expected = count_paths_through(mapping, start, waypoints)
        assert count_constrained_paths(graph, start, waypoints) == expected

    @given(dag_strategy(), st.data())
    @settings(max_examples=200, deadline=None)
    def test_bounded_by_unconstrained(self, definitions, data):
        graph = build_graph(definitions, "out")
        start = data.draw(st.sampled_from([label for label, _ in definitions]))
        waypoints = _waypoints(data, definitions)
        total = count_paths(graph, start)

        if total > 0:
            assert count_query(graph, start, waypoints) <= total

    @given(dag_strategy(), st.data())
    @settings(max_examples=100, deadline=None)
    def test_empty_waypoints_reduce_to_unconstrained(self, definitions, data):
        graph = build_graph(definitions, "out")
        start = data.draw(st.sampled_from([label for label, _ in definitions]))

        assert count_query(graph, start, []) == count_paths(graph, start)
        if count_paths(graph, start) > 0:
            assert count_constrained_paths(graph, start, []) == count_paths(graph, start)

    @given(dag_strategy(), st.data())
    @settings(max_examples=100, deadline=None)
    def test_repeated_queries_agree(self, definitions, data):
        graph = build_graph(definitions, "out")
        start = data.draw(st.sampled_from([label for label, _ in definitions]))
        waypoints = _waypoints(data, definitions)
        if count_paths(graph, start) == 0:
            return

        first = count_query(graph, start, waypoints)
        assert count_query(graph, start, waypoints) == first
        assert count_query(graph, start, list(reversed(waypoints))) == first

    @given(dag_strategy(), st.data(), st.randoms(use_true_random=False))
    @settings(max_examples=200, deadline=None)
    def test_declaration_order_is_irrelevant(self, definitions, data, random):
        shuffled = list(definitions)
        random.shuffle(shuffled)
        start = data.draw(st.sampled_from([label for label, _ in definitions]))
        waypoints = _waypoints(data, definitions)

        def outcome(defs):
            try:
                return count_constrained_paths(build_graph(defs, "out"), start, waypoints)
            except UnreachableOrCyclic as e:
                return type(e)

        assert outcome(definitions) == outcome(shuffled)
