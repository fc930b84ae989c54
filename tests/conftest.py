import pytest

from dag_paths import build_graph, parse_definitions
from tests.graph_data import DIAMOND, SAMPLE_LINES


@pytest.fixture
def diamond():
    return build_graph(DIAMOND, "out")


@pytest.fixture
def sample_lines():
    return list(SAMPLE_LINES)


@pytest.fixture
def sample_graph():
    return build_graph(parse_definitions(SAMPLE_LINES), "out")
