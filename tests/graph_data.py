"""
Small graphs shared by the tests.
"""

from dag_paths import build_graph

# start -> a -> c -> out and start -> b -> c -> out
DIAMOND = [
    ("start", ["a", "b"]),
    ("a", ["c"]),
    ("b", ["c"]),
    ("c", ["out"]),
    ("out", ["out"]),
]

# The sample input from the puzzle: 8 paths from svr, 2 of them through fft and dac
SAMPLE_LINES = [
    "svr: aaa bbb",
    "aaa: fft",
    "fft: ccc",
    "bbb: tty",
    "tty: ccc",
    "ccc: ddd eee",
    "ddd: hub",
    "hub: fff",
    "eee: dac",
    "dac: fff",
    "fff: ggg hhh",
    "ggg: out",
    "hhh: out",
]

# Two nodes depending on each other, neither reaching the sink
TWO_CYCLE = [
    ("x", ["y"]),
    ("y", ["x"]),
    ("out", ["out"]),
]


def diamond_chain(length: int):
    """j0 -> (a0 | b0) -> j1 -> ... -> j<length> -> out, with 2**length paths."""
    definitions = []
    for i in range(length):
        definitions.append((f"j{i}", [f"a{i}", f"b{i}"]))
        definitions.append((f"a{i}", [f"j{i + 1}"]))
        definitions.append((f"b{i}", [f"j{i + 1}"]))
    definitions.append((f"j{length}", ["out"]))
    definitions.append(("out", ["out"]))
    return build_graph(definitions, "out")
