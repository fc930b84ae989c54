# Label of the terminal node in the puzzle input
DEFAULT_SINK = "out"

# Counts must fit an unsigned 64-bit integer
MAX_PATH_COUNT = 2**64 - 1

# Signatures are bitsets over the waypoints, one table entry per subset
MAX_WAYPOINTS = 16

# Definition line format: "label: target target ..."
LABEL_SEPARATOR = ":"
