"""
config.py — Tunable Constants
==============================
Module-level knobs shared by the generator, the trace engine and the API.
Everything else (size, symmetry, start / end node) is passed in as plain
values at call time.
"""

# children created per frontier node during tree construction, and the
# minimum out-degree the degree-repair pass aims for
FAN_OUT = 2

# edge weights are drawn uniformly from [1, WEIGHT_SCALE]
WEIGHT_SCALE = 10

DEFAULT_GRAPH_SIZE = 6

# when True every generated edge also gets a reverse edge
ADD_RETURN_EDGE = False

DEFAULT_START = "1"

# upper bound on random picks per node during degree repair
REPAIR_ATTEMPTS = 64

# server-side workspaces kept by the API; the least recently saved is
# evicted once the cap is reached
MAX_WORKSPACES = 32
