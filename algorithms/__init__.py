"""
algorithms/__init__.py — Algorithm Registry
=============================================
Every trace algorithm the engine knows about.

    from algorithms import REGISTRY, get_algorithm

REGISTRY is a dict:
    {
        "dijkstra": AlgoInfo(key, label, fn, pseudocode, …),
    }

An algorithm is a function `fn(graph, start)` that validates its inputs and
returns a generator of Snapshots, one per settled node.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from algorithms.dijkstra import dijkstra as _dijkstra, PSEUDOCODE as _dij_pc
from algorithms.snapshot import Label, Snapshot, LabelTable, UNREACHED


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:             str                    # registry key, e.g. "dijkstra"
    label:           str                    # human label
    fn:              Callable               # (graph, start) -> Generator[Snapshot]
    pseudocode:      List[str]
    complexity_time: str = ""
    description:     str = ""


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[str, AlgoInfo] = {

    "dijkstra": AlgoInfo(
        key="dijkstra", label="Dijkstra's Algorithm", fn=_dijkstra, pseudocode=_dij_pc,
        complexity_time="O(V²)",
        description="Settles the cheapest unsettled node each iteration. Positive weights only.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: str) -> Optional[AlgoInfo]:
    """Return AlgoInfo by key, or None."""
    return REGISTRY.get(key)


def list_algorithms() -> List[AlgoInfo]:
    return list(REGISTRY.values())


__all__ = [
    "AlgoInfo",
    "REGISTRY",
    "get_algorithm",
    "list_algorithms",
    "Label",
    "Snapshot",
    "LabelTable",
    "UNREACHED",
]
