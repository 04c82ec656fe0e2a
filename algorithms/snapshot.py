"""
snapshot.py — Iteration Snapshot
================================
The trace generator yields one Snapshot per settled node.  A Snapshot is a
frozen-in-time picture of the label table right after that node was
settled:

    • which nodes are settled so far (in settling order)
    • every node's best known cost and path from the start
    • which labels improved during this iteration
    • a one-line explanation of what happened

Design decisions:
  - Label and Snapshot are frozen dataclasses holding tuples only.  The
    generator is the only writer; the cursor / API are pure readers.
  - LabelTable replaces a Label instead of mutating it, so building a
    Snapshot is a shallow tuple copy and older Snapshots can never see
    later updates.
  - An unreached cost is `math.inf` internally and `None` on the wire;
    it is never rendered as a number.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

from graph.errors import NotFoundError

UNREACHED = math.inf


@dataclass(frozen=True)
class Label:
    """
    Attributes:
        name : Node this label describes.
        cost : Best known total weight from the start (UNREACHED if none yet).
        path : Node names from the start to `name` along that route.
    """

    name: str
    cost: float            = UNREACHED
    path: Tuple[str, ...]  = ()

    @property
    def reached(self) -> bool:
        return self.cost != UNREACHED

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "cost": int(self.cost) if self.reached else None,
            "path": list(self.path),
        }


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        iteration     : 1-based index; snapshot i follows the i-th settle.
        start         : Name of the start node of the run.
        current       : Node settled at this iteration.
        settled       : Names settled so far, in settling order.
        labels        : Every node's Label, in graph order.
        improved      : Names whose label got cheaper during this iteration.
        edges_relaxed : Running count of relaxation attempts.
        explanation   : Human-readable summary of the iteration.
    """

    iteration:     int
    start:         str
    current:       str
    settled:       Tuple[str, ...]    = ()
    labels:        Tuple[Label, ...]  = ()
    improved:      Tuple[str, ...]    = ()
    explanation:   str                = ""
    edges_relaxed: int                = 0

    def label(self, name: str) -> Label:
        for lbl in self.labels:
            if lbl.name == name:
                return lbl
        raise NotFoundError(name)

    def cost_of(self, name: str) -> float:
        return self.label(name).cost

    def destinations(self) -> List[Label]:
        """Labels shown as destinations: everything except the start."""
        return [lbl for lbl in self.labels if lbl.name != self.start]

    def to_dict(self) -> dict:
        return {
            "iteration":   self.iteration,
            "current":     self.current,
            "settled":     list(self.settled),
            "labels":      [lbl.to_dict() for lbl in self.destinations()],
            "improved":    list(self.improved),
            "explanation": self.explanation,
        }


# ---------------------------------------------------------------------------
# LabelTable — the accumulator a single run owns exclusively
# ---------------------------------------------------------------------------
class LabelTable:
    """
    Mutable scratch-pad the trace generator threads through its loop.

    Usage inside a trace generator:
        table = LabelTable(graph.node_names(), start)
        table.settle(start)
        table.improve("3", 1, ("1", "3"))
        yield table.build(explanation="...")
    """

    def __init__(self, names: List[str], start: str):
        self.start:    str              = start
        self._labels:  Dict[str, Label] = {n: Label(n) for n in names}
        self._settled: List[str]        = []
        self._done:    Set[str]         = set()
        self._improved: List[str]       = []
        self.edges_relaxed: int         = 0

    # -- queries --
    def __getitem__(self, name: str) -> Label:
        return self._labels[name]

    def __len__(self) -> int:
        return len(self._labels)

    def is_settled(self, name: str) -> bool:
        return name in self._done

    @property
    def settled(self) -> Tuple[str, ...]:
        return tuple(self._settled)

    @property
    def improved(self) -> Tuple[str, ...]:
        return tuple(self._improved)

    def unsettled(self) -> List[Label]:
        return [lbl for lbl in self._labels.values() if lbl.name not in self._done]

    # -- updates --
    def settle(self, name: str) -> None:
        self._settled.append(name)
        self._done.add(name)
        self._improved = []

    def improve(self, name: str, cost: int, path: Tuple[str, ...]) -> None:
        self._labels[name] = Label(name=name, cost=cost, path=path)
        self._improved.append(name)

    def build(self, explanation: str = "") -> Snapshot:
        return Snapshot(
            iteration=len(self._settled),
            start=self.start,
            current=self._settled[-1],
            settled=tuple(self._settled),
            labels=tuple(self._labels.values()),
            improved=tuple(self._improved),
            explanation=explanation,
            edges_relaxed=self.edges_relaxed,
        )
