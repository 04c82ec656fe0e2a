"""
trace.py — Trace Engine & Run Summary
======================================
Runs a trace algorithm to completion in one uninterrupted pass, keeps
every Snapshot, then computes the summary the API reports.

Usage:
    engine = TraceEngine()
    snapshots = engine.run(graph, start="1")   # exhausts the generator
    engine.summary                             # TraceSummary
    cursor = engine.cursor()                   # replay, no recomputation
    engine.export()                            # JSON-ready dict

Errors from the algorithm (EmptyGraphError, NotFoundError,
ExhaustedFrontierError) propagate unchanged, and a failed run leaves the
previous result untouched.
"""

import logging
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional

from graph import Graph
from algorithms import get_algorithm, AlgoInfo
from algorithms.snapshot import Label, Snapshot
from engine.cursor import StepCallback, TraceCursor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Summary dataclass
# ---------------------------------------------------------------------------
@dataclass
class TraceSummary:
    algo_key:      str       = ""
    start:         str       = ""
    iterations:    int       = 0
    settled:       List[str] = field(default_factory=list)
    unreachable:   List[str] = field(default_factory=list)
    edges_relaxed: int       = 0
    wall_time_ms:  float     = 0.0


# ---------------------------------------------------------------------------
# TraceEngine
# ---------------------------------------------------------------------------
class TraceEngine:
    """
    Attributes:
        snapshots : Full list of Snapshots from the last successful run.
        summary   : TraceSummary for that run (None before any run).
    """

    def __init__(self, algo_key: str = "dijkstra"):
        info = get_algorithm(algo_key)
        if info is None:
            raise ValueError(f"Unknown algorithm: {algo_key}")

        self.snapshots: List[Snapshot]         = []
        self.summary:   Optional[TraceSummary] = None
        self._algo_info: AlgoInfo              = info

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    def run(self, graph: Graph, start: str) -> List[Snapshot]:
        """Exhaust the algorithm over `graph` from `start`; return every snapshot."""
        start = str(start)
        started = time.monotonic()

        snapshots = list(self._algo_info.fn(graph, start))

        wall_ms = (time.monotonic() - started) * 1000
        self.snapshots = snapshots
        self.summary = self._summarise(start, wall_ms)

        logger.info(
            "Trace from %s: %d iterations, %d unreachable, %d edges relaxed",
            start, self.summary.iterations, len(self.summary.unreachable),
            self.summary.edges_relaxed,
        )
        return list(snapshots)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------
    def final_label(self, name: str) -> Label:
        """Label of `name` in the last snapshot (its shortest path, if reached)."""
        if not self.snapshots:
            raise RuntimeError("Call run() first.")
        return self.snapshots[-1].label(str(name))

    def cursor(self, on_step: Optional[StepCallback] = None) -> TraceCursor:
        return TraceCursor(self.snapshots, on_step=on_step)

    # ------------------------------------------------------------------
    # Export (serialisable)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key":  self._algo_info.key,
            "summary":   asdict(self.summary) if self.summary else {},
            "snapshots": [s.to_dict() for s in self.snapshots],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _summarise(self, start: str, wall_ms: float) -> TraceSummary:
        last = self.snapshots[-1]
        settled = list(last.settled)
        done = set(settled)
        return TraceSummary(
            algo_key=self._algo_info.key,
            start=start,
            iterations=len(self.snapshots),
            settled=settled,
            unreachable=[lbl.name for lbl in last.labels if lbl.name not in done],
            edges_relaxed=last.edges_relaxed,
            wall_time_ms=round(wall_ms, 2),
        )
