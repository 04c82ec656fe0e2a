"""
dijkstra.py — Label-Setting Shortest-Path Trace
================================================
Generator-based Dijkstra over the label table.

Yields one Snapshot per settled node:
  1. Iteration 1 settles the start node and relaxes its edges
  2. Each later iteration settles the cheapest unsettled label and
     relaxes that node's edges
  3. The run ends once every node is settled, or when no unsettled
     label has a finite cost (the rest are unreachable)

The start node is reachable from itself at cost 0 for relaxation, but its
own Label stays unreached / empty: it is never shown as a destination.

Selection is a linear scan over the unsettled labels in graph order.  On
equal costs the label that comes later in graph order wins (the same pick
as sorting by descending cost and popping from the end).

Correctness note: all weights are positive, so a settled label is final.
Edges into settled nodes are skipped, which also keeps the start's label
untouched.
"""

import logging
from typing import Generator, List, Optional

from graph import Graph, Node, EmptyGraphError, ExhaustedFrontierError
from algorithms.snapshot import Label, LabelTable, Snapshot

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start):",                      # 0
    "    L ← {v: (∞, []) for v in V}",                  # 1
    "    T ← {}",                                       # 2
    "    node ← start",                                 # 3
    "    while node is not None:",                      # 4
    "        T.add(node)",                              # 5
    "        for (to, w) in edges(node):",              # 6
    "            if to in T: continue",                 # 7
    "            cost ← L[node].cost + w",              # 8
    "            if cost < L[to].cost:",                # 9
    "                L[to] ← (cost, L[node].path + to)", # 10
    "        snapshot(T, L)",                           # 11
    "        node ← argmin cost over L \\ T, if finite", # 12
]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph, start: str) -> Generator[Snapshot, None, None]:
    """
    Validate the inputs, then return the snapshot generator.

    Raises EmptyGraphError / NotFoundError immediately, before any
    iteration runs.
    """
    if graph.node_count() == 0:
        raise EmptyGraphError()
    origin = graph.lookup(start)
    return _trace(graph, origin)


def _trace(graph: Graph, origin: Node) -> Generator[Snapshot, None, None]:
    table = LabelTable(graph.node_names(), origin.name)
    current: Optional[Node] = origin

    while current is not None:
        table.settle(current.name)
        _relax(table, current)

        snapshot = table.build(explanation=_explain(table, current))
        logger.debug(
            "Iteration %d: settled %s, improved %s",
            snapshot.iteration, current.name, list(snapshot.improved),
        )
        yield snapshot

        if len(table.settled) == len(table):
            return

        nxt = _select_next(table)
        current = graph.lookup(nxt.name) if nxt is not None else None


# ---------------------------------------------------------------------------
# Steps
# ---------------------------------------------------------------------------
def _relax(table: LabelTable, node: Node) -> None:
    if node.name == table.start:
        base, base_path = 0, (table.start,)
    else:
        lbl = table[node.name]
        base, base_path = lbl.cost, lbl.path

    for edge in node.edges:
        if table.is_settled(edge.to):
            continue
        table.edges_relaxed += 1
        cost = base + edge.weight
        if cost < table[edge.to].cost:
            table.improve(edge.to, cost, base_path + (edge.to,))


def _select_next(table: LabelTable) -> Optional[Label]:
    candidates = table.unsettled()
    if not candidates:
        raise ExhaustedFrontierError(
            f"No unsettled label left after {len(table.settled)} of {len(table)} iterations"
        )

    best: Optional[Label] = None
    for lbl in candidates:
        if not lbl.reached:
            continue
        # `<=` so a later label wins a tie
        if best is None or lbl.cost <= best.cost:
            best = lbl
    return best


def _explain(table: LabelTable, node: Node) -> str:
    if node.name == table.start:
        text = f"Start at '{node.name}'."
    else:
        lbl = table[node.name]
        text = f"Settle '{node.name}' at cost {lbl.cost} via {'–'.join(lbl.path)}."

    if table.improved:
        text += f" Improved: {', '.join(table.improved)}."
    return text
