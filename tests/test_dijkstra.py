import dataclasses
import heapq
import math

import pytest

from algorithms.dijkstra import _select_next, dijkstra
from algorithms.snapshot import UNREACHED, LabelTable
from graph import EmptyGraphError, ExhaustedFrontierError, Graph, NotFoundError


def reference_distances(graph, start):
    """Plain heap Dijkstra, used as an oracle for generated graphs."""
    dist = {start: 0}
    pq = [(0, start)]
    while pq:
        d, name = heapq.heappop(pq)
        if d > dist[name]:
            continue
        for e in graph.lookup(name).edges:
            nd = d + e.weight
            if nd < dist.get(e.to, math.inf):
                dist[e.to] = nd
                heapq.heappush(pq, (nd, e.to))
    return dist


# ---------------------------------------------------------------------------
# Worked example
# ---------------------------------------------------------------------------
def test_example_settle_order_costs_and_path(example_graph):
    snapshots = list(dijkstra(example_graph, "1"))
    last = snapshots[-1]

    assert [s.iteration for s in snapshots] == [1, 2, 3, 4]
    assert last.settled == ("1", "3", "2", "4")
    assert {lbl.name: lbl.cost for lbl in last.destinations()} == {"2": 2, "3": 1, "4": 7}
    assert last.label("4").path == ("1", "3", "2", "4")


def test_example_first_snapshot_is_start_seeding(example_graph):
    first = next(dijkstra(example_graph, "1"))

    assert first.current == "1"
    assert first.settled == ("1",)
    assert first.label("2").cost == 3 and first.label("2").path == ("1", "2")
    assert first.label("3").cost == 1 and first.label("3").path == ("1", "3")
    assert first.label("4").cost == UNREACHED and first.label("4").path == ()
    assert set(first.improved) == {"2", "3"}
    assert first.explanation.startswith("Start at '1'")


def test_start_label_is_never_a_destination(example_graph):
    for snap in dijkstra(example_graph, "1"):
        assert snap.label("1").cost == UNREACHED
        assert snap.label("1").path == ()
        assert "1" not in [lbl.name for lbl in snap.destinations()]
        assert "1" not in [lbl["name"] for lbl in snap.to_dict()["labels"]]


def test_earlier_snapshots_do_not_see_later_updates(example_graph):
    snapshots = list(dijkstra(example_graph, "1"))

    assert snapshots[0].label("2").cost == 3
    assert snapshots[1].label("2").cost == 2
    assert snapshots[1].label("4").path == ("1", "3", "4")
    assert snapshots[2].label("4").path == ("1", "3", "2", "4")


def test_snapshots_are_frozen(example_graph):
    snap = next(dijkstra(example_graph, "1"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.iteration = 7
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.labels[0].cost = 0


def test_unreached_cost_serialises_as_none(example_graph):
    first = next(dijkstra(example_graph, "1"))
    labels = {lbl["name"]: lbl for lbl in first.to_dict()["labels"]}
    assert labels["4"] == {"name": "4", "cost": None, "path": []}
    assert labels["3"] == {"name": "3", "cost": 1, "path": ["1", "3"]}


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------
def test_unknown_start_fails_before_iterating(example_graph):
    with pytest.raises(NotFoundError):
        dijkstra(example_graph, "9")


def test_empty_graph_fails_before_iterating():
    with pytest.raises(EmptyGraphError):
        dijkstra(Graph(), "1")


def test_snapshot_label_lookup_unknown(example_graph):
    first = next(dijkstra(example_graph, "1"))
    with pytest.raises(NotFoundError):
        first.label("9")


def test_selection_with_nothing_left_is_a_programming_error():
    table = LabelTable(["1"], "1")
    table.settle("1")
    with pytest.raises(ExhaustedFrontierError):
        _select_next(table)


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------
def test_unreachable_nodes_stop_the_run(graph_builder):
    g = graph_builder({"1": {"2": 4}, "3": {"1": 1}}, names=["1", "2", "3"])
    snapshots = list(dijkstra(g, "1"))

    assert len(snapshots) == 2
    assert snapshots[-1].settled == ("1", "2")
    assert snapshots[-1].label("3").cost == UNREACHED
    assert snapshots[-1].label("3").path == ()


def test_single_node_graph_yields_one_snapshot():
    g = Graph.generate(1)
    snapshots = list(dijkstra(g, "1"))
    assert len(snapshots) == 1
    assert snapshots[0].settled == ("1",)
    assert snapshots[0].destinations() == []


def test_equal_costs_settle_later_label_first(graph_builder):
    g = graph_builder({"1": {"2": 1, "3": 1}})
    snapshots = list(dijkstra(g, "1"))
    assert snapshots[-1].settled == ("1", "3", "2")


def test_edge_back_to_start_leaves_start_label_alone(graph_builder):
    g = graph_builder({"1": {"2": 1}, "2": {"1": 1}})
    last = list(dijkstra(g, "1"))[-1]
    assert last.label("1").cost == UNREACHED
    assert last.label("2").cost == 1


def test_trace_from_non_root_start(example_graph):
    last = list(dijkstra(example_graph, "3"))[-1]
    assert last.settled == ("3", "2", "4")
    assert last.label("4").path == ("3", "2", "4")
    assert last.label("4").cost == 6
    assert last.label("1").cost == UNREACHED


# ---------------------------------------------------------------------------
# Properties over generated graphs
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("symmetric", [False, True])
def test_trace_properties_on_generated_graphs(seed, symmetric):
    size = 3 + seed * 3
    g = Graph.generate(size, symmetric=symmetric, seed=seed)
    start = str(1 + seed % size)
    snapshots = list(dijkstra(g, start))
    last = snapshots[-1]
    expected = reference_distances(g, start)

    # settled order is a permutation of the reachable nodes
    assert len(snapshots) <= size
    assert sorted(last.settled, key=int) == sorted(expected, key=int)
    assert last.settled[0] == start

    for lbl in last.destinations():
        if lbl.name not in expected:
            assert lbl.cost == UNREACHED and lbl.path == ()
            continue
        assert lbl.cost == expected[lbl.name]
        assert lbl.path[0] == start and lbl.path[-1] == lbl.name
        walked = sum(
            g.lookup(a).edge_to(b).weight for a, b in zip(lbl.path, lbl.path[1:])
        )
        assert walked == lbl.cost

    # costs never increase; once settled they never change
    for prev, cur in zip(snapshots, snapshots[1:]):
        assert cur.iteration == prev.iteration + 1
        assert cur.settled[:-1] == prev.settled
        for name in g.node_names():
            assert cur.cost_of(name) <= prev.cost_of(name)
            if name in prev.settled:
                assert cur.label(name) == prev.label(name)
