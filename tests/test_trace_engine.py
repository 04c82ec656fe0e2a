import logging

import pytest

from engine import TraceEngine
from graph import EmptyGraphError, Graph, NotFoundError


def test_run_returns_every_snapshot(example_graph):
    engine = TraceEngine()
    snapshots = engine.run(example_graph, "1")

    assert len(snapshots) == 4
    assert snapshots == engine.snapshots
    assert engine.summary.iterations == 4
    assert engine.summary.settled == ["1", "3", "2", "4"]
    assert engine.summary.unreachable == []
    # 1→2, 1→3, 3→2, 3→4, 2→4
    assert engine.summary.edges_relaxed == 5
    assert engine.summary.start == "1"


def test_final_label_gives_shortest_path(example_graph):
    engine = TraceEngine()
    engine.run(example_graph, 1)

    lbl = engine.final_label("4")
    assert lbl.cost == 7
    assert lbl.path == ("1", "3", "2", "4")


def test_final_label_before_run():
    with pytest.raises(RuntimeError):
        TraceEngine().final_label("1")


def test_unknown_algorithm():
    with pytest.raises(ValueError):
        TraceEngine("bogus")


def test_errors_propagate_and_keep_previous_run(example_graph):
    engine = TraceEngine()
    engine.run(example_graph, "1")

    with pytest.raises(NotFoundError):
        engine.run(example_graph, "9")
    with pytest.raises(EmptyGraphError):
        engine.run(Graph(), "1")

    assert engine.summary.start == "1"
    assert len(engine.snapshots) == 4


def test_unreachable_listed_in_summary(graph_builder):
    g = graph_builder({"1": {"2": 2}}, names=["1", "2", "3"])
    engine = TraceEngine()
    engine.run(g, "1")
    assert engine.summary.unreachable == ["3"]
    assert engine.final_label("3").reached is False


def test_cursor_replays_recorded_snapshots(example_graph):
    engine = TraceEngine()
    engine.run(example_graph, "1")

    cursor = engine.cursor()
    assert cursor.snapshots == tuple(engine.snapshots)
    cursor.advance()
    assert cursor.current is engine.snapshots[0]


def test_independent_runs_do_not_alias(example_graph):
    a, b = TraceEngine(), TraceEngine()
    a.run(example_graph, "1")
    b.run(example_graph, "3")

    assert a.snapshots[0].labels is not b.snapshots[0].labels
    assert a.final_label("4").cost == 7
    assert b.final_label("4").cost == 6


def test_export_is_json_ready(example_graph):
    engine = TraceEngine()
    engine.run(example_graph, "1")
    data = engine.export()

    assert data["algo_key"] == "dijkstra"
    assert data["summary"]["iterations"] == 4
    assert len(data["snapshots"]) == 4
    first = data["snapshots"][0]
    assert first["settled"] == ["1"]
    assert {"name": "4", "cost": None, "path": []} in first["labels"]


def test_run_logs_summary(example_graph, caplog):
    caplog.set_level(logging.INFO, logger="engine.trace")
    TraceEngine().run(example_graph, "1")
    assert "Trace from 1: 4 iterations" in caplog.text
