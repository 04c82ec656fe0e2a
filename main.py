"""
main.py — Shortest-Path Trace Flask API
========================================
The JSON API an external renderer talks to.  It only adapts the core:
graph generation, one trace run, and cursor stepping.  Drawing the graph
and the label table is the client's job.

Routes:
  GET  /api/algorithms            – registered algorithms + pseudocode
  POST /api/graph/generate        – generate a new graph (discards the old one)
  GET  /api/graph                 – nodes + weighted edges of the current graph
  GET  /api/graph/nodes/<name>    – resolve one node by name
  POST /api/run                   – run the trace from a start node
  POST /api/step/next             – reveal the next snapshot
  POST /api/step/prev             – hide the current snapshot
  GET  /api/state                 – cursor position + end-node label
  GET  /api/trace                 – full exported trace

State management:
  Each browser session maps to one server-side Workspace held in
  app.config["WORKSPACES"] (in-memory; lost on restart).  The Flask
  session cookie only carries the workspace key.  At most
  app.config["MAX_WORKSPACES"] are kept; saving past the cap evicts the
  least recently saved one.  A Workspace holds:
    • graph
    • engine   – the TraceEngine of the last run
    • cursor   – TraceCursor over that run's snapshots
    • start / end
"""

import logging
import os
import secrets
import uuid
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, session

from algorithms import list_algorithms
from config import ADD_RETURN_EDGE, DEFAULT_GRAPH_SIZE, DEFAULT_START, MAX_WORKSPACES
from graph import Graph, GraphError, InvalidOptionError, InvalidSizeError
from engine import TraceCursor, TraceEngine
from logging_config import configure_logging

configure_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = os.getenv("TRACE_SECRET_KEY") or secrets.token_hex(32)
app.config.setdefault("WORKSPACES", OrderedDict())
app.config.setdefault("MAX_WORKSPACES", MAX_WORKSPACES)


# ---------------------------------------------------------------------------
# Workspace Helpers
# ---------------------------------------------------------------------------
@dataclass
class Workspace:
    graph:  Graph
    start:  str                   = DEFAULT_START
    end:    Optional[str]         = None
    engine: Optional[TraceEngine] = None
    cursor: Optional[TraceCursor] = None


def get_workspace() -> Optional[Workspace]:
    key = session.get("workspace")
    if key is None:
        return None
    return app.config["WORKSPACES"].get(key)


def save_workspace(ws: Workspace) -> None:
    key = session.get("workspace") or uuid.uuid4().hex
    session["workspace"] = key

    store = app.config["WORKSPACES"]
    store[key] = ws
    store.move_to_end(key)
    while len(store) > app.config["MAX_WORKSPACES"]:
        evicted, _ = store.popitem(last=False)
        logger.info("Evicted workspace %s", evicted)


def get_state(ws: Workspace) -> Dict[str, Any]:
    """Cursor position and the end node's label at the current step."""
    cursor = ws.cursor
    state: Dict[str, Any] = {
        "start":         ws.start,
        "end":           ws.end,
        "step":          cursor.step if cursor else 0,
        "total_steps":   cursor.total if cursor else 0,
        "can_advance":   cursor.can_advance() if cursor else False,
        "can_retreat":   cursor.can_retreat() if cursor else False,
        "newly_settled": cursor.newly_settled if cursor else None,
        "state":         cursor.state.value if cursor else "idle",
        "end_label":     None,
    }
    if cursor and cursor.current and ws.end in ws.graph:
        state["end_label"] = cursor.current.label(ws.end).to_dict()
    return state


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidSizeError(value) from None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise InvalidSizeError(value) from None


def _as_bool(name: str, value: Any) -> bool:
    """JSON booleans, or the strings "true" / "false" in any case."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise InvalidOptionError(name, value)


def _as_seed(value: Any) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidOptionError("seed", value)
    return value


def _no_graph():
    return jsonify({"error": "Generate a graph first"}), 404


@app.errorhandler(GraphError)
def handle_graph_error(err: GraphError):
    return jsonify({"error": str(err)}), err.status_code


# ---------------------------------------------------------------------------
# API: Algorithms
# ---------------------------------------------------------------------------
@app.route("/api/algorithms", methods=["GET"])
def api_algorithms():
    return jsonify([
        {
            "key":             info.key,
            "label":           info.label,
            "pseudocode":      info.pseudocode,
            "complexity_time": info.complexity_time,
            "description":     info.description,
        }
        for info in list_algorithms()
    ])


# ---------------------------------------------------------------------------
# API: Graph
# ---------------------------------------------------------------------------
@app.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = request.get_json(silent=True) or {}

    size = _as_int(data.get("size", DEFAULT_GRAPH_SIZE))
    g = Graph.generate(
        size,
        symmetric=_as_bool("symmetric", data.get("symmetric", ADD_RETURN_EDGE)),
        seed=_as_seed(data.get("seed")),
    )

    # finish node defaults to the last node, as the size control does
    ws = Workspace(graph=g, start=DEFAULT_START, end=str(size))
    save_workspace(ws)
    logger.info("New graph for workspace %s: %r", session["workspace"], g)

    return jsonify({"graph": g.to_dict(), "node_names": g.node_names(), "state": get_state(ws)})


@app.route("/api/graph", methods=["GET"])
def api_graph():
    ws = get_workspace()
    if ws is None:
        return _no_graph()
    return jsonify(ws.graph.to_dict())


@app.route("/api/graph/nodes/<name>", methods=["GET"])
def api_graph_node(name: str):
    ws = get_workspace()
    if ws is None:
        return _no_graph()
    return jsonify(ws.graph.lookup(name).to_dict())


# ---------------------------------------------------------------------------
# API: Run Trace
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    ws = get_workspace()
    if ws is None:
        return _no_graph()

    data  = request.get_json(silent=True) or {}
    start = str(data.get("start", ws.start))
    end   = data.get("end", ws.end)
    if end is not None:
        end = ws.graph.lookup(end).name

    try:
        engine = TraceEngine(data.get("algo_key", "dijkstra"))
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
    engine.run(ws.graph, start)

    ws.start  = start
    ws.end    = end
    ws.engine = engine
    ws.cursor = engine.cursor()
    # reveal the seeding iteration straight away; it is the baseline row
    ws.cursor.advance()

    return jsonify({
        "summary":  engine.export()["summary"],
        "snapshot": ws.cursor.current.to_dict(),
        "state":    get_state(ws),
    })


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    ws = get_workspace()
    if ws is None or ws.cursor is None:
        return jsonify({"error": "Run a trace first"}), 400

    if not ws.cursor.advance():
        return jsonify({"error": "Already at last step"}), 400

    return jsonify({
        "snapshot": ws.cursor.current.to_dict(),
        "hidden":   None,
        "state":    get_state(ws),
    })


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    ws = get_workspace()
    if ws is None or ws.cursor is None:
        return jsonify({"error": "Run a trace first"}), 400

    hidden = ws.cursor.current
    if not ws.cursor.retreat():
        return jsonify({"error": "Already at first step"}), 400

    return jsonify({
        "snapshot": ws.cursor.current.to_dict(),
        "hidden":   hidden.iteration,
        "state":    get_state(ws),
    })


@app.route("/api/state", methods=["GET"])
def api_state():
    ws = get_workspace()
    if ws is None:
        return _no_graph()
    return jsonify(get_state(ws))


@app.route("/api/trace", methods=["GET"])
def api_trace():
    ws = get_workspace()
    if ws is None or ws.engine is None:
        return jsonify({"error": "Run a trace first"}), 400
    return jsonify(ws.engine.export())


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("=" * 60)
    print("  Shortest-Path Trace API")
    print("  Starting Flask server...")
    print("  Open http://localhost:5000/api/state")
    print("=" * 60)
    app.run(debug=True, host="0.0.0.0", port=5000)
