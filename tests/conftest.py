"""Shared fixtures for the graph, trace and API tests."""

from typing import Dict

import pytest

from graph import Graph


EXAMPLE_GRAPH = {
    "symmetric": False,
    "nodes": [
        {"name": "1", "edges": [{"to": "2", "weight": 3}, {"to": "3", "weight": 1}]},
        {"name": "2", "edges": [{"to": "4", "weight": 5}]},
        {"name": "3", "edges": [{"to": "2", "weight": 1}, {"to": "4", "weight": 9}]},
        {"name": "4", "edges": []},
    ],
}


@pytest.fixture()
def example_graph() -> Graph:
    """1→2(3), 1→3(1), 3→2(1), 2→4(5), 3→4(9)."""
    return Graph.from_dict(EXAMPLE_GRAPH)


def build_graph(edges: Dict[str, Dict[str, int]], names=None) -> Graph:
    """Small helper: {"1": {"2": 4}} → Graph with nodes in `names` order."""
    g = Graph()
    order = names or sorted(
        set(edges) | {to for out in edges.values() for to in out},
        key=int,
    )
    for name in order:
        g.create_node(name)
    for src, out in edges.items():
        for to, w in out.items():
            g.add_edge(src, to, w)
    return g


@pytest.fixture()
def web_app():
    from main import app

    app.config.update(TESTING=True)
    app.config["WORKSPACES"].clear()
    yield app
    app.config["WORKSPACES"].clear()


@pytest.fixture()
def client(web_app):
    return web_app.test_client()


@pytest.fixture()
def graph_builder():
    return build_graph
