"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import GraphError, InvalidSizeError, NotFoundError, …
"""

from graph.node   import Node
from graph.edge   import Edge
from graph.graph  import Graph
from graph.errors import (
    GraphError,
    InvalidSizeError,
    InvalidOptionError,
    NotFoundError,
    EmptyGraphError,
    ExhaustedFrontierError,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "GraphError",
    "InvalidSizeError",
    "InvalidOptionError",
    "NotFoundError",
    "EmptyGraphError",
    "ExhaustedFrontierError",
]
