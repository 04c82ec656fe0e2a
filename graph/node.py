from typing import Dict, List, Optional, Union

from graph.edge import Edge


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    A named vertex that owns its outgoing edges.

    Attributes:
        name      : Stable identifier, unique within a graph.
        edges     : Outgoing Edges in creation order.
        _edge_ref : {destination_name: Edge} — only used to deduplicate,
                    so a node never holds two edges to the same destination.
    """

    __slots__ = ("name", "edges", "_edge_ref")

    def __init__(self, name: Union[str, int]):
        self.name:      str             = str(name)
        self.edges:     List[Edge]      = []
        self._edge_ref: Dict[str, Edge] = {}

    # ------------------------------------------------------------------
    # Edge helpers
    # ------------------------------------------------------------------
    def append_edge(self, destination: Union["Node", str], weight: int) -> Optional[Edge]:
        """
        Add an edge to `destination` unless one already exists.

        Returns the new Edge, or None when the call was a duplicate (no-op).
        """
        to = destination.name if isinstance(destination, Node) else str(destination)
        if to in self._edge_ref:
            return None
        edge = Edge(source=self.name, to=to, weight=weight)
        self._edge_ref[to] = edge
        self.edges.append(edge)
        return edge

    def has_edge_to(self, name: str) -> bool:
        return name in self._edge_ref

    def edge_to(self, name: str) -> Optional[Edge]:
        return self._edge_ref.get(name)

    @property
    def out_degree(self) -> int:
        return len(self.edges)

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "name":  self.name,
            "edges": [{"to": e.to, "weight": e.weight} for e in self.edges],
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Node(name={self.name}, out_degree={self.out_degree})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)
