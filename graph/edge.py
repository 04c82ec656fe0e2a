"""
edge.py — Directed Weighted Edge
================================
A one-way link owned by its source node.

Design decisions:
  - `source` and `to` are node-name strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Weight is fixed at creation.  The attributes are exposed through
    read-only properties so nothing downstream can re-weight an edge
    after a trace has been recorded against it.
"""


class Edge:
    """
    Attributes:
        source : Name of the tail node (the owner).
        to     : Name of the head node.
        weight : Positive integer cost.
    """

    __slots__ = ("_source", "_to", "_weight")

    def __init__(self, source: str, to: str, weight: int):
        if weight < 1:
            raise ValueError(f"Edge weight must be positive, got {weight}")
        self._source: str = source
        self._to:     str = to
        self._weight: int = weight

    @property
    def source(self) -> str:
        return self._source

    @property
    def to(self) -> str:
        return self._to

    @property
    def weight(self) -> int:
        return self._weight

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self._source,
            "to":     self._to,
            "weight": self._weight,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self._source} → {self._to}, w={self._weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and (self._source, self._to, self._weight) == (other._source, other._to, other._weight)
        )

    def __hash__(self) -> int:
        return hash((self._source, self._to, self._weight))
