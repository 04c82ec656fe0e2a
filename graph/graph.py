"""
graph.py — Graph Container & Generator
=======================================
Single source of truth for the graph.  The trace engine and the API
both read from this object; nothing mutates it once generation returns.

Responsibilities:
  1. Node storage in creation order + name → Node index
  2. Lookup                                 (lookup / node_map / edges)
  3. Random graph generation                (tree phase + degree repair)
  4. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes live in one list owned by the Graph (root first).  Edges refer
    to their destination by name, so there are no object cycles.
  - Generation draws from a private `random.Random`, never the module-level
    one, so two graphs built side by side share no state.
"""

import logging
import random
from typing import Dict, Iterator, List, Optional, Union

from config import ADD_RETURN_EDGE, FAN_OUT, REPAIR_ATTEMPTS, WEIGHT_SCALE
from graph.edge import Edge
from graph.errors import InvalidSizeError, NotFoundError
from graph.node import Node

logger = logging.getLogger(__name__)


class Graph:
    """
    Attributes:
        nodes     : [Node] in creation order, root first.
        symmetric : bool – whether generated edges were mirrored.
        _index    : {name: Node}
    """

    def __init__(self, symmetric: bool = False):
        self.nodes:     List[Node]      = []
        self.symmetric: bool            = symmetric
        self._index:    Dict[str, Node] = {}

    # ==================================================================
    # NODES
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        if node.name in self._index:
            raise ValueError(f"Duplicate node name '{node.name}'")
        self.nodes.append(node)
        self._index[node.name] = node
        return node

    def create_node(self, name: Union[str, int]) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(name))

    def lookup(self, name: Union[str, int]) -> Node:
        node = self._index.get(str(name))
        if node is None:
            raise NotFoundError(str(name))
        return node

    @property
    def node_map(self) -> Dict[str, Node]:
        return dict(self._index)

    def node_names(self) -> List[str]:
        return [n.name for n in self.nodes]

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, source: Union[str, int], to: Union[str, int], weight: int) -> Optional[Edge]:
        """Append source → to.  Both ends must exist; duplicates are no-ops."""
        src = self.lookup(source)
        dst = self.lookup(to)
        return src.append_edge(dst, weight)

    def edges(self) -> Iterator[Edge]:
        for node in self.nodes:
            yield from node.edges

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "symmetric": self.symmetric,
            "nodes":     [n.to_dict() for n in self.nodes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(symmetric=data.get("symmetric", False))
        for nd in data.get("nodes", []):
            g.create_node(nd["name"])
        for nd in data.get("nodes", []):
            for ed in nd.get("edges", []):
                g.add_edge(nd["name"], ed["to"], ed["weight"])
        return g

    # ==================================================================
    # GENERATOR
    # ==================================================================
    @classmethod
    def generate(
        cls,
        size: int,
        symmetric: bool = ADD_RETURN_EDGE,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> "Graph":
        """
        Build a random directed graph with nodes named "1".."size".

        Phase 1 grows a breadth-first tree from "1", giving each frontier
        node up to FAN_OUT children until `size` nodes exist.  Phase 2
        tops up every node whose out-degree is below min(FAN_OUT, size - 1)
        with edges to / from randomly chosen other nodes.

        With `symmetric`, each new edge also gets a reverse edge carrying its
        own independently drawn weight.

        Randomness comes from `rng` when given, else from a private
        random.Random(seed).  Passing both is a ValueError.
        """
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidSizeError(size)

        if rng is not None and seed is not None:
            raise ValueError("Pass either seed or rng, not both")

        rng = rng or random.Random(seed)
        g = cls(symmetric=symmetric)

        g._build_tree(size, rng)
        g._repair_degrees(rng)

        logger.debug(
            "Generated graph: %d nodes, %d edges (symmetric=%s)",
            g.node_count(), g.edge_count(), symmetric,
        )
        return g

    def _build_tree(self, size: int, rng: random.Random) -> None:
        frontier = [self.create_node(1)]
        count = 1

        while frontier:
            next_frontier: List[Node] = []
            for parent in frontier:
                for _ in range(FAN_OUT):
                    if count >= size:
                        break
                    count += 1
                    child = self.create_node(count)
                    self._link(parent, child, rng)
                    next_frontier.append(child)
            frontier = next_frontier

    def _repair_degrees(self, rng: random.Random) -> None:
        n = len(self.nodes)
        floor = min(FAN_OUT, n - 1)

        for i, node in enumerate(self.nodes):
            attempts = 0
            while node.out_degree < floor and attempts < REPAIR_ATTEMPTS:
                attempts += 1
                j = rng.randrange(n)
                while j == i:
                    j = rng.randrange(n)
                other = self.nodes[j]

                # coin flip: the new edge points into or out of `node`
                if rng.random() < 0.5:
                    self._link(other, node, rng)
                else:
                    self._link(node, other, rng)

            if node.out_degree < floor:
                logger.warning(
                    "Node %s left at out-degree %d after %d repair attempts",
                    node.name, node.out_degree, attempts,
                )

    def _link(self, src: Node, dst: Node, rng: random.Random) -> Optional[Edge]:
        if src.has_edge_to(dst.name):
            return None
        edge = src.append_edge(dst, rng.randint(1, WEIGHT_SCALE))
        if self.symmetric and not dst.has_edge_to(src.name):
            dst.append_edge(src, rng.randint(1, WEIGHT_SCALE))
        return edge

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return sum(n.out_degree for n in self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, name) -> bool:
        return str(name) in self._index

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()}, symmetric={self.symmetric})"
