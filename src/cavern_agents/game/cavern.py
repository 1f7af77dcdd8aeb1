"""
In-memory cavern graph: tiles, nodes, weighted edges, and cave generators.

Nodes sit on grid coordinates so the hunt heuristic can measure Manhattan
distance while ignoring walls. Edges are undirected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

import numpy as np

from cavern_agents.errors import InvalidEdgeWeightError, NoGoldError

# ASCII sketch symbols
WALL = "#"
OPEN = "."
GOLD_UNIT = 100  # A digit d in a sketch means d * GOLD_UNIT gold


@dataclass
class Tile:
    """Floor of a node. Gold can be taken once."""

    gold: int = 0

    def take_gold(self) -> int:
        if self.gold <= 0:
            raise NoGoldError("no gold on this tile")
        amount = self.gold
        self.gold = 0
        return amount


class Edge:
    """Undirected connection between two nodes with a traversal cost."""

    __slots__ = ("first", "second", "length")

    def __init__(self, first: Node, second: Node, length: int):
        self.first = first
        self.second = second
        self.length = length

    def get_other(self, node: Node) -> Node:
        if node == self.first:
            return self.second
        if node == self.second:
            return self.first
        raise ValueError(f"node {node.id} is not an endpoint of {self}")

    def __repr__(self) -> str:
        return f"Edge({self.first.id}-{self.second.id}, length={self.length})"


class Node:
    """A cavern location. Equality and hashing use the id only."""

    def __init__(self, node_id: int, row: int = 0, col: int = 0, tile: Optional[Tile] = None):
        self.id = node_id
        self.row = row
        self.col = col
        self.tile = tile if tile is not None else Tile()
        self._edges: dict[int, Edge] = {}

    @property
    def pos(self) -> tuple[int, int]:
        return (self.row, self.col)

    def exits(self) -> list[Edge]:
        return list(self._edges.values())

    def neighbors(self) -> list[Node]:
        return [edge.get_other(self) for edge in self._edges.values()]

    def get_edge(self, other: Node) -> Optional[Edge]:
        return self._edges.get(other.id)

    def is_adjacent(self, other: Node) -> bool:
        return other.id in self._edges

    def _attach(self, other: Node, edge: Edge) -> None:
        self._edges[other.id] = edge

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Node({self.id} @ {self.pos}, gold={self.tile.gold})"


class Cavern:
    """Graph of nodes keyed by id.

    ``markers`` maps single-letter labels from an ASCII sketch (for example
    ``S``, ``O``, ``E``) to the node they were placed on.
    """

    def __init__(self) -> None:
        self._nodes: dict[int, Node] = {}
        self.markers: dict[str, Node] = {}

    # === Construction ===

    def add_node(self, node_id: Optional[int] = None, row: int = 0, col: int = 0, gold: int = 0) -> Node:
        if node_id is None:
            node_id = max(self._nodes, default=0) + 1
        if node_id in self._nodes:
            raise ValueError(f"duplicate node id {node_id}")
        if gold < 0:
            raise ValueError(f"gold must be non-negative, got {gold}")
        node = Node(node_id, row=row, col=col, tile=Tile(gold=gold))
        self._nodes[node_id] = node
        return node

    def connect(self, first: Node | int, second: Node | int, length: int = 1) -> Edge:
        a = self.node(first) if isinstance(first, int) else first
        b = self.node(second) if isinstance(second, int) else second
        if length < 0:
            raise InvalidEdgeWeightError(f"edge {a.id}-{b.id} has negative length {length}")
        if a == b:
            raise ValueError(f"self-loop on node {a.id}")
        if a.is_adjacent(b):
            raise ValueError(f"nodes {a.id} and {b.id} are already connected")
        edge = Edge(a, b, length)
        a._attach(b, edge)
        b._attach(a, edge)
        return edge

    @classmethod
    def from_rows(cls, rows: Sequence[str], edge_length: int = 1) -> Cavern:
        """Build a cavern from an ASCII sketch.

        ``#`` is wall, ``.`` open floor, a digit ``d`` open floor with
        ``d * 100`` gold, and an uppercase letter an open marker tile. Open
        tiles are joined to their orthogonal open neighbours.
        """
        cavern = cls()
        width = max((len(line) for line in rows), default=0)
        by_pos: dict[tuple[int, int], Node] = {}
        for r, line in enumerate(rows):
            for c, ch in enumerate(line):
                if ch == WALL or ch == " ":
                    continue
                gold = int(ch) * GOLD_UNIT if ch.isdigit() else 0
                if not (ch == OPEN or ch.isdigit() or ch.isupper()):
                    raise ValueError(f"unknown sketch symbol {ch!r} at ({r},{c})")
                node = cavern.add_node(node_id=r * width + c, row=r, col=c, gold=gold)
                by_pos[(r, c)] = node
                if ch.isupper():
                    cavern.markers[ch] = node

        for (r, c), node in by_pos.items():
            for nr, nc in ((r + 1, c), (r, c + 1)):
                other = by_pos.get((nr, nc))
                if other is not None:
                    cavern.connect(node, other, edge_length)
        return cavern

    # === Queries ===

    def node(self, node_id: int) -> Node:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"no node with id {node_id}") from None

    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    def node_at(self, row: int, col: int) -> Optional[Node]:
        for node in self._nodes.values():
            if node.row == row and node.col == col:
                return node
        return None

    def total_gold(self) -> int:
        return sum(node.tile.gold for node in self._nodes.values())

    @staticmethod
    def manhattan(a: Node, b: Node) -> int:
        return abs(a.row - b.row) + abs(a.col - b.col)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return isinstance(node, Node) and self._nodes.get(node.id) is node

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes.values())


def generate_cavern(
    rows: int,
    cols: int,
    seed: Optional[int] = None,
    loop_fraction: float = 0.15,
    max_edge_length: int = 3,
    gold_fraction: float = 0.3,
    max_gold: int = 1000,
) -> Cavern:
    """Generate a connected grid cave.

    Carves a random spanning tree over the grid (randomized depth-first
    maze), then opens extra passages between adjacent cells with probability
    ``loop_fraction`` so there are alternative routes. Every cell is a node.
    """
    if rows < 1 or cols < 1:
        raise ValueError(f"cavern must be at least 1x1, got {rows}x{cols}")
    if max_edge_length < 1:
        raise ValueError(f"max_edge_length must be >= 1, got {max_edge_length}")

    rng = np.random.default_rng(seed)
    cavern = Cavern()
    for r in range(rows):
        for c in range(cols):
            gold = int(rng.integers(1, max_gold + 1)) if rng.random() < gold_fraction else 0
            cavern.add_node(node_id=r * cols + c + 1, row=r, col=c, gold=gold)

    def cell(r: int, c: int) -> Node:
        return cavern.node(r * cols + c + 1)

    def edge_length() -> int:
        return int(rng.integers(1, max_edge_length + 1))

    deltas = [(-1, 0), (1, 0), (0, -1), (0, 1)]
    start = (int(rng.integers(rows)), int(rng.integers(cols)))
    carved = {start}
    stack = [start]
    while stack:
        r, c = stack[-1]
        options = [
            (r + dr, c + dc)
            for dr, dc in deltas
            if 0 <= r + dr < rows and 0 <= c + dc < cols and (r + dr, c + dc) not in carved
        ]
        if not options:
            stack.pop()
            continue
        nr, nc = options[int(rng.integers(len(options)))]
        cavern.connect(cell(r, c), cell(nr, nc), edge_length())
        carved.add((nr, nc))
        stack.append((nr, nc))

    # Extra passages turn the tree into a graph with cycles
    for r in range(rows):
        for c in range(cols):
            for nr, nc in ((r + 1, c), (r, c + 1)):
                if nr >= rows or nc >= cols:
                    continue
                a, b = cell(r, c), cell(nr, nc)
                if not a.is_adjacent(b) and rng.random() < loop_fraction:
                    cavern.connect(a, b, edge_length())

    return cavern
