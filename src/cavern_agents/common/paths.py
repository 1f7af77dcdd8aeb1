"""
Shortest paths over a weighted, undirected cavern graph.

Dijkstra with a min-Heap frontier. Improved nodes are re-inserted rather than
decreased in place; stale frontier entries are skipped when popped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Collection, Iterator, Optional, Protocol, Sequence

from cavern_agents.common.heap import Heap
from cavern_agents.errors import InvalidEdgeWeightError, NoPathError


class GraphEdge(Protocol):
    """What the path finder reads from an edge."""

    @property
    def length(self) -> int: ...

    def get_other(self, node: GraphNode) -> GraphNode: ...


class GraphNode(Protocol):
    """What the path finder reads from a node. Nodes must hash by identity or id."""

    @property
    def id(self) -> int: ...

    def exits(self) -> Collection[GraphEdge]: ...

    def get_edge(self, other: GraphNode) -> Optional[GraphEdge]: ...


@dataclass
class Path:
    """Ordered node sequence from source to destination, with its total edge length."""

    nodes: list[GraphNode]
    cost: int

    @property
    def source(self) -> GraphNode:
        return self.nodes[0]

    @property
    def destination(self) -> GraphNode:
        return self.nodes[-1]

    def steps(self) -> list[GraphNode]:
        """Nodes to move through, excluding the source."""
        return self.nodes[1:]

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self.nodes)


@dataclass
class ShortestPathTree:
    """Settled distances and predecessor links from a single source."""

    source: GraphNode
    distances: dict[GraphNode, int] = field(default_factory=dict)
    predecessors: dict[GraphNode, Optional[GraphNode]] = field(default_factory=dict)

    def reachable(self, node: GraphNode) -> bool:
        return node in self.distances

    def distance_to(self, node: GraphNode) -> int:
        if node not in self.distances:
            raise NoPathError(f"node {node.id} is not reachable from node {self.source.id}")
        return self.distances[node]

    def path_to(self, node: GraphNode) -> Path:
        """Rebuild the path to node by following predecessor links back to the source."""
        cost = self.distance_to(node)
        nodes: list[GraphNode] = []
        current: Optional[GraphNode] = node
        while current is not None:
            nodes.append(current)
            current = self.predecessors[current]
        nodes.reverse()
        return Path(nodes=nodes, cost=cost)


def _check_exits(node: GraphNode) -> None:
    for edge in node.exits():
        if edge.length < 0:
            raise InvalidEdgeWeightError(f"negative edge length {edge.length} at node {node.id}")


def _dijkstra(source: GraphNode, destination: Optional[GraphNode] = None) -> ShortestPathTree:
    """Settle nodes in distance order from source.

    Stops once destination is settled, or runs until the frontier is exhausted
    when no destination is given. Every node's edges are checked
    for negative lengths when the node is first discovered, so an early stop
    never skips one the search has reached.
    """
    tree = ShortestPathTree(source=source)
    tentative: dict[GraphNode, int] = {source: 0}
    tree.predecessors[source] = None
    _check_exits(source)

    frontier: Heap[GraphNode] = Heap(is_max=False)
    frontier.insert(source, 0)

    while frontier:
        current, dist = frontier.extract_best_with_priority()

        # Stale entry: node already settled at a smaller distance
        if current in tree.distances or dist > tentative[current]:
            continue

        tree.distances[current] = tentative[current]
        if destination is not None and current == destination:
            break

        for edge in current.exits():
            neighbor = edge.get_other(current)
            if neighbor in tree.distances:
                continue
            if neighbor not in tentative:
                _check_exits(neighbor)
            candidate = tree.distances[current] + edge.length
            if candidate < tentative.get(neighbor, float("inf")):
                tentative[neighbor] = candidate
                tree.predecessors[neighbor] = current
                frontier.insert(neighbor, candidate)

    return tree


def shortest_path(source: GraphNode, destination: GraphNode) -> Path:
    """Least-cost path from source to destination.

    Raises NoPathError if destination cannot be reached and
    InvalidEdgeWeightError if a negative edge is encountered on the way.
    """
    if source == destination:
        return Path(nodes=[source], cost=0)
    tree = _dijkstra(source, destination)
    return tree.path_to(destination)


def shortest_paths_from(source: GraphNode) -> ShortestPathTree:
    """Shortest distances and paths from source to every reachable node."""
    return _dijkstra(source)


def path_cost(nodes: Sequence[GraphNode]) -> int:
    """Sum of edge lengths along a node sequence. A single node costs 0."""
    total = 0
    for first, second in zip(nodes, nodes[1:]):
        edge = first.get_edge(second)
        if edge is None:
            raise NoPathError(f"nodes {first.id} and {second.id} are not adjacent")
        total += edge.length
    return total
