"""
Unit tests for shortest paths.

Tests verify:
- Returned cost equals the sum of edge lengths along the returned nodes
- Endpoints match the request; a node to itself is a single-node path of cost 0
- Cheaper multi-hop routes beat expensive direct edges
- Distances agree with a Bellman-Ford reference on generated caverns
- Unreachable destinations and negative edges raise
"""

from __future__ import annotations

import itertools

import pytest

from cavern_agents.common.paths import path_cost, shortest_path, shortest_paths_from
from cavern_agents.errors import InvalidEdgeWeightError, NoPathError, PathError
from cavern_agents.game.cavern import Cavern, generate_cavern


def bellman_ford(cavern: Cavern, source_id: int) -> dict[int, float]:
    dist = {node.id: float("inf") for node in cavern}
    dist[source_id] = 0
    for _ in range(len(cavern)):
        changed = False
        for node in cavern:
            for edge in node.exits():
                other = edge.get_other(node)
                if dist[node.id] + edge.length < dist[other.id]:
                    dist[other.id] = dist[node.id] + edge.length
                    changed = True
        if not changed:
            break
    return dist


class TestShortestPath:
    def test_same_node_is_single_node_path(self, cycle: Cavern) -> None:
        node = cycle.node(2)
        path = shortest_path(node, node)
        assert path.nodes == [node]
        assert path.cost == 0
        assert path.steps() == []

    def test_adjacent_nodes(self, two_node: Cavern) -> None:
        path = shortest_path(two_node.node(1), two_node.node(2))
        assert [n.id for n in path] == [1, 2]
        assert path.cost == 1

    def test_prefers_cheaper_route_over_fewer_hops(self) -> None:
        cavern = Cavern()
        for node_id in (1, 2, 3):
            cavern.add_node(node_id=node_id, col=node_id)
        cavern.connect(1, 2, 5)
        cavern.connect(1, 3, 1)
        cavern.connect(3, 2, 1)

        path = shortest_path(cavern.node(1), cavern.node(2))
        assert [n.id for n in path] == [1, 3, 2]
        assert path.cost == 2

    def test_zero_length_edges(self) -> None:
        cavern = Cavern()
        for node_id in (1, 2, 3):
            cavern.add_node(node_id=node_id, col=node_id)
        cavern.connect(1, 2, 0)
        cavern.connect(2, 3, 0)
        path = shortest_path(cavern.node(1), cavern.node(3))
        assert path.cost == 0
        assert [n.id for n in path] == [1, 2, 3]

    @pytest.mark.parametrize("seed", range(5))
    def test_cost_matches_edges_and_endpoints(self, seed: int) -> None:
        cavern = generate_cavern(6, 7, seed=seed, max_edge_length=4)
        nodes = cavern.nodes()
        for a, b in itertools.islice(itertools.combinations(nodes, 2), 0, None, 37):
            path = shortest_path(a, b)
            assert path.source == a and path.destination == b
            assert path.cost == path_cost(path.nodes), f"cost mismatch {a.id}->{b.id}"
            for first, second in zip(path.nodes, path.nodes[1:]):
                assert first.is_adjacent(second)

    @pytest.mark.parametrize("seed", range(3))
    def test_agrees_with_bellman_ford(self, seed: int) -> None:
        cavern = generate_cavern(5, 6, seed=seed, loop_fraction=0.4, max_edge_length=5)
        source = cavern.nodes()[0]
        reference = bellman_ford(cavern, source.id)
        tree = shortest_paths_from(source)
        for node in cavern:
            assert tree.distance_to(node) == reference[node.id]
            assert shortest_path(source, node).cost == reference[node.id]

    def test_undirected_symmetry(self) -> None:
        cavern = generate_cavern(5, 5, seed=11, max_edge_length=4)
        a, b = cavern.node(1), cavern.node(25)
        assert shortest_path(a, b).cost == shortest_path(b, a).cost


class TestShortestPathErrors:
    def test_unreachable_raises(self, cycle: Cavern) -> None:
        island = cycle.add_node(node_id=9, row=5, col=5)
        with pytest.raises(NoPathError, match="not reachable"):
            shortest_path(cycle.node(1), island)

    def test_negative_edge_rejected_by_path_finder(self, two_node: Cavern) -> None:
        edge = two_node.node(1).get_edge(two_node.node(2))
        assert edge is not None
        edge.length = -1
        with pytest.raises(InvalidEdgeWeightError):
            shortest_path(two_node.node(1), two_node.node(2))

    def test_negative_edge_beyond_destination_rejected(self) -> None:
        cavern = Cavern()
        for node_id in (1, 2, 3):
            cavern.add_node(node_id=node_id, col=node_id)
        cavern.connect(1, 2, 1)
        cavern.connect(1, 3, 5)
        cavern.connect(2, 3, 1).length = -10
        # 2 settles first and is the destination; its edge to 3 is never relaxed
        with pytest.raises(InvalidEdgeWeightError, match="-10"):
            shortest_path(cavern.node(1), cavern.node(2))

    def test_invalid_edge_weight_is_value_error(self) -> None:
        assert issubclass(InvalidEdgeWeightError, ValueError)
        assert issubclass(InvalidEdgeWeightError, PathError)

    def test_path_cost_requires_adjacency(self, cycle: Cavern) -> None:
        with pytest.raises(NoPathError, match="not adjacent"):
            path_cost([cycle.node(1), cycle.node(3)])

    def test_path_cost_single_node(self, cycle: Cavern) -> None:
        assert path_cost([cycle.node(4)]) == 0


class TestShortestPathTree:
    def test_tree_reachability(self, cycle: Cavern) -> None:
        island = cycle.add_node(node_id=9, row=5, col=5)
        tree = shortest_paths_from(cycle.node(1))
        assert tree.reachable(cycle.node(3))
        assert not tree.reachable(island)
        assert tree.distance_to(cycle.node(3)) == 2

    def test_tree_path_matches_distance(self, cycle: Cavern) -> None:
        tree = shortest_paths_from(cycle.node(1))
        path = tree.path_to(cycle.node(3))
        assert path.nodes[0] == cycle.node(1)
        assert path.nodes[-1] == cycle.node(3)
        assert path.cost == path_cost(path.nodes) == 2
