import os
import random
import sys

import pytest

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from waypoint.graph.street_graph import StreetGraph, great_circle_distance
from waypoint.search import routing


def weighted_graph():
    """
    1 --1-- 2 --1-- 3
    |               |
    4 ------5------ 5       6 (isolated)
    """
    g = StreetGraph()
    for i in range(1, 7):
        g.add_node(i, 0.0, 0.0)
    g.add_edge(1, 2, 1.0)
    g.add_edge(2, 3, 1.0)
    g.add_edge(1, 4, 1.0)
    g.add_edge(4, 5, 5.0)
    g.add_edge(3, 5, 1.0)
    return g


def test_dijkstra_finds_cheapest_path():
    res = routing.shortest_path(weighted_graph(), 1, 5)
    assert res.outcome == routing.SOLVED
    assert res.path == [1, 2, 3, 5]
    assert res.distance == 3.0
    assert res.explored >= 4


def test_start_equals_goal():
    res = routing.shortest_path(weighted_graph(), 2, 2)
    assert res.outcome == routing.SOLVED
    assert res.path == [2]
    assert res.distance == 0.0


def test_unsolvable():
    res = routing.shortest_path(weighted_graph(), 1, 6)
    assert res.outcome == routing.UNSOLVABLE
    assert res.path == []
    assert res.distance == float("inf")


def test_timeout():
    res = routing.shortest_path(weighted_graph(), 1, 5, timeout=-1.0)
    assert res.outcome == routing.TIMEOUT
    assert res.path == []


def test_unknown_node_raises():
    with pytest.raises(KeyError):
        routing.shortest_path(weighted_graph(), 1, 99)


def test_relaxation_lowers_queued_priority():
    # 3 is first queued via the expensive edge, then improved through 2.
    g = StreetGraph()
    for i in range(1, 5):
        g.add_node(i, 0.0, 0.0)
    g.add_edge(1, 3, 10.0)
    g.add_edge(1, 2, 1.0)
    g.add_edge(2, 3, 1.0)
    g.add_edge(3, 4, 1.0)
    res = routing.shortest_path(g, 1, 4)
    assert res.path == [1, 2, 3, 4]
    assert res.distance == 3.0


def test_astar_matches_dijkstra_on_random_geometric_graph():
    rng = random.Random(5)
    g = StreetGraph()
    n = 120
    for i in range(n):
        g.add_node(i, rng.uniform(-122.30, -122.20), rng.uniform(37.80, 37.90))
    for i in range(n):
        for j in rng.sample(range(n), 3):
            if i != j:
                g.add_edge(i, j)  # great-circle weights keep the heuristic admissible
    heuristic = routing.great_circle_heuristic(g)
    for _ in range(20):
        s, t = rng.sample(range(n), 2)
        plain = routing.shortest_path(g, s, t)
        astar = routing.shortest_path(g, s, t, heuristic=heuristic)
        assert plain.outcome == astar.outcome
        if plain.outcome == routing.SOLVED:
            assert astar.distance == pytest.approx(plain.distance)
            assert astar.path[0] == s and astar.path[-1] == t


def test_great_circle_distance():
    assert great_circle_distance(0.0, 0.0, 0.0, 1.0) == pytest.approx(111195.0, rel=1e-3)
    assert great_circle_distance(10.0, 20.0, 10.0, 20.0) == 0.0


def test_default_heuristic_falls_back_when_weights_undercut_distance():
    # Two parallel streets between 1 and 4; weights are travel times, far
    # below the metres between nodes.
    g = StreetGraph()
    g.add_node(1, 0.00, 0.0)
    g.add_node(2, 0.01, 0.0)
    g.add_node(3, 0.00, 0.01)
    g.add_node(4, 0.01, 0.01)
    g.add_edge(1, 2, 1.0)
    g.add_edge(2, 4, 9.0)
    g.add_edge(1, 3, 2.0)
    g.add_edge(3, 4, 2.0)
    assert not g.geodesic_weights
    assert routing.default_heuristic(g) is None
    res = routing.shortest_path(g, 1, 4, heuristic=routing.default_heuristic(g))
    assert res.path == [1, 3, 4]
    assert res.distance == 4.0


def test_default_heuristic_uses_great_circle_for_metre_weights():
    g = StreetGraph()
    g.add_node(1, 0.0, 0.0)
    g.add_node(2, 0.01, 0.0)
    g.add_edge(1, 2)
    g.add_edge(2, 1, g.distance(1, 2) * 1.5)
    assert g.geodesic_weights
    assert routing.default_heuristic(g) is not None
