"""
Shortest-path search over a StreetGraph.

`shortest_path` runs A* when a heuristic is supplied and plain Dijkstra
otherwise. The frontier is an `IndexedMinHeap` keyed by node id: newly seen
nodes are inserted, and nodes reached again by a shorter route have their
priority lowered in place instead of being pushed a second time.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, NamedTuple, Optional

from ..datastructures import IndexedMinHeap
from ..graph.street_graph import StreetGraph

logger = logging.getLogger(__name__)

# Outcomes reported in RouteResult.outcome
SOLVED = "SOLVED"
UNSOLVABLE = "UNSOLVABLE"
TIMEOUT = "TIMEOUT"

# Default wall-clock budget for one search, in seconds.
DEFAULT_TIMEOUT = 30.0

Heuristic = Callable[[int, int], float]


class RouteResult(NamedTuple):
    outcome: str
    path: List[int]
    distance: float
    explored: int
    elapsed: float


def great_circle_heuristic(graph: StreetGraph) -> Heuristic:
    """Admissible A* heuristic: straight-line distance between two nodes."""
    return graph.distance


def default_heuristic(graph: StreetGraph) -> Optional[Heuristic]:
    """Great-circle A* heuristic, or None (Dijkstra) if some edge undercuts it.

    Edge weights that are not metres, such as travel times, can be shorter
    than the straight-line distance and would make A* return wrong routes.
    """
    if graph.geodesic_weights:
        return great_circle_heuristic(graph)
    logger.warning("edge weights below great-circle distance; falling back to dijkstra")
    return None


def _rebuild_path(edge_to: Dict[int, int], start: int, goal: int) -> List[int]:
    path = [goal]
    while path[-1] != start:
        path.append(edge_to[path[-1]])
    path.reverse()
    return path


def shortest_path(
    graph: StreetGraph,
    start: int,
    goal: int,
    heuristic: Optional[Heuristic] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> RouteResult:
    """
    Find the cheapest path from `start` to `goal`.

    Parameters:
        graph: Graph to search; edge weights must be non-negative.
        start, goal: Node ids. Unknown ids raise KeyError.
        heuristic: Optional ``h(node, goal)`` estimate. It must never exceed
            the true remaining cost, otherwise the result may not be optimal.
        timeout: Seconds before giving up with outcome TIMEOUT.

    Returns:
        RouteResult(outcome, path, distance, explored, elapsed). `path` is
        empty and `distance` is infinite unless the outcome is SOLVED.
    """
    graph.node(start)
    graph.node(goal)
    h = heuristic or (lambda u, v: 0.0)

    began = time.perf_counter()
    dist_to: Dict[int, float] = {start: 0.0}
    edge_to: Dict[int, int] = {}
    frontier: IndexedMinHeap[int] = IndexedMinHeap()
    frontier.insert(start, h(start, goal))
    explored = 0
    logger.debug("search %s -> %s (%s)", start, goal, "A*" if heuristic else "dijkstra")

    while frontier:
        elapsed = time.perf_counter() - began
        if elapsed > timeout:
            logger.warning("search %s -> %s timed out after %.3fs (%d explored)", start, goal, elapsed, explored)
            return RouteResult(TIMEOUT, [], float("inf"), explored, elapsed)

        u = frontier.extract_min()
        explored += 1
        if u == goal:
            elapsed = time.perf_counter() - began
            logger.debug("search %s -> %s solved, %.1f m, %d explored", start, goal, dist_to[goal], explored)
            return RouteResult(SOLVED, _rebuild_path(edge_to, start, goal), dist_to[goal], explored, elapsed)

        for v, weight in graph.neighbors(u):
            candidate = dist_to[u] + weight
            if candidate < dist_to.get(v, float("inf")):
                dist_to[v] = candidate
                edge_to[v] = u
                priority = candidate + h(v, goal)
                if frontier.contains(v):
                    frontier.change_priority(v, priority)
                else:
                    frontier.insert(v, priority)

    elapsed = time.perf_counter() - began
    logger.debug("search %s -> %s unsolvable, %d explored", start, goal, explored)
    return RouteResult(UNSOLVABLE, [], float("inf"), explored, elapsed)
