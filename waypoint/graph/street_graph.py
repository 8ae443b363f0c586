"""
Street graph model.

Nodes are map vertices with a longitude/latitude and an optional place name.
Edges are undirected and weighted in metres; when no weight is given the
great-circle distance between the two end points is used.
"""

from __future__ import annotations

import math
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

# Mean earth radius used for all distance computations (metres).
EARTH_RADIUS_M = 6_371_000.0


class Node(NamedTuple):
    id: int
    lon: float
    lat: float
    name: Optional[str] = None


def great_circle_distance(lon1: float, lat1: float, lon2: float, lat2: float) -> float:
    """
    Return the haversine distance in metres between two lon/lat positions.

    Example:
        great_circle_distance(0.0, 0.0, 0.0, 1.0) -> ~111195.0
    """
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(a)))


class StreetGraph:
    """Adjacency-list graph of street intersections and named places."""

    def __init__(self) -> None:
        self._nodes: Dict[int, Node] = {}
        self._adj: Dict[int, List[Tuple[int, float]]] = {}
        # False once any edge is shorter than the straight line between its ends.
        self._geodesic_weights = True

    # -----------------------------
    # Construction
    # -----------------------------
    def add_node(self, id: int, lon: float, lat: float, name: Optional[str] = None) -> Node:
        """Add (or replace) a node and return it. Existing edges are kept."""
        node = Node(int(id), float(lon), float(lat), name or None)
        self._nodes[node.id] = node
        self._adj.setdefault(node.id, [])
        return node

    def add_edge(self, u: int, v: int, weight: Optional[float] = None) -> float:
        """Connect ``u`` and ``v`` in both directions and return the edge weight.

        Raises KeyError if either end point is unknown and ValueError for a
        negative weight.
        """
        a = self.node(u)
        b = self.node(v)
        straight = great_circle_distance(a.lon, a.lat, b.lon, b.lat)
        weight = straight if weight is None else float(weight)
        if weight < 0:
            raise ValueError(f"negative edge weight {weight} between {u} and {v}")
        if weight < straight * (1 - 1e-9):
            self._geodesic_weights = False
        self._adj[a.id].append((b.id, weight))
        if a.id != b.id:
            self._adj[b.id].append((a.id, weight))
        return weight

    # -----------------------------
    # Queries
    # -----------------------------
    def node(self, id: int) -> Node:
        try:
            return self._nodes[id]
        except KeyError:
            raise KeyError(f"unknown node id {id}") from None

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def name(self, id: int) -> Optional[str]:
        return self.node(id).name

    def neighbors(self, id: int) -> List[Tuple[int, float]]:
        """Return ``(neighbor_id, weight)`` pairs for *id*."""
        self.node(id)
        return list(self._adj[id])

    @property
    def geodesic_weights(self) -> bool:
        """True while every edge weighs at least the great-circle distance it spans.

        Only then is straight-line distance a safe A* estimate.
        """
        return self._geodesic_weights

    def distance(self, u: int, v: int) -> float:
        """Great-circle distance between two nodes, ignoring edges."""
        a = self.node(u)
        b = self.node(v)
        return great_circle_distance(a.lon, a.lat, b.lon, b.lat)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, id: object) -> bool:
        return id in self._nodes

    def __iter__(self) -> Iterator[int]:  # pragma: no cover - simple
        return iter(self._nodes)
