"""
Geocoding on top of a StreetGraph.

Resolves coordinates to the nearest routable node, and place-name queries to
named nodes. Name matching ignores punctuation and capitalization.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from ..datastructures import KDTree, Point, TrieSet
from ..graph.street_graph import Node, StreetGraph

logger = logging.getLogger(__name__)

_NON_LETTERS = re.compile(r"[^a-zA-Z ]")


def clean_string(s: str) -> str:
    """Lowercase *s* and drop everything except ASCII letters and spaces."""
    return _NON_LETTERS.sub("", s).lower()


class Geocoder:
    """Nearest-node and place-name lookups for one graph.

    Only nodes with at least one neighbour are candidates for
    :meth:`closest`, so a resolved position can always start a route.
    """

    def __init__(self, graph: StreetGraph) -> None:
        self.graph = graph
        self._point_to_id: Dict[Point, int] = {}
        self._names = TrieSet()
        self._cleaned_to_nodes: Dict[str, List[Node]] = {}

        points: List[Point] = []
        for node in graph.nodes():
            if node.name:
                cleaned = clean_string(node.name)
                self._names.insert(cleaned)
                self._cleaned_to_nodes.setdefault(cleaned, []).append(node)

            if graph.neighbors(node.id):
                point = Point(node.lon, node.lat)
                # First node wins when two share a position.
                if point not in self._point_to_id:
                    self._point_to_id[point] = node.id
                    points.append(point)

        self._tree = KDTree(points)
        logger.debug("geocoder indexed %d routable points, %d names", len(points), len(self._names))

    def closest(self, lon: float, lat: float) -> int:
        """Return the id of the routable node closest to ``(lon, lat)``.

        Raises ValueError if the graph has no routable nodes.
        """
        point = self._tree.nearest(lon, lat)
        return self._point_to_id[point]

    def locations_by_prefix(self, prefix: str) -> List[str]:
        """Full names of places whose cleaned name starts with the cleaned *prefix*."""
        seen = set()
        out: List[str] = []
        for cleaned in self._names.keys_with_prefix(clean_string(prefix)):
            for node in self._cleaned_to_nodes[cleaned]:
                if node.name not in seen:
                    seen.add(node.name)
                    out.append(node.name)
        return out

    def locations(self, name: str) -> List[Dict[str, Any]]:
        """
        Every node whose cleaned name equals the cleaned *name*.

        Each match is a dict with keys ``id``, ``name``, ``lon``, ``lat``.
        Returns an empty list when nothing matches.
        """
        return [
            {"id": node.id, "name": node.name, "lon": node.lon, "lat": node.lat}
            for node in self._cleaned_to_nodes.get(clean_string(name), [])
        ]
