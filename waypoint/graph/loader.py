"""
Street graph loading utilities.

This module centralizes where map data lives and how it is read. It provides:
- Default data paths (`NODES_PATH`, `EDGES_PATH`) relative to the project.
- A CSV loader (`load_graph`) that builds a `StreetGraph` from a node file
  and an edge file.

File formats (both with a header row):
    nodes.csv: id,lon,lat,name       (name may be blank)
    edges.csv: from,to,weight        (weight may be blank -> great-circle metres)
"""

from __future__ import annotations

import csv
import logging
import os

from .street_graph import StreetGraph

logger = logging.getLogger(__name__)

# Base directory of the project (one level above the package folder)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Paths to the bundled sample map (relative to BASE_DIR)
DATA_DIR = os.path.join(BASE_DIR, "data")
NODES_PATH = os.path.join(DATA_DIR, "nodes.csv")
EDGES_PATH = os.path.join(DATA_DIR, "edges.csv")

# Columns that must be present; name and weight may be omitted entirely.
NODE_FIELDS = ("id", "lon", "lat")
EDGE_FIELDS = ("from", "to")


def _require_fields(path: str, fieldnames, expected) -> None:
    missing = [f for f in expected if f not in (fieldnames or [])]
    if missing:
        raise ValueError(f"{path}: missing column(s) {', '.join(missing)}")


def load_nodes(graph: StreetGraph, path: str) -> int:
    """Read node rows from *path* into *graph*; return how many were added."""
    count = 0
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        _require_fields(path, reader.fieldnames, NODE_FIELDS)
        for row in reader:
            try:
                graph.add_node(int(row["id"]), float(row["lon"]), float(row["lat"]), (row.get("name") or "").strip())
            except (TypeError, ValueError) as e:
                raise ValueError(f"{path}:{reader.line_num}: bad node row ({e})") from e
            count += 1
    return count


def load_edges(graph: StreetGraph, path: str) -> int:
    """Read edge rows from *path* into *graph*; return how many were added."""
    count = 0
    with open(path, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        _require_fields(path, reader.fieldnames, EDGE_FIELDS)
        for row in reader:
            raw_weight = (row.get("weight") or "").strip()
            try:
                graph.add_edge(int(row["from"]), int(row["to"]), float(raw_weight) if raw_weight else None)
            except (TypeError, ValueError) as e:
                raise ValueError(f"{path}:{reader.line_num}: bad edge row ({e})") from e
            count += 1
    return count


def load_graph(nodes_path: str = NODES_PATH, edges_path: str = EDGES_PATH) -> StreetGraph:
    """
    Build a `StreetGraph` from a node CSV and an edge CSV.

    Nodes are loaded first so every edge can resolve its end points. An edge
    naming an unknown node raises KeyError.

    Example:
        from waypoint.graph.loader import load_graph
        g = load_graph()
    """
    graph = StreetGraph()
    n_nodes = load_nodes(graph, nodes_path)
    n_edges = load_edges(graph, edges_path)
    logger.info("loaded %d nodes and %d edges from %s, %s", n_nodes, n_edges, nodes_path, edges_path)
    return graph
