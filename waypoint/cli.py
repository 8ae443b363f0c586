"""
Waypoint Command-Line Interface (CLI)

This script exposes map lookups and route planning via subcommands. It ties
together:
- Graph loading (CSV node and edge files)
- Geocoding (nearest node, name autocomplete, place lookup)
- Route search (A* over an indexed priority queue)
- Map tile selection (which tiles cover a viewport)

Usage examples:
    python -m waypoint.cli route --start 1 --goal 7
    python -m waypoint.cli route-coords --start-lon -122.26 --start-lat 37.87 \
        --goal-lon -122.25 --goal-lat 37.86
    python -m waypoint.cli closest --lon -122.26 --lat 37.87
    python -m waypoint.cli autocomplete --prefix "sa"
    python -m waypoint.cli raster --ullon -122.2416 --ullat 37.8766 --lrlon -122.2405 --lrlat 37.8755 \
        --width 892 --height 875
    python -m waypoint.cli --nodes my_nodes.csv --edges my_edges.csv locations --name "Sather Gate"
"""

import argparse
import logging
import sys

# Import modules from the project package
from .graph.loader import EDGES_PATH, NODES_PATH, load_graph
from .search import routing
from .raster import tiles
from .search.geocoding import Geocoder

logger = logging.getLogger(__name__)


# -------------------------------------------------------------------
# Utility: pretty-print a route
# -------------------------------------------------------------------
def print_route(graph, result):
    """Display a route result, one node per line."""
    if result.outcome != routing.SOLVED:
        print(f"No route found ({result.outcome}) after exploring {result.explored} nodes.")
        return

    print(f"Route: {len(result.path)} nodes, {result.distance:.1f} m "
          f"({result.explored} explored in {result.elapsed * 1000:.2f} ms)")
    for node_id in result.path:
        node = graph.node(node_id)
        label = f"  {node.name}" if node.name else ""
        print(f"  {node.id}  ({node.lon:.6f}, {node.lat:.6f}){label}")


# -------------------------------------------------------------------
# Core command handlers
# -------------------------------------------------------------------
def cmd_route(args):
    """Plan a route between two node ids."""
    graph = load_graph(args.nodes, args.edges)
    heuristic = None if args.dijkstra else routing.default_heuristic(graph)
    result = routing.shortest_path(graph, args.start, args.goal, heuristic=heuristic, timeout=args.timeout)
    print_route(graph, result)


def cmd_route_coords(args):
    """Plan a route between the nodes closest to two positions."""
    graph = load_graph(args.nodes, args.edges)
    geocoder = Geocoder(graph)
    start = geocoder.closest(args.start_lon, args.start_lat)
    goal = geocoder.closest(args.goal_lon, args.goal_lat)
    logger.info("resolved start=%s goal=%s", start, goal)
    heuristic = None if args.dijkstra else routing.default_heuristic(graph)
    result = routing.shortest_path(graph, start, goal, heuristic=heuristic, timeout=args.timeout)
    print_route(graph, result)


def cmd_closest(args):
    """Print the routable node closest to a position."""
    graph = load_graph(args.nodes, args.edges)
    node = graph.node(Geocoder(graph).closest(args.lon, args.lat))
    print(f"{node.id}  ({node.lon:.6f}, {node.lat:.6f})" + (f"  {node.name}" if node.name else ""))


def cmd_autocomplete(args):
    """List place names matching a prefix."""
    graph = load_graph(args.nodes, args.edges)
    names = Geocoder(graph).locations_by_prefix(args.prefix)
    if not names:
        print("No matching locations.")
        return
    for name in names:
        print(name)


def cmd_locations(args):
    """Show every node matching a place name."""
    graph = load_graph(args.nodes, args.edges)
    matches = Geocoder(graph).locations(args.name)
    if not matches:
        print("No matching locations.")
        return
    for m in matches:
        print(f"  {m['id']}  ({m['lon']:.6f}, {m['lat']:.6f})  {m['name']}")


# -------------------------------------------------------------------
# Map tiles
# -------------------------------------------------------------------
def cmd_raster(args):
    """Print the tile grid covering a query box."""
    params = tiles.raster_params(args.ullon, args.ullat, args.lrlon, args.lrlat, args.width, args.height)
    if not params["query_success"]:
        print("Query failed: box is outside the map or empty.")
        return
    print(f"depth={params['depth']}  "
          f"ul=({params['raster_ul_lon']:.6f}, {params['raster_ul_lat']:.6f})  "
          f"lr=({params['raster_lr_lon']:.6f}, {params['raster_lr_lat']:.6f})")
    for row in params["render_grid"]:
        print("  ".join(row))


# -------------------------------------------------------------------
# CLI parser setup
# -------------------------------------------------------------------
def build_parser():
    """Build the argparse command-line parser with subcommands."""
    p = argparse.ArgumentParser(prog="python -m waypoint.cli", description="Waypoint map and routing CLI")
    p.add_argument("--nodes", default=NODES_PATH, help="Node CSV (id,lon,lat,name)")
    p.add_argument("--edges", default=EDGES_PATH, help="Edge CSV (from,to,weight); weights in metres, shorter ones switch A* off")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- routing ---
    s = sub.add_parser("route", help="Route between two node ids")
    s.add_argument("--start", type=int, required=True)
    s.add_argument("--goal", type=int, required=True)
    s.add_argument("--timeout", type=float, default=routing.DEFAULT_TIMEOUT)
    s.add_argument("--dijkstra", action="store_true", help="Disable the A* heuristic")
    s.set_defaults(func=cmd_route)

    s = sub.add_parser("route-coords", help="Route between two lon/lat positions")
    s.add_argument("--start-lon", type=float, required=True)
    s.add_argument("--start-lat", type=float, required=True)
    s.add_argument("--goal-lon", type=float, required=True)
    s.add_argument("--goal-lat", type=float, required=True)
    s.add_argument("--timeout", type=float, default=routing.DEFAULT_TIMEOUT)
    s.add_argument("--dijkstra", action="store_true", help="Disable the A* heuristic")
    s.set_defaults(func=cmd_route_coords)

    # --- geocoding ---
    s = sub.add_parser("closest", help="Nearest routable node to a position")
    s.add_argument("--lon", type=float, required=True)
    s.add_argument("--lat", type=float, required=True)
    s.set_defaults(func=cmd_closest)

    s = sub.add_parser("autocomplete", help="Place names starting with a prefix")
    s.add_argument("--prefix", required=True)
    s.set_defaults(func=cmd_autocomplete)

    s = sub.add_parser("locations", help="Nodes matching a place name")
    s.add_argument("--name", required=True)
    s.set_defaults(func=cmd_locations)

    # --- map tiles ---
    s = sub.add_parser("raster", help="Tiles covering a query box")
    s.add_argument("--ullon", type=float, required=True)
    s.add_argument("--ullat", type=float, required=True)
    s.add_argument("--lrlon", type=float, required=True)
    s.add_argument("--lrlat", type=float, required=True)
    s.add_argument("--width", type=float, required=True, help="Viewport width in pixels")
    s.add_argument("--height", type=float, required=True, help="Viewport height in pixels")
    s.set_defaults(func=cmd_raster)

    return p


# -------------------------------------------------------------------
# Entry point
# -------------------------------------------------------------------
def main(argv=None):
    """CLI entry point when invoked via `python -m waypoint.cli` or `waypoint`."""
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except (OSError, ValueError, KeyError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
