"""
Map tile selection.

The map image is a quad-tree of square PNG tiles. Depth 0 is one tile
covering the whole root bounding box; each extra level splits every tile
into four, down to `MAX_DEPTH`. Tile files are named
``d{depth}_x{column}_y{row}.png`` with column 0 at the west edge and row 0
at the north edge.

`raster_params` picks the depth and the block of tiles that cover a query
box for a given viewport width. It only does the arithmetic; fetching and
compositing the images is left to whatever serves them.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

# Bounding box of the depth-0 tile (upper-left / lower-right corners).
ROOT_ULLAT = 37.892195547244356
ROOT_ULLON = -122.2998046875
ROOT_LRLAT = 37.82280243352756
ROOT_LRLON = -122.2119140625

# Edge length of one tile image, in pixels.
TILE_SIZE = 256

# Deepest level of the tile pyramid.
MAX_DEPTH = 7

RootBox = Tuple[float, float, float, float]
ROOT_BOX: RootBox = (ROOT_ULLON, ROOT_ULLAT, ROOT_LRLON, ROOT_LRLAT)


def query_fail() -> Dict[str, Any]:
    """Result returned for a query box that cannot be rastered."""
    return {
        "render_grid": None,
        "raster_ul_lon": 0,
        "raster_ul_lat": 0,
        "raster_lr_lon": 0,
        "raster_lr_lat": 0,
        "depth": 0,
        "query_success": False,
    }


def optimal_depth(lon_dpp: float, root: RootBox = ROOT_BOX, tile_size: int = TILE_SIZE) -> int:
    """
    Shallowest depth whose longitude-per-pixel does not exceed `lon_dpp`.

    Each level halves the LonDPP of the one above it, so the depth is
    ``ceil(log2(root_lon_dpp / lon_dpp))``, clamped to [0, MAX_DEPTH].
    """
    ullon, _, lrlon, _ = root
    root_dpp = (lrlon - ullon) / tile_size
    depth = math.ceil(math.log2(root_dpp / lon_dpp))
    return max(0, min(MAX_DEPTH, depth))


def _tile_index(depth: int, value: float, root_ul: float, root_lr: float, upper_left: bool) -> int:
    """Tile boundary index of `value` along one axis.

    Upper-left corners round down to the tile containing them, lower-right
    corners round up to the boundary after them, so the block always covers
    the query.
    """
    tiles = 2 ** depth
    offset = abs(value - root_ul) / (abs(root_ul - root_lr) / tiles)
    if upper_left:
        return min(math.floor(offset), tiles - 1)
    return min(math.ceil(offset), tiles)


def _tile_edge(depth: int, index: int, root_ul: float, root_lr: float) -> float:
    """Coordinate of tile boundary `index` along one axis (lon grows east, lat shrinks south)."""
    return root_ul + (root_lr - root_ul) * index / 2 ** depth


def raster_params(
    ullon: float,
    ullat: float,
    lrlon: float,
    lrlat: float,
    width: float,
    height: float,
    root: RootBox = ROOT_BOX,
) -> Dict[str, Any]:
    """
    Choose the tiles that cover a query box at the viewport's resolution.

    Parameters:
        ullon, ullat: Upper-left corner of the query box.
        lrlon, lrlat: Lower-right corner of the query box.
        width, height: Viewport size in pixels. Only `width` affects the
            depth, since tiles are square in pixels.
        root: Bounding box of the whole map.

    Returns:
        A dict with keys ``render_grid`` (rows of tile file names, north to
        south), ``raster_ul_lon``, ``raster_ul_lat``, ``raster_lr_lon``,
        ``raster_lr_lat`` (corners of the assembled image), ``depth`` and
        ``query_success``. A box outside the root, an inverted box or a
        non-positive viewport gives :func:`query_fail`.
    """
    root_ullon, root_ullat, root_lrlon, root_lrlat = root
    if ullon < root_ullon or ullat > root_ullat or lrlon > root_lrlon or lrlat < root_lrlat:
        logger.debug("raster query outside root box: %s", (ullon, ullat, lrlon, lrlat))
        return query_fail()
    if ullon >= lrlon or ullat <= lrlat or width <= 0 or height <= 0:
        logger.debug("raster query box or viewport is empty: %s", (ullon, ullat, lrlon, lrlat, width, height))
        return query_fail()

    depth = optimal_depth((lrlon - ullon) / width, root)

    x0 = _tile_index(depth, ullon, root_ullon, root_lrlon, True)
    x1 = _tile_index(depth, lrlon, root_ullon, root_lrlon, False)
    y0 = _tile_index(depth, ullat, root_ullat, root_lrlat, True)
    y1 = _tile_index(depth, lrlat, root_ullat, root_lrlat, False)

    grid: List[List[str]] = [
        [f"d{depth}_x{x}_y{y}.png" for x in range(x0, x1)]
        for y in range(y0, y1)
    ]
    return {
        "render_grid": grid,
        "raster_ul_lon": _tile_edge(depth, x0, root_ullon, root_lrlon),
        "raster_ul_lat": _tile_edge(depth, y0, root_ullat, root_lrlat),
        "raster_lr_lon": _tile_edge(depth, x1, root_ullon, root_lrlon),
        "raster_lr_lat": _tile_edge(depth, y1, root_ullat, root_lrlat),
        "depth": depth,
        "query_success": True,
    }
