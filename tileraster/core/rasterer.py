"""Tile selection for viewport rastering.

Given a query box and the viewport it is drawn into, pick the coarsest
pyramid depth whose longitude-per-pixel is at least as fine as the
viewport's, then the rectangular block of tiles at that depth covering the
box. The front end stitches the tiles row by row into one image spanning
the achieved bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Final, Literal, Union

from tileraster.config import RootPyramid, get_config
from tileraster.exceptions import TileError
from tileraster.types import RasterQuery, TileId
from tileraster.utils.logging import get_logger

logger = get_logger(__name__)

FailureReason = Literal["malformed_box", "empty_grid", "outside_root"]

MALFORMED_BOX: Final[FailureReason] = "malformed_box"
EMPTY_GRID: Final[FailureReason] = "empty_grid"
OUTSIDE_ROOT: Final[FailureReason] = "outside_root"

# Slack, in tile units, for edges that land on a tile boundary up to rounding.
EDGE_EPSILON: Final[float] = 1e-9


@dataclass(frozen=True)
class RasterSuccess:
    """Tiles to stitch and the geographic extent of the stitched image."""

    depth: int
    tile_grid: tuple[tuple[TileId, ...], ...]
    ullon: float
    ullat: float
    lrlon: float
    lrlat: float
    extension: str = ".png"

    @property
    def success(self) -> bool:
        return True

    @property
    def render_grid(self) -> list[list[str]]:
        """Tile file names, rows north to south, columns west to east."""
        return [[tile.filename(self.extension) for tile in row] for row in self.tile_grid]

    @property
    def shape(self) -> tuple[int, int]:
        """(rows, columns) of the tile grid."""
        return len(self.tile_grid), len(self.tile_grid[0])

    def to_params(self) -> dict:
        """Response parameters in the shape map front ends consume."""
        return {
            "render_grid": self.render_grid,
            "raster_ul_lon": self.ullon,
            "raster_ul_lat": self.ullat,
            "raster_lr_lon": self.lrlon,
            "raster_lr_lat": self.lrlat,
            "depth": self.depth,
            "query_success": True,
        }


@dataclass(frozen=True)
class RasterFailure:
    """The query cannot be served from the pyramid."""

    reason: FailureReason

    @property
    def success(self) -> bool:
        return False

    def to_params(self) -> dict:
        return {"query_success": False}


RasterResult = Union[RasterSuccess, RasterFailure]


def select_depth(query_lon_dpp: float, root: RootPyramid) -> int:
    """Return the coarsest depth at least as sharp as ``query_lon_dpp``.

    Falls back to ``root.max_depth`` when no level is fine enough, which
    also covers negative and NaN requests.
    """
    for depth in range(root.max_depth + 1):
        if root.lon_dpp / 2 ** depth <= query_lon_dpp:
            return depth
    return root.max_depth


def tile_size_at(depth: int, root: RootPyramid) -> tuple[float, float]:
    """(lon, lat) extent of a single tile at ``depth``."""
    scale = 2 ** depth
    return root.lon_delta / scale, root.lat_delta / scale


def tile_bounds(tile: TileId, root: RootPyramid) -> tuple[float, float, float, float]:
    """Geographic bounds of one tile as (ullon, ullat, lrlon, lrlat).

    Raises:
        TileError: If the tile does not exist in the pyramid
    """
    if not 0 <= tile.depth <= root.max_depth:
        raise TileError("Depth outside pyramid", details={"depth": tile.depth, "max_depth": root.max_depth})
    side = root.tiles_per_side(tile.depth)
    if not (0 <= tile.col < side and 0 <= tile.row < side):
        raise TileError(
            "Tile index outside pyramid",
            details={"col": tile.col, "row": tile.row, "tiles_per_side": side},
        )
    lon_delta, lat_delta = tile_size_at(tile.depth, root)
    return (
        root.ullon + tile.col * lon_delta,
        root.ullat - tile.row * lat_delta,
        root.ullon + (tile.col + 1) * lon_delta,
        root.ullat - (tile.row + 1) * lat_delta,
    )


def pyramid_levels(root: RootPyramid) -> list[dict]:
    """Per-depth tile geometry, shallowest first."""
    levels = []
    for depth in range(root.max_depth + 1):
        lon_delta, lat_delta = tile_size_at(depth, root)
        levels.append(
            {
                "depth": depth,
                "tiles_per_side": root.tiles_per_side(depth),
                "tile_lon_delta": lon_delta,
                "tile_lat_delta": lat_delta,
                "lon_dpp": root.lon_dpp / 2 ** depth,
            }
        )
    return levels


def _first_index(offset: float) -> int:
    return math.floor(offset + EDGE_EPSILON)


def _last_index(offset: float) -> int:
    # An edge sitting on a tile boundary closes the tile before it.
    return math.ceil(offset - EDGE_EPSILON) - 1


def select(query: RasterQuery, root: RootPyramid | None = None) -> RasterResult:
    """Choose the tiles needed to draw ``query``.

    Args:
        query: Query box and viewport size
        root: Pyramid geometry; the configured root when omitted

    Returns:
        RasterSuccess with depth, tile grid and achieved bounds, or
        RasterFailure when the box is malformed or leaves the pyramid
    """
    if root is None:
        root = get_config().root

    depth = select_depth(query.lon_dpp, root)

    if not query.is_well_formed():
        logger.debug("Raster query rejected", reason=MALFORMED_BOX, query=query.model_dump())
        return RasterFailure(MALFORMED_BOX)

    lon_delta, lat_delta = tile_size_at(depth, root)
    offsets = (
        (query.ullon - root.ullon) / lon_delta,
        (query.lrlon - root.ullon) / lon_delta,
        (root.ullat - query.ullat) / lat_delta,
        (root.ullat - query.lrlat) / lat_delta,
    )
    if not all(math.isfinite(o) for o in offsets):
        logger.debug("Raster query rejected", reason=OUTSIDE_ROOT, depth=depth)
        return RasterFailure(OUTSIDE_ROOT)

    left = _first_index(offsets[0])
    right = _last_index(offsets[1])
    up = _first_index(offsets[2])
    down = _last_index(offsets[3])

    if right < left or down < up:
        logger.debug("Raster query rejected", reason=EMPTY_GRID, depth=depth)
        return RasterFailure(EMPTY_GRID)

    # Index bounds are the exact form of "achieved envelope inside root".
    side = root.tiles_per_side(depth)
    if left < 0 or up < 0 or right >= side or down >= side:
        logger.debug(
            "Raster query rejected",
            reason=OUTSIDE_ROOT,
            depth=depth,
            cols=(left, right),
            rows=(up, down),
        )
        return RasterFailure(OUTSIDE_ROOT)

    tile_grid = tuple(
        tuple(TileId(depth, col, row) for col in range(left, right + 1))
        for row in range(up, down + 1)
    )

    result = RasterSuccess(
        depth=depth,
        tile_grid=tile_grid,
        ullon=root.ullon + left * lon_delta,
        ullat=root.ullat - up * lat_delta,
        lrlon=root.ullon + (right + 1) * lon_delta,
        lrlat=root.ullat - (down + 1) * lat_delta,
        extension=root.tile_extension,
    )
    logger.debug("Raster query selected", depth=depth, rows=down - up + 1, cols=right - left + 1)
    return result


class TileSelector:
    """Selector bound to one pyramid, for callers that hold it per process."""

    def __init__(self, root: RootPyramid | None = None):
        self.root = root if root is not None else get_config().root

    def select(self, query: RasterQuery) -> RasterResult:
        return select(query, self.root)

    def tile_bounds(self, tile: TileId) -> tuple[float, float, float, float]:
        return tile_bounds(tile, self.root)
