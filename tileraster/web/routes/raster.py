"""Raster query endpoints."""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from tileraster.config import get_config
from tileraster.core.rasterer import select, tile_bounds
from tileraster.exceptions import QueryError, TileError
from tileraster.types import RasterQuery, TileId
from tileraster.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/raster")
async def get_raster(request: Request):
    """Select the tiles covering a query box.

    Expects ``ullon, ullat, lrlon, lrlat, w, h`` as query parameters. Both
    outcomes return 200; ``query_success`` tells them apart.
    """
    try:
        query = RasterQuery.from_params(request.query_params)
    except QueryError as e:
        logger.warning("Bad raster request", error=str(e))
        return JSONResponse(status_code=400, content={"error": "invalid_query", "detail": str(e)})

    result = select(query, get_config().root)
    if not result.success:
        logger.info("Raster query not satisfiable", reason=result.reason)
    return result.to_params()


@router.get("/raster/tiles/{depth}/{col}/{row}")
async def get_tile_info(depth: int, col: int, row: int):
    """Name and geographic bounds of one tile."""
    root = get_config().root
    tile = TileId(depth, col, row)
    try:
        ullon, ullat, lrlon, lrlat = tile_bounds(tile, root)
    except TileError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "name": tile.filename(root.tile_extension),
        "depth": depth,
        "col": col,
        "row": row,
        "ullon": ullon,
        "ullat": ullat,
        "lrlon": lrlon,
        "lrlat": lrlat,
    }
