"""Pyramid geometry endpoint."""

from fastapi import APIRouter

from tileraster.config import get_config
from tileraster.core.rasterer import pyramid_levels

router = APIRouter()


@router.get("/pyramid")
async def get_pyramid():
    """Root bounds and the tile geometry of every depth."""
    root = get_config().root
    return {
        "root": {
            "ullon": root.ullon,
            "ullat": root.ullat,
            "lrlon": root.lrlon,
            "lrlat": root.lrlat,
            "tile_size_px": root.tile_size_px,
            "lon_dpp": root.lon_dpp,
        },
        "max_depth": root.max_depth,
        "levels": pyramid_levels(root),
    }
