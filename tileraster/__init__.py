"""tileraster - pick the pyramid tiles a map viewport needs."""

__version__ = "0.1.0"
__author__ = "tileraster Development Team"
__description__ = "Quadtree tile selection for rastering map viewports"

# Export commonly used types and functions
from tileraster.config import Config, RootPyramid, get_config
from tileraster.core.rasterer import (
    RasterFailure,
    RasterResult,
    RasterSuccess,
    TileSelector,
    select,
)
from tileraster.types import RasterQuery, TileId
from tileraster.utils.logging import configure_logging, get_logger

__all__ = [
    "Config",
    "RootPyramid",
    "get_config",
    "RasterQuery",
    "TileId",
    "RasterResult",
    "RasterSuccess",
    "RasterFailure",
    "TileSelector",
    "select",
    "get_logger",
    "configure_logging",
]
