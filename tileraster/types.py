"""Type definitions and data models for tileraster."""

import math
from collections.abc import Mapping
from typing import NamedTuple

from pydantic import BaseModel, Field, ValidationError

from tileraster.exceptions import QueryError

# Request parameter names, as sent by map front ends.
QUERY_PARAM_KEYS = ("ullon", "ullat", "lrlon", "lrlat", "w", "h")


class RasterQuery(BaseModel):
    """A viewport request: a lon/lat box and the pixel size it is drawn at.

    Box orientation is deliberately left unchecked here; the selector
    reports malformed boxes as unsatisfiable queries.
    """

    model_config = {"frozen": True}

    ullon: float = Field(..., description="Upper-left longitude of the query box")
    ullat: float = Field(..., description="Upper-left latitude of the query box")
    lrlon: float = Field(..., description="Lower-right longitude of the query box")
    lrlat: float = Field(..., description="Lower-right latitude of the query box")
    width: float = Field(..., gt=0, description="Viewport width (pixels)")
    height: float = Field(..., gt=0, description="Viewport height (pixels)")

    @property
    def lon_dpp(self) -> float:
        """Longitude per pixel the viewport asks for."""
        return (self.lrlon - self.ullon) / self.width

    def is_well_formed(self) -> bool:
        """True when every coordinate is finite and the box runs west-east, north-south."""
        coords = (self.ullon, self.ullat, self.lrlon, self.lrlat)
        if not all(math.isfinite(c) for c in coords):
            return False
        return self.ullon < self.lrlon and self.ullat > self.lrlat

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "RasterQuery":
        """Build a query from a request parameter map.

        Args:
            params: Mapping holding ``ullon, ullat, lrlon, lrlat, w, h``

        Returns:
            RasterQuery instance

        Raises:
            QueryError: If a key is missing, not numeric, or the viewport is empty
        """
        missing = [key for key in QUERY_PARAM_KEYS if key not in params]
        if missing:
            raise QueryError("Missing raster parameters", details={"missing": ",".join(missing)})

        values = {}
        for key in QUERY_PARAM_KEYS:
            try:
                values[key] = float(params[key])
            except (TypeError, ValueError) as e:
                raise QueryError(
                    "Raster parameter is not a number",
                    details={"param": key, "value": params[key]},
                ) from e

        try:
            return cls(
                ullon=values["ullon"],
                ullat=values["ullat"],
                lrlon=values["lrlon"],
                lrlat=values["lrlat"],
                width=values["w"],
                height=values["h"],
            )
        except ValidationError as e:
            raise QueryError(
                "Viewport size must be positive",
                details={"w": values["w"], "h": values["h"]},
            ) from e


class TileId(NamedTuple):
    """Address of one tile in the pyramid."""

    depth: int
    col: int  # x offset from the root's west edge
    row: int  # y offset from the root's north edge

    def stem(self) -> str:
        """Tile name without extension, e.g. ``d2_x1_y3``."""
        return f"d{self.depth}_x{self.col}_y{self.row}"

    def filename(self, extension: str = ".png") -> str:
        """File name of the pre-rendered tile image."""
        return f"{self.stem()}{extension}"
