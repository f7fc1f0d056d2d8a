"""Unit tests for type definitions and models."""

import pytest
from pydantic import ValidationError

from tileraster.exceptions import QueryError
from tileraster.types import RasterQuery, TileId


class TestRasterQuery:
    """Tests for RasterQuery."""

    def test_valid_query(self):
        query = RasterQuery(ullon=-122.3, ullat=37.9, lrlon=-122.2, lrlat=37.8, width=1000, height=500)

        assert query.lon_dpp == pytest.approx(0.1 / 1000)
        assert query.is_well_formed()

    @pytest.mark.parametrize(("width", "height"), [(0, 100), (100, 0), (-5, 100)])
    def test_viewport_must_be_positive(self, width, height):
        with pytest.raises(ValidationError):
            RasterQuery(ullon=0, ullat=1, lrlon=1, lrlat=0, width=width, height=height)

    def test_inverted_box_is_accepted_but_not_well_formed(self):
        query = RasterQuery(ullon=1, ullat=0, lrlon=0, lrlat=1, width=10, height=10)

        assert query.lon_dpp < 0
        assert not query.is_well_formed()

    def test_frozen(self):
        query = RasterQuery(ullon=0, ullat=1, lrlon=1, lrlat=0, width=10, height=10)
        with pytest.raises(ValidationError):
            query.width = 20

    def test_from_params(self):
        params = {
            "ullon": "-122.241632",
            "ullat": "37.87655",
            "lrlon": "-122.24053",
            "lrlat": "37.87548",
            "w": "892.0",
            "h": "875.0",
        }

        query = RasterQuery.from_params(params)

        assert query.ullon == pytest.approx(-122.241632)
        assert query.lrlat == pytest.approx(37.87548)
        assert query.width == 892.0
        assert query.height == 875.0

    def test_from_params_missing_keys(self):
        with pytest.raises(QueryError) as exc_info:
            RasterQuery.from_params({"ullon": "0", "ullat": "1"})

        assert "lrlon" in exc_info.value.details["missing"]
        assert "w" in str(exc_info.value)

    def test_from_params_not_numeric(self):
        params = {"ullon": "west", "ullat": "1", "lrlon": "1", "lrlat": "0", "w": "10", "h": "10"}

        with pytest.raises(QueryError) as exc_info:
            RasterQuery.from_params(params)

        assert exc_info.value.details["param"] == "ullon"

    def test_from_params_empty_viewport(self):
        params = {"ullon": "0", "ullat": "1", "lrlon": "1", "lrlat": "0", "w": "0", "h": "10"}

        with pytest.raises(QueryError):
            RasterQuery.from_params(params)


class TestTileId:
    """Tests for TileId naming."""

    @pytest.mark.parametrize(
        ("tile", "name"),
        [
            (TileId(0, 0, 0), "d0_x0_y0.png"),
            (TileId(7, 84, 28), "d7_x84_y28.png"),
            (TileId(3, 10, 7), "d3_x10_y7.png"),
        ],
    )
    def test_filename(self, tile: TileId, name: str):
        assert tile.filename() == name

    def test_custom_extension(self):
        assert TileId(2, 1, 3).filename(".jpg") == "d2_x1_y3.jpg"
        assert TileId(2, 1, 3).stem() == "d2_x1_y3"
