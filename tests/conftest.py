"""Pytest configuration and shared fixtures."""

import pytest

from tileraster.config import RootPyramid
from tileraster.types import RasterQuery


@pytest.fixture
def root() -> RootPyramid:
    """Default root pyramid (Berkeley basemap extent)."""
    return RootPyramid()


@pytest.fixture
def unit_root() -> RootPyramid:
    """Root spanning [0, 1] x [0, 1] with 256px tiles, easy to reason about."""
    return RootPyramid(ullon=0.0, ullat=1.0, lrlon=1.0, lrlat=0.0, tile_size_px=256)


@pytest.fixture
def campus_query() -> RasterQuery:
    """A small viewport query well inside the default root."""
    return RasterQuery(
        ullon=-122.241632,
        ullat=37.87655,
        lrlon=-122.24053,
        lrlat=37.87548,
        width=892,
        height=875,
    )


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Reset config singleton after each test."""
    from tileraster.config import reset_config
    monkeypatch.delenv("TILERASTER_CONFIG_PATH", raising=False)
    yield
    reset_config()
