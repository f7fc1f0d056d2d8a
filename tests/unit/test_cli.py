"""Unit tests for the command-line interface."""

import json
from pathlib import Path

import yaml
from typer.testing import CliRunner

from tileraster import __version__
from tileraster.cli import app

runner = CliRunner()

CAMPUS_ARGS = [
    "raster",
    "--ullon", "-122.241632",
    "--ullat", "37.87655",
    "--lrlon", "-122.24053",
    "--lrlat", "37.87548",
    "--width", "892",
    "--height", "875",
]


def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_raster_json():
    result = runner.invoke(app, CAMPUS_ARGS + ["--json"])

    assert result.exit_code == 0
    params = json.loads(result.output)
    assert params["query_success"] is True
    assert params["depth"] == 7
    assert params["render_grid"][0][0] == "d7_x84_y28.png"


def test_raster_table():
    result = runner.invoke(app, CAMPUS_ARGS)

    assert result.exit_code == 0
    assert "Depth 7" in result.output
    assert "d7_x86_y30.png" in result.output


def test_raster_failure_exits_nonzero():
    args = [
        "raster",
        "--ullon", "-122.2",
        "--ullat", "37.9",
        "--lrlon", "-122.3",
        "--lrlat", "37.8",
        "--width", "512",
        "--height", "512",
    ]

    result = runner.invoke(app, args)

    assert result.exit_code == 1
    assert "malformed_box" in result.output


def test_raster_rejects_empty_viewport():
    args = CAMPUS_ARGS[:-4] + ["--width", "0", "--height", "875"]

    result = runner.invoke(app, args)

    assert result.exit_code == 1


def test_pyramid():
    result = runner.invoke(app, ["pyramid"])

    assert result.exit_code == 0
    assert "Pyramid Levels" in result.output


def test_tile():
    result = runner.invoke(app, ["tile", "0", "0", "0"])

    assert result.exit_code == 0
    assert "d0_x0_y0.png" in result.output


def test_tile_outside_pyramid():
    result = runner.invoke(app, ["tile", "1", "5", "0"])
    assert result.exit_code == 1


def test_config_option(tmp_path: Path, monkeypatch):
    config_file = tmp_path / "tileraster.yaml"
    config_file.write_text(yaml.dump({"root": {"max_depth": 2}}))
    # Restored on teardown; the --config callback writes the same variable
    monkeypatch.setenv("TILERASTER_CONFIG_PATH", str(config_file))

    result = runner.invoke(app, ["--config", str(config_file)] + CAMPUS_ARGS + ["--json"])

    assert result.exit_code == 0
    assert json.loads(result.output)["depth"] == 2
