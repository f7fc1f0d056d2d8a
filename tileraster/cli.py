"""Command-line interface for tileraster."""

import json
import os
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.console import Console
from rich.table import Table

from tileraster import __version__
from tileraster.config import get_config
from tileraster.core.rasterer import pyramid_levels, select, tile_bounds
from tileraster.exceptions import ConfigurationError, TileError
from tileraster.types import RasterQuery, TileId
from tileraster.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="tileraster",
    help="Pick the pyramid tiles a map viewport needs",
    add_completion=False
)

console = Console()
logger = get_logger(__name__)


def version_callback(value: bool):
    """Show version and exit."""
    if value:
        print(f"tileraster v{__version__}")
        raise typer.Exit()


def _load_config():
    try:
        return get_config()
    except (ConfigurationError, FileNotFoundError) as e:
        console.print(f"[red]✗ Could not load configuration: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-V",
        help="Enable verbose logging"
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file"
    )
):
    """tileraster - quadtree tile selection for map viewports."""
    log_level = "DEBUG" if verbose else "INFO"
    configure_logging(level=log_level, format_type="console")

    if config_file:
        os.environ["TILERASTER_CONFIG_PATH"] = str(config_file)


@app.command()
def raster(
    ullon: float = typer.Option(..., "--ullon", help="Upper-left longitude"),
    ullat: float = typer.Option(..., "--ullat", help="Upper-left latitude"),
    lrlon: float = typer.Option(..., "--lrlon", help="Lower-right longitude"),
    lrlat: float = typer.Option(..., "--lrlat", help="Lower-right latitude"),
    width: float = typer.Option(..., "--width", "-w", help="Viewport width (pixels)"),
    height: float = typer.Option(..., "--height", "-h", help="Viewport height (pixels)"),
    as_json: bool = typer.Option(False, "--json", help="Print the response parameters as JSON"),
):
    """Select the tiles covering a query box."""
    config = _load_config()

    try:
        query = RasterQuery(
            ullon=ullon, ullat=ullat, lrlon=lrlon, lrlat=lrlat, width=width, height=height
        )
    except ValueError as e:
        console.print(f"[red]Invalid query: {e}[/red]")
        raise typer.Exit(1)

    result = select(query, config.root)

    if as_json:
        typer.echo(json.dumps(result.to_params(), indent=2))
        if not result.success:
            raise typer.Exit(1)
        return

    if not result.success:
        console.print(f"[red]✗ Query not satisfiable ({result.reason})[/red]")
        raise typer.Exit(1)

    rows, cols = result.shape
    console.print(f"[bold green]✓ Depth {result.depth}[/bold green], {rows}x{cols} tiles\n")

    bounds = Table(title="Raster Bounds")
    bounds.add_column("Corner", style="cyan")
    bounds.add_column("Longitude", style="magenta")
    bounds.add_column("Latitude", style="magenta")
    bounds.add_row("Upper left", f"{result.ullon:.10f}", f"{result.ullat:.10f}")
    bounds.add_row("Lower right", f"{result.lrlon:.10f}", f"{result.lrlat:.10f}")
    console.print(bounds)

    grid = Table(title="Render Grid", show_header=False)
    for _ in range(cols):
        grid.add_column()
    for row in result.render_grid:
        grid.add_row(*row)
    console.print(grid)


@app.command()
def pyramid():
    """Show the tile geometry of every depth."""
    config = _load_config()
    root = config.root

    console.print(
        f"[bold blue]Root[/bold blue] ({root.ullon}, {root.ullat}) - ({root.lrlon}, {root.lrlat}), "
        f"{root.tile_size_px}px tiles"
    )

    table = Table(title="Pyramid Levels")
    table.add_column("Depth", style="cyan", justify="right")
    table.add_column("Tiles/side", justify="right")
    table.add_column("Tile lon", style="magenta")
    table.add_column("Tile lat", style="magenta")
    table.add_column("LonDPP", style="green")

    for level in pyramid_levels(root):
        table.add_row(
            str(level["depth"]),
            str(level["tiles_per_side"]),
            f"{level['tile_lon_delta']:.10f}",
            f"{level['tile_lat_delta']:.10f}",
            f"{level['lon_dpp']:.3e}",
        )

    console.print(table)


@app.command()
def tile(
    depth: int = typer.Argument(..., help="Tile depth"),
    col: int = typer.Argument(..., help="Tile column (x)"),
    row: int = typer.Argument(..., help="Tile row (y)"),
):
    """Show the geographic bounds of one tile."""
    config = _load_config()
    tile_id = TileId(depth, col, row)

    try:
        ullon, ullat, lrlon, lrlat = tile_bounds(tile_id, config.root)
    except TileError as e:
        console.print(f"[red]✗ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{tile_id.filename(config.root.tile_extension)}[/bold]")
    console.print(f"  upper left:  ({ullon:.10f}, {ullat:.10f})")
    console.print(f"  lower right: ({lrlon:.10f}, {lrlat:.10f})")


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
):
    """Run the web API."""
    import uvicorn

    config = _load_config()
    bind_host = host or config.server.host
    bind_port = port or config.server.port
    console.print(f"[bold blue]Serving on http://{bind_host}:{bind_port}[/bold blue]")
    uvicorn.run(
        "tileraster.web.api:app",
        host=bind_host,
        port=bind_port,
        reload=config.server.reload,
        log_level="info",
    )


if __name__ == "__main__":
    app()
