"""
Command line interface for point conversion.

    eproj convert EPSG:25832 EPSG:4979 691045.828 5336014.506 534.671
    eproj list
    eproj check
"""

import typer

from common.exceptions import EprojError
from common.logging_config import get_logger
from common.types import Coordinate3
from geospatial.projections import Projector
from geospatial.srid import SpatialReferenceIdentifier

logger = get_logger(__name__)

app = typer.Typer(help="Convert 3D coordinates between spatial reference systems.", no_args_is_help=True)

# Sample point in ETRS89 / UTM zone 32N (Munich area)
CHECK_POINT = Coordinate3(691045.828, 5336014.506, 534.671)


def _format(coordinate: Coordinate3) -> str:
    return f"{coordinate.x:.9f} {coordinate.y:.9f} {coordinate.z:.4f}"


def _fail(error: EprojError) -> None:
    typer.secho(f"error: {error}", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@app.command()
def convert(
    source: str = typer.Argument(..., help="Source SRS, e.g. EPSG:25832"),
    target: str = typer.Argument(..., help="Target SRS, e.g. EPSG:4979"),
    x: float = typer.Argument(..., help="Longitude or X"),
    y: float = typer.Argument(..., help="Latitude or Y"),
    z: float = typer.Argument(0.0, help="Height or Z"),
    degrees: bool = typer.Option(
        True, "--degrees/--radians",
        help="Unit of geographic input and output axes"
    ),
):
    """Convert one coordinate from SOURCE into TARGET."""
    try:
        projector = Projector(source, target)
        point = Coordinate3(x, y, z)
        if degrees and projector.source.is_geographic:
            point = point.to_radians()
        with projector:
            result = projector.convert(point)
    except EprojError as e:
        _fail(e)

    if degrees and projector.target.is_geographic:
        result = result.to_degrees()
    typer.echo(_format(result))


@app.command("list")
def list_systems():
    """List the supported spatial reference systems."""
    for srid in SpatialReferenceIdentifier:
        typer.echo(f"{srid.as_str():<12} {srid.kind:<11} {srid.description}")


@app.command()
def check():
    """Convert a sample EPSG:25832 point to EPSG:4979 and print it."""
    try:
        with Projector(SpatialReferenceIdentifier.Epsg25832, SpatialReferenceIdentifier.Epsg4979) as projector:
            result = projector.convert(CHECK_POINT)
    except EprojError as e:
        _fail(e)

    logger.debug(f"Check conversion of {CHECK_POINT} returned {result}")
    typer.echo(f"result: {_format(result.to_degrees())}")


def main():
    app()


if __name__ == "__main__":
    main()
