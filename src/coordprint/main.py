"""
coordprint command line.

Usage:
    coordprint format 22.200000000000003 --precision 13
    coordprint wkt 0101000020E6100000000000000000F03F0000000000000040
    psql -Atc "select geom from roads" | coordprint geojson --crs short --bbox
"""
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import click

from .core.constants import DEFAULT_PRECISION, GEOJSON_PRECISION, WKT_PRECISION, NDR, VERSION
from .core.errors import CoordprintError
from .core.geojson import write_geojson
from .core.parser import parse_hex, parse_wkb, read_header
from .core.srs import SpatialRefCache, load_catalog
from .core.writer import normalize_wkb
from .core.wkt import write_wkt
from .utils.formatting import render_coordinate

logger = logging.getLogger("coordprint")


def configure_logging(verbose: bool = False) -> None:
    # Logs go to stderr; stdout carries the formatted output
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


@contextmanager
def user_errors() -> Iterator[None]:
    """Report library errors as CLI errors (exit status 1) instead of tracebacks."""
    try:
        yield
    except (CoordprintError, ValueError, OSError) as exc:
        logger.debug("Command failed", exc_info=True)
        raise click.ClickException(str(exc)) from exc


def read_inputs(source: str) -> Iterator[bytes]:
    """Hex WKB from the argument, or one value per line from stdin for '-'."""
    if source != '-':
        yield parse_hex(source)
        return
    for line in click.get_text_stream('stdin'):
        if line.strip():
            yield parse_hex(line)


precision_option = click.option(
    "--precision",
    "-p",
    type=click.IntRange(min=0),
    envvar="COORDPRINT_PRECISION",
    help="Maximum digits after the decimal point.",
)


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, envvar="COORDPRINT_VERBOSE",
              help="Enable debug logging.")
@click.version_option(version=VERSION, prog_name="coordprint")
def cli(verbose: bool):
    """Print coordinates and geometries in their shortest round-trip form."""
    configure_logging(verbose)


@cli.command("format")
@click.argument("values", nargs=-1, required=True, type=float)
@precision_option
@click.option("--explain", is_flag=True, default=False,
              help="Show whether precision rounding rewrote the shortest form.")
def format_command(values, precision: Optional[int], explain: bool):
    """Format floating-point VALUES (use -- before negative numbers)."""
    precision = DEFAULT_PRECISION if precision is None else precision
    for value in values:
        rendered = render_coordinate(value, precision)
        if explain:
            state = "rounded" if rendered.transformed else "shortest"
            click.echo(f"{rendered.value}\t{state}")
        else:
            click.echo(rendered.value)


@cli.command("wkt")
@click.argument("wkb", default="-")
@precision_option
@click.option("--extended", "-e", is_flag=True, default=False,
              help="Write EWKT (SRID prefix, POINTM style tags).")
def wkt_command(wkb: str, precision: Optional[int], extended: bool):
    """Print hex (E)WKB as WKT. WKB defaults to '-' (one value per stdin line)."""
    precision = WKT_PRECISION if precision is None else precision
    with user_errors():
        for data in read_inputs(wkb):
            click.echo(write_wkt(parse_wkb(data), precision, extended=extended))


@cli.command("geojson")
@click.argument("wkb", default="-")
@precision_option
@click.option("--bbox", is_flag=True, default=False, help="Include a bbox member.")
@click.option(
    "--crs",
    type=click.Choice(["short", "long"], case_sensitive=False),
    default=None,
    help="Include a crs member for geometries that carry an SRID.",
)
@click.option(
    "--catalog",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    envvar="COORDPRINT_CATALOG",
    default=None,
    help='JSON file of extra spatial references, {"srid": "AUTH:code"}.',
)
def geojson_command(wkb: str, precision: Optional[int], bbox: bool, crs: Optional[str],
                    catalog: Optional[Path]):
    """Print hex (E)WKB as GeoJSON. WKB defaults to '-' (one value per stdin line)."""
    precision = GEOJSON_PRECISION if precision is None else precision
    with user_errors():
        # one cache for the whole run; consecutive rows usually share an SRID
        srs_cache = load_catalog(catalog) if catalog else SpatialRefCache()
        for data in read_inputs(wkb):
            geom = parse_wkb(data)
            click.echo(write_geojson(geom, precision, bbox=bbox,
                                     crs=crs.lower() if crs else None, srs_cache=srs_cache))
        logger.debug("Spatial reference cache: %d hits, %d misses", srs_cache.hits, srs_cache.misses)


@cli.command("header")
@click.argument("wkb", default="-")
def header_command(wkb: str):
    """Describe the geometry header without decoding coordinates."""
    with user_errors():
        for data in read_inputs(wkb):
            h = read_header(data)
            dims = "XY" + ("Z" if h.has_z else "") + ("M" if h.has_m else "")
            order = "NDR" if h.byte_order == NDR else "XDR"
            srid = h.srid if h.srid is not None else "-"
            click.echo(f"{h.kind}\t{dims}\t{order}\tsrid={srid}")


@cli.command("normalize")
@click.argument("wkb", default="-")
def normalize_command(wkb: str):
    """Rewrite hex (E)WKB as little-endian EWKB."""
    with user_errors():
        for data in read_inputs(wkb):
            result = normalize_wkb(data)
            if not result.transformed:
                logger.debug("Already canonical")
            click.echo(result.value.hex().upper())


@cli.command("plot")
@click.argument("wkb", default="-")
@precision_option
@click.option("--labels", is_flag=True, default=False, help="Annotate vertices with their coordinates.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Save the figure instead of opening a window.",
)
def plot_command(wkb: str, precision: Optional[int], labels: bool, output: Optional[Path]):
    """Preview the first geometry with matplotlib."""
    from .utils.plotting import plot_geometry

    precision = WKT_PRECISION if precision is None else precision
    with user_errors():
        data = next(read_inputs(wkb), None)
        if data is None:
            raise click.UsageError("no geometry given")
        fig = plot_geometry(parse_wkb(data), precision=precision,
                            label_vertices=labels, show=output is None)
        if fig is not None and output is not None:
            fig.savefig(output)
            logger.info("Saved plot to %s", output)


def main():
    cli(prog_name="coordprint")


if __name__ == "__main__":
    main()
