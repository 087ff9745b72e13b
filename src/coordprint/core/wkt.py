"""Well-known text output (ISO WKT and PostGIS EWKT)."""
from .constants import WKT_NAMES, WKT_PRECISION
from .models import Geometry
from ..utils.formatting import check_precision, format_ordinates


def _coord_list(coords, precision: int) -> str:
    return ','.join(format_ordinates(c, precision) for c in coords)


def _body(geom: Geometry, precision: int, extended: bool) -> str:
    """Text between the outer parentheses of a non-empty geometry."""
    if geom.kind in ('point', 'linestring'):
        return _coord_list(geom.coords, precision)
    if geom.kind == 'polygon':
        return ','.join(f'({_coord_list(r, precision)})' for r in geom.rings if r)
    if geom.kind == 'geometrycollection':
        return ','.join(_tagged(p, precision, extended) for p in geom.parts)
    # multi*: each member in its own parentheses
    return ','.join(
        'EMPTY' if p.is_empty else f'({_body(p, precision, extended)})'
        for p in geom.parts
    )


def _tagged(geom: Geometry, precision: int, extended: bool) -> str:
    name = WKT_NAMES[geom.kind]
    if extended:
        # EWKT spells out only M-only geometries; Z is implied by arity
        tag = name + ('M' if geom.has_m and not geom.has_z else '')
    else:
        dim = ('Z' if geom.has_z else '') + ('M' if geom.has_m else '')
        tag = f'{name} {dim} ' if dim else name
    if geom.is_empty:
        return f'{tag.rstrip()} EMPTY'
    return f'{tag}({_body(geom, precision, extended)})'


def write_wkt(geom: Geometry, precision: int = WKT_PRECISION, extended: bool = False) -> str:
    """
    Renders ``geom`` as WKT, ordinates printed with ``format_coordinate``.

    ``extended=True`` gives EWKT, prefixed with ``SRID=n;`` when the geometry
    carries an SRID.
    """
    precision = check_precision(precision)
    text = _tagged(geom, precision, extended)
    if extended and geom.srid is not None:
        return f'SRID={geom.srid};{text}'
    return text
