"""GeoJSON output.

Built as text rather than through ``json.dumps`` so that every number keeps
the exact spelling the coordinate formatter gives it.
"""
import math
from typing import List, Optional

from .constants import GEOJSON_CRS_STYLES, GEOJSON_NAMES, GEOJSON_PRECISION
from .errors import NonFiniteCoordinateError
from .models import Coordinate, Geometry
from .srs import SpatialRefCache
from ..utils.formatting import check_precision, format_coordinate


def _number(v: float, precision: int) -> str:
    if not math.isfinite(v):
        raise NonFiniteCoordinateError(f"GeoJSON cannot carry the ordinate {v!r}")
    return format_coordinate(v, precision)


def _position(c: Coordinate, geom: Geometry, precision: int) -> str:
    # x, y and optionally z; a measure has no place in a GeoJSON position
    n = 3 if geom.has_z else 2
    return '[' + ','.join(_number(v, precision) for v in c[:n]) + ']'


def _positions(coords, geom: Geometry, precision: int) -> str:
    return '[' + ','.join(_position(c, geom, precision) for c in coords) + ']'


def _coordinates(geom: Geometry, precision: int) -> str:
    if geom.kind == 'point':
        return _position(geom.coords[0], geom, precision) if geom.coords else '[]'
    if geom.kind == 'linestring':
        return _positions(geom.coords, geom, precision)
    if geom.kind == 'polygon':
        return '[' + ','.join(_positions(r, geom, precision) for r in geom.rings if r) + ']'
    # multi*: members that are empty are left out
    return '[' + ','.join(
        _coordinates(p, precision) for p in geom.parts if not p.is_empty
    ) + ']'


def _bbox(geom: Geometry, precision: int) -> Optional[str]:
    bounds = geom.bounds()
    if bounds is None:
        return None
    n = 3 if geom.has_z else 2
    mins, maxs = bounds
    values = list(mins[:n]) + list(maxs[:n])
    return '[' + ','.join(_number(v, precision) for v in values) + ']'


def _crs(geom: Geometry, crs: str, srs_cache: SpatialRefCache) -> str:
    ref = srs_cache.get(geom.srid)
    name = ref.short_name if crs == 'short' else ref.long_name
    return '{"type":"name","properties":{"name":"%s"}}' % name


def _object(geom: Geometry, precision: int, bbox: bool, crs: Optional[str],
            srs_cache: Optional[SpatialRefCache]) -> str:
    members: List[str] = ['"type":"%s"' % GEOJSON_NAMES[geom.kind]]
    if crs is not None and geom.srid is not None:
        members.append('"crs":' + _crs(geom, crs, srs_cache))
    if bbox:
        box = _bbox(geom, precision)
        if box is not None:
            members.append('"bbox":' + box)
    if geom.kind == 'geometrycollection':
        members.append('"geometries":[' + ','.join(
            _object(p, precision, bbox, None, None) for p in geom.parts
        ) + ']')
    else:
        members.append('"coordinates":' + _coordinates(geom, precision))
    return '{' + ','.join(members) + '}'


def write_geojson(geom: Geometry, precision: int = GEOJSON_PRECISION, bbox: bool = False,
                  crs: Optional[str] = None, srs_cache: Optional[SpatialRefCache] = None) -> str:
    """Renders ``geom`` as a compact GeoJSON geometry object.

    Args:
        geom: Geometry to print; M ordinates are dropped.
        precision: Maximum digits after the decimal point (default 9).
        bbox: Add a ``bbox`` member, to collection members as well.
        crs: ``'short'`` (``EPSG:4326``) or ``'long'``
            (``urn:ogc:def:crs:EPSG::4326``) to add a ``crs`` member for
            geometries carrying an SRID.
        srs_cache: Spatial reference cache to resolve the SRID with. Pass the
            same cache across calls to share lookups; a fresh one over the
            built-in catalog is used when omitted.

    Raises:
        NonFiniteCoordinateError: an ordinate is NaN or infinite.
        UnknownSridError: ``crs`` was requested for an SRID the cache cannot resolve.
    """
    precision = check_precision(precision)
    if crs is not None and crs not in GEOJSON_CRS_STYLES:
        raise ValueError(f"crs must be one of {GEOJSON_CRS_STYLES}, got {crs!r}")
    if crs is not None and srs_cache is None:
        srs_cache = SpatialRefCache()
    return _object(geom, precision, bbox, crs, srs_cache)
