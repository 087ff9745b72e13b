import logging

from .constants import (
    NDR, XDR,
    EWKB_Z_FLAG, EWKB_M_FLAG, EWKB_SRID_FLAG,
    ISO_Z_OFFSET, ISO_M_OFFSET,
    UINT32_STRUCT, DOUBLE_STRUCT,
)
from .models import Borrowed, Geometry, Owned, Rendered
from .parser import parse_wkb

logger = logging.getLogger(__name__)


def type_word(geom: Geometry, extended: bool = True, with_srid: bool = False) -> int:
    code = geom.type_code
    if extended:
        if geom.has_z: code |= EWKB_Z_FLAG
        if geom.has_m: code |= EWKB_M_FLAG
        if with_srid: code |= EWKB_SRID_FLAG
    else:
        if geom.has_z: code += ISO_Z_OFFSET
        if geom.has_m: code += ISO_M_OFFSET
    return code


def _write_coords(out: bytearray, coords, byte_order: int, dims: int) -> None:
    u32 = UINT32_STRUCT[byte_order]
    d = DOUBLE_STRUCT[byte_order]
    out.extend(u32.pack(len(coords)))
    for c in coords:
        for v in c[:dims]:
            out.extend(d.pack(v))


def _write_geometry(out: bytearray, geom: Geometry, byte_order: int, extended: bool, top: bool) -> None:
    u32 = UINT32_STRUCT[byte_order]
    d = DOUBLE_STRUCT[byte_order]
    with_srid = extended and top and geom.srid is not None

    out.append(byte_order)
    out.extend(u32.pack(type_word(geom, extended, with_srid)))
    if with_srid:
        out.extend(u32.pack(geom.srid))

    dims = geom.dims
    if geom.kind == 'point':
        # empty point is written as all-NaN ordinates
        c = geom.coords[0] if geom.coords else (float('nan'),) * dims
        for v in c[:dims]:
            out.extend(d.pack(v))
    elif geom.kind == 'linestring':
        _write_coords(out, geom.coords, byte_order, dims)
    elif geom.kind == 'polygon':
        out.extend(u32.pack(len(geom.rings)))
        for ring in geom.rings:
            _write_coords(out, ring, byte_order, dims)
    else:
        out.extend(u32.pack(len(geom.parts)))
        for part in geom.parts:
            _write_geometry(out, part, byte_order, extended, top=False)


def write_wkb(geom: Geometry, byte_order: int = NDR, extended: bool = True) -> bytes:
    """
    Encodes a geometry as WKB.
    extended=True writes EWKB (flag bits, SRID on the outermost geometry),
    extended=False writes ISO WKB and drops the SRID.
    """
    if byte_order not in (NDR, XDR):
        raise ValueError(f"byte order must be NDR (1) or XDR (0), got {byte_order!r}")
    out = bytearray()
    _write_geometry(out, geom, byte_order, extended, top=True)
    return bytes(out)


def normalize_wkb(data: bytes) -> Rendered:
    """
    Returns the geometry as little-endian EWKB.
    The input object itself comes back as Borrowed when it is already in that
    form; otherwise an Owned copy is built.
    """
    canonical = write_wkb(parse_wkb(data), NDR, extended=True)
    if canonical == data:
        return Borrowed(data)
    logger.debug("Rewrote %d bytes of WKB into canonical form", len(data))
    return Owned(canonical)
