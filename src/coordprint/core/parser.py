import logging
import math
from typing import List, Tuple

from .constants import (
    NDR, XDR,
    KIND_BY_CODE, CHILD_KIND,
    EWKB_Z_FLAG, EWKB_M_FLAG, EWKB_SRID_FLAG, EWKB_TYPE_MASK,
    ISO_Z_OFFSET, ISO_M_OFFSET, ISO_ZM_OFFSET,
    UINT32_STRUCT, DOUBLE_STRUCT,
    HEADER_SIZE, SRID_SIZE,
)
from .errors import WkbError
from .models import Coordinate, Geometry, WkbHeader

logger = logging.getLogger(__name__)


def parse_hex(text: str) -> bytes:
    """Decode hex-encoded (E)WKB, as printed by PostGIS or as a ``\\x`` bytea literal."""
    text = text.strip()
    if text[:2] in ('\\x', '\\X'):
        text = text[2:]
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise WkbError(f"invalid hex input: {exc}") from exc


def decode_type(raw: int, offset: int = 0) -> Tuple[str, bool, bool, bool]:
    """Split a type word into (kind, has_z, has_m, has_srid).

    Understands both the EWKB flag bits and ISO's +1000/+2000/+3000 codes.
    """
    has_z = bool(raw & EWKB_Z_FLAG)
    has_m = bool(raw & EWKB_M_FLAG)
    has_srid = bool(raw & EWKB_SRID_FLAG)
    iso, code = divmod(raw & EWKB_TYPE_MASK, 1000)
    if iso:
        if iso * 1000 not in (ISO_Z_OFFSET, ISO_M_OFFSET, ISO_ZM_OFFSET):
            raise WkbError(f"unknown geometry type {raw:#x}", offset)
        has_z = has_z or iso * 1000 in (ISO_Z_OFFSET, ISO_ZM_OFFSET)
        has_m = has_m or iso * 1000 in (ISO_M_OFFSET, ISO_ZM_OFFSET)
    kind = KIND_BY_CODE.get(code)
    if kind is None:
        raise WkbError(f"unknown geometry type {raw:#x}", offset)
    return kind, has_z, has_m, has_srid


def read_header(data: bytes, pos: int = 0) -> WkbHeader:
    """Read only the header of the geometry at ``pos``.

    At most nine bytes are touched (byte order, type word, optional SRID), so
    the type, dimensionality and SRID of a large geometry can be inspected
    without decoding its coordinates.
    """
    if pos + HEADER_SIZE > len(data):
        raise WkbError("truncated header", pos)
    byte_order = data[pos]
    if byte_order not in (NDR, XDR):
        raise WkbError(f"bad byte order marker {byte_order:#04x}", pos)
    (raw,) = UINT32_STRUCT[byte_order].unpack_from(data, pos + 1)
    kind, has_z, has_m, has_srid = decode_type(raw, pos + 1)
    size = HEADER_SIZE
    srid = None
    if has_srid:
        if pos + size + SRID_SIZE > len(data):
            raise WkbError("truncated SRID", pos + size)
        (srid,) = UINT32_STRUCT[byte_order].unpack_from(data, pos + size)
        size += SRID_SIZE
    return WkbHeader(byte_order, kind, has_z, has_m, srid, pos, size)


def read_count(data: bytes, pos: int, byte_order: int, item_size: int = 1) -> Tuple[int, int]:
    """Read an element count, checking the elements can fit in what is left."""
    if pos + 4 > len(data):
        raise WkbError("truncated count", pos)
    (n,) = UINT32_STRUCT[byte_order].unpack_from(data, pos)
    pos += 4
    if n * item_size > len(data) - pos:
        raise WkbError(f"count {n} overruns the buffer", pos - 4)
    return n, pos


def read_coord(data: bytes, pos: int, byte_order: int, dims: int) -> Tuple[Coordinate, int]:
    s = DOUBLE_STRUCT[byte_order]
    end = pos + dims * s.size
    if end > len(data):
        raise WkbError("truncated coordinate", pos)
    return tuple(s.unpack_from(data, pos + i * s.size)[0] for i in range(dims)), end


def read_coords(data: bytes, pos: int, byte_order: int, dims: int) -> Tuple[List[Coordinate], int]:
    n, pos = read_count(data, pos, byte_order, dims * 8)
    coords = []
    for _ in range(n):
        c, pos = read_coord(data, pos, byte_order, dims)
        coords.append(c)
    return coords, pos


def read_geometry(data: bytes, pos: int = 0) -> Tuple[Geometry, int]:
    """Decode the geometry at ``pos``; returns it with the offset just past it."""
    header = read_header(data, pos)
    order = header.byte_order
    dims = header.dims
    q = pos + header.size
    geom = Geometry(header.kind, has_z=header.has_z, has_m=header.has_m, srid=header.srid)

    if header.kind == 'point':
        c, q = read_coord(data, q, order, dims)
        # all-NaN ordinates encode the empty point
        if not all(math.isnan(v) for v in c):
            geom.coords.append(c)
    elif header.kind == 'linestring':
        geom.coords, q = read_coords(data, q, order, dims)
    elif header.kind == 'polygon':
        nrings, q = read_count(data, q, order, 4)
        for _ in range(nrings):
            ring, q = read_coords(data, q, order, dims)
            geom.rings.append(ring)
    else:
        nparts, q = read_count(data, q, order, HEADER_SIZE)
        want = CHILD_KIND.get(header.kind)
        for _ in range(nparts):
            child_pos = q
            child, q = read_geometry(data, q)
            if want is not None and child.kind != want:
                raise WkbError(f"{header.kind} cannot contain a {child.kind}", child_pos)
            if (child.has_z, child.has_m) != (header.has_z, header.has_m):
                logger.debug("Child at byte %d has different dimensionality than its parent", child_pos)
            child.srid = None
            geom.parts.append(child)
    return geom, q


def parse_wkb(data: bytes) -> Geometry:
    """Decode a complete (E)WKB value; trailing bytes are an error."""
    geom, end = read_geometry(data, 0)
    if end != len(data):
        raise WkbError(f"{len(data) - end} trailing bytes", end)
    logger.debug("Parsed %s (%d bytes, srid=%s)", geom.kind, len(data), geom.srid)
    return geom
