import pytest
import struct
from coordprint.core.constants import (
    NDR, XDR,
    WKB_POINT, WKB_LINESTRING, WKB_POLYGON, WKB_MULTIPOINT, WKB_GEOMETRYCOLLECTION,
    EWKB_SRID_FLAG, ISO_Z_OFFSET,
)

@pytest.fixture
def synthetic_point_wkb():
    """
    EWKB point with SRID, little-endian.
    SRID=4326;POINT(1 2)
    """
    data = bytearray()
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_POINT | EWKB_SRID_FLAG))
    data.extend(struct.pack('<I', 4326))
    data.extend(struct.pack('<dd', 1.0, 2.0))
    return bytes(data)

@pytest.fixture
def synthetic_linestring_xdr():
    """
    ISO WKB linestring Z, big-endian.
    LINESTRING Z (0 0 0,22.200000000000003 1.5 -3)
    """
    data = bytearray()
    data.append(XDR)
    data.extend(struct.pack('>I', WKB_LINESTRING + ISO_Z_OFFSET))
    data.extend(struct.pack('>I', 2))
    data.extend(struct.pack('>ddd', 0.0, 0.0, 0.0))
    data.extend(struct.pack('>ddd', 22.200000000000003, 1.5, -3.0))
    return bytes(data)

@pytest.fixture
def synthetic_polygon_wkb():
    """
    POLYGON((0 0,10 0,10 10,0 0)), little-endian, no SRID.
    """
    data = bytearray()
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_POLYGON))
    data.extend(struct.pack('<I', 1))   # rings
    data.extend(struct.pack('<I', 4))   # points in ring
    for x, y in [(0, 0), (10, 0), (10, 10), (0, 0)]:
        data.extend(struct.pack('<dd', x, y))
    return bytes(data)

@pytest.fixture
def synthetic_multipoint_mixed():
    """
    MULTIPOINT((1 2),(3 4)): little-endian outer, first member big-endian.
    """
    data = bytearray()
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_MULTIPOINT))
    data.extend(struct.pack('<I', 2))
    # member 1, XDR
    data.append(XDR)
    data.extend(struct.pack('>I', WKB_POINT))
    data.extend(struct.pack('>dd', 1.0, 2.0))
    # member 2, NDR
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_POINT))
    data.extend(struct.pack('<dd', 3.0, 4.0))
    return bytes(data)

@pytest.fixture
def synthetic_collection_wkb():
    """
    GEOMETRYCOLLECTION(POINT(1 2),LINESTRING(0 0,1 1)), little-endian.
    """
    data = bytearray()
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_GEOMETRYCOLLECTION))
    data.extend(struct.pack('<I', 2))
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_POINT))
    data.extend(struct.pack('<dd', 1.0, 2.0))
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_LINESTRING))
    data.extend(struct.pack('<I', 2))
    data.extend(struct.pack('<dddd', 0.0, 0.0, 1.0, 1.0))
    return bytes(data)

@pytest.fixture
def synthetic_empty_point():
    """
    POINT EMPTY: a point whose ordinates are both NaN.
    """
    data = bytearray()
    data.append(NDR)
    data.extend(struct.pack('<I', WKB_POINT))
    data.extend(struct.pack('<dd', float('nan'), float('nan')))
    return bytes(data)
