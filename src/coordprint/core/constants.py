import struct

VERSION = "0.1.0"  # keep in step with pyproject.toml

# -------- Byte order markers --------
XDR = 0  # big-endian
NDR = 1  # little-endian

# -------- Geometry type codes (OGC WKB) --------
WKB_POINT              = 1
WKB_LINESTRING         = 2
WKB_POLYGON            = 3
WKB_MULTIPOINT         = 4
WKB_MULTILINESTRING    = 5
WKB_MULTIPOLYGON       = 6
WKB_GEOMETRYCOLLECTION = 7

KIND_BY_CODE = {
    WKB_POINT:              'point',
    WKB_LINESTRING:         'linestring',
    WKB_POLYGON:            'polygon',
    WKB_MULTIPOINT:         'multipoint',
    WKB_MULTILINESTRING:    'multilinestring',
    WKB_MULTIPOLYGON:       'multipolygon',
    WKB_GEOMETRYCOLLECTION: 'geometrycollection',
}
CODE_BY_KIND = {kind: code for code, kind in KIND_BY_CODE.items()}

# Allowed child kind for each multi-geometry; collections take anything
CHILD_KIND = {
    'multipoint':      'point',
    'multilinestring': 'linestring',
    'multipolygon':    'polygon',
}
COLLECTION_KINDS = ('multipoint', 'multilinestring', 'multipolygon', 'geometrycollection')

WKT_NAMES = {
    'point':              'POINT',
    'linestring':         'LINESTRING',
    'polygon':            'POLYGON',
    'multipoint':         'MULTIPOINT',
    'multilinestring':    'MULTILINESTRING',
    'multipolygon':       'MULTIPOLYGON',
    'geometrycollection': 'GEOMETRYCOLLECTION',
}

GEOJSON_NAMES = {
    'point':              'Point',
    'linestring':         'LineString',
    'polygon':            'Polygon',
    'multipoint':         'MultiPoint',
    'multilinestring':    'MultiLineString',
    'multipolygon':       'MultiPolygon',
    'geometrycollection': 'GeometryCollection',
}

# -------- EWKB flag bits (high bits of the type word) --------
EWKB_Z_FLAG    = 0x80000000
EWKB_M_FLAG    = 0x40000000
EWKB_SRID_FLAG = 0x20000000
EWKB_TYPE_MASK = 0x0FFFFFFF

# ISO WKB adds 1000 (Z), 2000 (M) or 3000 (ZM) to the base code
ISO_Z_OFFSET  = 1000
ISO_M_OFFSET  = 2000
ISO_ZM_OFFSET = 3000

# -------- Struct layouts, keyed by byte order --------
UINT32_STRUCT = {
    NDR: struct.Struct('<I'),
    XDR: struct.Struct('>I'),
}
DOUBLE_STRUCT = {
    NDR: struct.Struct('<d'),
    XDR: struct.Struct('>d'),
}
BYTE_ORDER_SIZE = 1
HEADER_SIZE     = BYTE_ORDER_SIZE + 4      # byte order + type word
SRID_SIZE       = 4
MAX_HEADER_SIZE = HEADER_SIZE + SRID_SIZE

# -------- Coordinate formatting --------
# Outside [SCIENTIFIC_LOW, SCIENTIFIC_HIGH] values print in scientific notation
SCIENTIFIC_LOW  = 1e-8
SCIENTIFIC_HIGH = 1e15

DEFAULT_PRECISION = 15
WKT_PRECISION     = 15
GEOJSON_PRECISION = 9

# Working precision of the decimal context; covers 16 integer digits plus
# the longest fixed-notation fraction a shortest repr can carry.
DECIMAL_PRECISION = 64

NAN_TEXT     = 'nan'
INF_TEXT     = 'inf'
NEG_INF_TEXT = '-inf'

# -------- Spatial reference catalog --------
# srid -> (authority name, authority code)
SPATIAL_REFS = {
    4326:  ('EPSG', 4326),   # WGS 84
    4269:  ('EPSG', 4269),   # NAD83
    4258:  ('EPSG', 4258),   # ETRS89
    3857:  ('EPSG', 3857),   # WGS 84 / Pseudo-Mercator
    27700: ('EPSG', 27700),  # OSGB 1936 / British National Grid
}

GEOJSON_CRS_STYLES = ('short', 'long')
