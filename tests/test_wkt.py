import pytest
from coordprint.core.errors import PrecisionError
from coordprint.core.models import Geometry, collection, linestring, point, polygon
from coordprint.core.parser import parse_wkb
from coordprint.core.wkt import write_wkt

def test_point(synthetic_point_wkb):
    g = parse_wkb(synthetic_point_wkb)
    assert write_wkt(g) == "POINT(1 2)"
    assert write_wkt(g, extended=True) == "SRID=4326;POINT(1 2)"

def test_linestring_z(synthetic_linestring_xdr):
    g = parse_wkb(synthetic_linestring_xdr)
    assert write_wkt(g) == "LINESTRING Z (0 0 0,22.200000000000003 1.5 -3)"
    assert write_wkt(g, 13) == "LINESTRING Z (0 0 0,22.2 1.5 -3)"
    assert write_wkt(g, extended=True) == "LINESTRING(0 0 0,22.200000000000003 1.5 -3)"

def test_polygon(synthetic_polygon_wkb):
    assert write_wkt(parse_wkb(synthetic_polygon_wkb)) == "POLYGON((0 0,10 0,10 10,0 0))"

def test_polygon_with_hole():
    g = polygon([
        [(0, 0), (4, 0), (4, 4), (0, 0)],
        [(1, 1), (2, 1), (2, 2), (1, 1)],
    ])
    assert write_wkt(g) == "POLYGON((0 0,4 0,4 4,0 0),(1 1,2 1,2 2,1 1))"

def test_multipoint(synthetic_multipoint_mixed):
    assert write_wkt(parse_wkb(synthetic_multipoint_mixed)) == "MULTIPOINT((1 2),(3 4))"

def test_multipoint_with_empty_member():
    g = collection('multipoint', [point(1, 2), point()])
    assert write_wkt(g) == "MULTIPOINT((1 2),EMPTY)"

def test_multilinestring_and_multipolygon():
    ml = collection('multilinestring', [linestring([(0, 0), (1, 1)]), linestring([(2, 2), (3, 3)])])
    assert write_wkt(ml) == "MULTILINESTRING((0 0,1 1),(2 2,3 3))"
    mp = collection('multipolygon', [polygon([[(0, 0), (1, 0), (1, 1), (0, 0)]])])
    assert write_wkt(mp) == "MULTIPOLYGON(((0 0,1 0,1 1,0 0)))"

def test_collection(synthetic_collection_wkb):
    g = parse_wkb(synthetic_collection_wkb)
    assert write_wkt(g) == "GEOMETRYCOLLECTION(POINT(1 2),LINESTRING(0 0,1 1))"

def test_collection_z_members():
    g = collection('geometrycollection', [point(1, 2, 3)])
    assert write_wkt(g) == "GEOMETRYCOLLECTION Z (POINT Z (1 2 3))"
    assert write_wkt(g, extended=True) == "GEOMETRYCOLLECTION(POINT(1 2 3))"

def test_measured_point():
    g = point(1, 2, 3, has_m=True)
    assert write_wkt(g) == "POINT M (1 2 3)"
    assert write_wkt(g, extended=True) == "POINTM(1 2 3)"
    g = point(1, 2, 3, 4, has_m=True)
    assert write_wkt(g) == "POINT ZM (1 2 3 4)"
    assert write_wkt(g, extended=True) == "POINT(1 2 3 4)"

def test_empty(synthetic_empty_point):
    assert write_wkt(parse_wkb(synthetic_empty_point)) == "POINT EMPTY"
    assert write_wkt(Geometry('point', has_z=True, has_m=True)) == "POINT ZM EMPTY"
    assert write_wkt(Geometry('linestring', has_m=True), extended=True) == "LINESTRINGM EMPTY"
    assert write_wkt(collection('geometrycollection', [])) == "GEOMETRYCOLLECTION EMPTY"

def test_empty_with_srid():
    assert write_wkt(point(srid=4326), extended=True) == "SRID=4326;POINT EMPTY"

def test_scientific_ordinates():
    g = point(1e16, 9.9e-9)
    assert write_wkt(g) == "POINT(1e+16 9.9e-09)"

def test_precision_trims_every_ordinate():
    g = linestring([(0.1 + 0.2, 22.200000000000003)])
    assert write_wkt(g, 17) == "LINESTRING(0.30000000000000004 22.200000000000003)"
    assert write_wkt(g, 9) == "LINESTRING(0.3 22.2)"
    assert write_wkt(g, 0) == "LINESTRING(0 22)"

def test_invalid_precision():
    with pytest.raises(PrecisionError):
        write_wkt(point(1, 2), -1)

def test_wkb_empty_rings_left_out():
    ring = [(0, 0), (1, 0), (1, 1), (0, 0)]
    assert write_wkt(Geometry('polygon', rings=[ring, []])) == "POLYGON((0 0,1 0,1 1,0 0))"
    assert write_wkt(Geometry('polygon', rings=[[]])) == "POLYGON EMPTY"
