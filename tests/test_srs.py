import json
import pytest
from coordprint.core.errors import UnknownSridError
from coordprint.core.srs import (
    SpatialRef, SpatialRefCache, catalog_lookup, load_catalog, parse_catalog,
)

def test_spatial_ref_names():
    ref = SpatialRef(4326, 'EPSG', 4326)
    assert ref.short_name == 'EPSG:4326'
    assert ref.long_name == 'urn:ogc:def:crs:EPSG::4326'

def test_builtin_catalog():
    lookup = catalog_lookup()
    assert lookup(3857) == SpatialRef(3857, 'EPSG', 3857)
    assert lookup(123) is None

def test_cache_hits_and_misses():
    cache = SpatialRefCache()
    assert cache.get(4326).auth_srid == 4326
    assert cache.get(4326).auth_srid == 4326
    assert cache.misses == 1
    assert cache.hits == 1
    assert 4326 in cache
    assert len(cache) == 1

def test_cache_calls_lookup_once():
    calls = []

    def lookup(srid):
        calls.append(srid)
        return SpatialRef(srid, 'TEST', srid + 1)

    cache = SpatialRefCache(lookup)
    for _ in range(5):
        cache.get(10)
    assert calls == [10]

def test_invalidate_one():
    cache = SpatialRefCache()
    cache.get(4326)
    cache.get(3857)
    cache.invalidate(4326)
    assert 4326 not in cache
    assert 3857 in cache
    cache.get(4326)
    assert cache.misses == 3

def test_invalidate_all():
    cache = SpatialRefCache()
    cache.get(4326)
    cache.get(3857)
    cache.invalidate()
    assert len(cache) == 0
    cache.invalidate(4326)  # forgetting something unknown is fine

def test_invalidate_picks_up_catalog_changes():
    catalog = {1: ('OLD', 1)}
    cache = SpatialRefCache(catalog_lookup(catalog))
    assert cache.get(1).auth_name == 'OLD'
    catalog[1] = ('NEW', 1)
    assert cache.get(1).auth_name == 'OLD'
    cache.invalidate(1)
    assert cache.get(1).auth_name == 'NEW'

def test_unknown_srid():
    cache = SpatialRefCache()
    with pytest.raises(UnknownSridError) as exc:
        cache.get(999999)
    assert exc.value.srid == 999999
    assert isinstance(exc.value, LookupError)
    assert 999999 not in cache

def test_parse_catalog():
    assert parse_catalog({900913: 'EPSG:3857'}) == {900913: ('EPSG', 3857)}
    with pytest.raises(ValueError):
        parse_catalog({1: 'EPSG3857'})
    with pytest.raises(ValueError):
        parse_catalog({1: 'EPSG:abc'})

def test_load_catalog(tmp_path):
    path = tmp_path / 'srs.json'
    path.write_text(json.dumps({'900913': 'EPSG:3857', '4326': 'OGC:84'}))
    cache = load_catalog(path)
    assert cache.get(900913).short_name == 'EPSG:3857'
    # file entries override the built-in ones, the rest still resolve
    assert cache.get(4326).short_name == 'OGC:84'
    assert cache.get(27700).short_name == 'EPSG:27700'

def test_load_catalog_not_an_object(tmp_path):
    path = tmp_path / 'srs.json'
    path.write_text('[1, 2]')
    with pytest.raises(ValueError):
        load_catalog(path)
