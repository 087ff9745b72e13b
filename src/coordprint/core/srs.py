"""Spatial reference lookups shared across many output calls.

Looking up an SRID's authority is the one piece of context a GeoJSON ``crs``
member needs, and a run of geometries nearly always shares one SRID. The
cache is an ordinary object: whoever prints geometries creates one, hands it
to every ``write_geojson`` call, and calls ``invalidate`` when the catalog
behind it changes.
"""
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, Mapping, Optional, Union

from .constants import SPATIAL_REFS
from .errors import UnknownSridError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpatialRef:
    srid: int
    auth_name: str
    auth_srid: int

    @property
    def short_name(self) -> str:
        return f"{self.auth_name}:{self.auth_srid}"

    @property
    def long_name(self) -> str:
        return f"urn:ogc:def:crs:{self.auth_name}::{self.auth_srid}"


Lookup = Callable[[int], Optional[SpatialRef]]


def parse_catalog(mapping: Mapping[int, str]) -> Dict[int, tuple]:
    """Turn ``{srid: "AUTH:code"}`` into ``{srid: (auth_name, auth_srid)}``."""
    catalog = {}
    for srid, name in mapping.items():
        auth_name, sep, code = str(name).partition(':')
        if not sep or not code.isdigit():
            raise ValueError(f"spatial reference for SRID {srid} must look like 'AUTH:code', got {name!r}")
        catalog[int(srid)] = (auth_name, int(code))
    return catalog


def catalog_lookup(catalog: Mapping[int, tuple] = SPATIAL_REFS) -> Lookup:
    """Lookup over a ``{srid: (auth_name, auth_srid)}`` mapping."""
    def lookup(srid: int) -> Optional[SpatialRef]:
        entry = catalog.get(srid)
        if entry is None:
            return None
        auth_name, auth_srid = entry
        return SpatialRef(srid, auth_name, int(auth_srid))
    return lookup


class SpatialRefCache:
    """Memoizes an SRID lookup until told to forget."""

    def __init__(self, lookup: Optional[Lookup] = None):
        self._lookup = lookup or catalog_lookup()
        self._entries: Dict[int, SpatialRef] = {}
        self.hits = 0
        self.misses = 0

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, str]) -> 'SpatialRefCache':
        """Build from ``{srid: "AUTH:code"}``, e.g. ``{4326: "EPSG:4326"}``."""
        return cls(catalog_lookup(parse_catalog(mapping)))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, srid: int) -> bool:
        return srid in self._entries

    def get(self, srid: int) -> SpatialRef:
        ref = self._entries.get(srid)
        if ref is not None:
            self.hits += 1
            return ref
        self.misses += 1
        ref = self._lookup(srid)
        if ref is None:
            raise UnknownSridError(srid)
        logger.debug("Cached spatial reference %s for SRID %d", ref.short_name, srid)
        self._entries[srid] = ref
        return ref

    def invalidate(self, srid: Optional[int] = None) -> None:
        """Forget one SRID, or everything when ``srid`` is None."""
        if srid is None:
            self._entries.clear()
        else:
            self._entries.pop(srid, None)


def load_catalog(path: Union[str, Path]) -> SpatialRefCache:
    """
    Loads a JSON object of ``{"srid": "AUTH:code"}`` pairs into a cache that
    falls back to the built-in catalog for SRIDs the file does not name.
    """
    with open(path, 'r', encoding='utf-8') as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a JSON object of SRID -> 'AUTH:code'")
    catalog = dict(SPATIAL_REFS)
    catalog.update(parse_catalog({int(k): v for k, v in raw.items()}))
    logger.debug("Loaded %d spatial references from %s", len(raw), path)
    return SpatialRefCache(catalog_lookup(catalog))
