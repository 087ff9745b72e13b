from dataclasses import dataclass, field
from typing import Any, ClassVar, Iterator, List, Optional, Tuple, Union

from .constants import COLLECTION_KINDS, CODE_BY_KIND

Coordinate = Tuple[float, ...]


@dataclass
class Geometry:
    kind: str  # 'point', 'linestring', 'polygon', 'multipoint', ...
    coords: List[Coordinate] = field(default_factory=list)    # point, linestring
    rings: List[List[Coordinate]] = field(default_factory=list)  # polygon
    parts: List['Geometry'] = field(default_factory=list)     # multi*, collection
    has_z: bool = False
    has_m: bool = False
    srid: Optional[int] = None

    @property
    def type_code(self) -> int:
        return CODE_BY_KIND[self.kind]

    @property
    def dims(self) -> int:
        return 2 + int(self.has_z) + int(self.has_m)

    @property
    def is_collection(self) -> bool:
        return self.kind in COLLECTION_KINDS

    @property
    def is_empty(self) -> bool:
        if self.kind == 'polygon':
            # rings without coordinates can only come from WKB
            return not any(self.rings)
        if self.is_collection:
            return all(p.is_empty for p in self.parts)
        return not self.coords

    def iter_coords(self) -> Iterator[Coordinate]:
        """Yield every coordinate, depth first, in storage order."""
        if self.kind == 'polygon':
            for ring in self.rings:
                yield from ring
        elif self.is_collection:
            for part in self.parts:
                yield from part.iter_coords()
        else:
            yield from self.coords

    def simple_parts(self) -> Iterator['Geometry']:
        """Yield the non-collection geometries this one is made of."""
        if self.is_collection:
            for part in self.parts:
                yield from part.simple_parts()
        else:
            yield self

    def bounds(self) -> Optional[Tuple[Coordinate, Coordinate]]:
        """Per-ordinate (mins, maxs), or None for an empty geometry."""
        mins: Optional[List[float]] = None
        maxs: Optional[List[float]] = None
        for c in self.iter_coords():
            if mins is None:
                mins, maxs = list(c), list(c)
                continue
            for i, v in enumerate(c[:len(mins)]):
                if v < mins[i]: mins[i] = v
                if v > maxs[i]: maxs[i] = v
        if mins is None:
            return None
        return tuple(mins), tuple(maxs)


def _flags(coord: Optional[Coordinate], has_z: Optional[bool], has_m: bool) -> Tuple[bool, bool]:
    if has_z is None:
        has_z = coord is not None and len(coord) - int(has_m) > 2
    return has_z, has_m


def _check_arity(coords: List[Coordinate], has_z: bool, has_m: bool) -> None:
    dims = 2 + int(has_z) + int(has_m)
    for i, c in enumerate(coords):
        if len(c) != dims:
            raise ValueError(f"coordinate {i} has {len(c)} ordinates, expected {dims}")


def point(*ordinates: float, has_z: Optional[bool] = None, has_m: bool = False,
          srid: Optional[int] = None) -> Geometry:
    """Point from its ordinates; no ordinates gives the empty point."""
    coord = tuple(float(v) for v in ordinates) if ordinates else None
    has_z, has_m = _flags(coord, has_z, has_m)
    coords = [coord] if coord else []
    _check_arity(coords, has_z, has_m)
    return Geometry('point', coords, has_z=has_z, has_m=has_m, srid=srid)


def linestring(coords, has_z: Optional[bool] = None, has_m: bool = False,
               srid: Optional[int] = None) -> Geometry:
    pts = [tuple(float(v) for v in c) for c in coords]
    has_z, has_m = _flags(pts[0] if pts else None, has_z, has_m)
    _check_arity(pts, has_z, has_m)
    return Geometry('linestring', pts, has_z=has_z, has_m=has_m, srid=srid)


def polygon(rings, has_z: Optional[bool] = None, has_m: bool = False,
            srid: Optional[int] = None) -> Geometry:
    """Polygon from its rings, exterior first. Rings must not be empty."""
    rs = [[tuple(float(v) for v in c) for c in ring] for ring in rings]
    if any(not r for r in rs):
        raise ValueError("polygon rings must have at least one coordinate")
    has_z, has_m = _flags(rs[0][0] if rs else None, has_z, has_m)
    for r in rs:
        _check_arity(r, has_z, has_m)
    return Geometry('polygon', rings=rs, has_z=has_z, has_m=has_m, srid=srid)


def collection(kind: str, parts: List[Geometry], srid: Optional[int] = None) -> Geometry:
    """Multi-geometry or collection; dimensionality follows the non-empty parts,
    which must all agree on it."""
    if kind not in COLLECTION_KINDS:
        raise ValueError(f"{kind!r} is not a collection kind")
    flags = {(p.has_z, p.has_m) for p in parts if not p.is_empty}
    if len(flags) > 1:
        raise ValueError(f"{kind} members mix dimensions: {sorted(flags)}")
    if flags:
        has_z, has_m = flags.pop()
    else:
        has_z = any(p.has_z for p in parts)
        has_m = any(p.has_m for p in parts)
    return Geometry(kind, parts=list(parts), has_z=has_z, has_m=has_m, srid=srid)


@dataclass(frozen=True)
class WkbHeader:
    byte_order: int
    kind: str
    has_z: bool
    has_m: bool
    srid: Optional[int]
    offset: int
    size: int  # bytes the header occupies, SRID included

    @property
    def type_code(self) -> int:
        return CODE_BY_KIND[self.kind]

    @property
    def dims(self) -> int:
        return 2 + int(self.has_z) + int(self.has_m)


@dataclass(frozen=True)
class Borrowed:
    """Result that is the caller's input (or its canonical text) untouched."""
    value: Any
    transformed: ClassVar[bool] = False


@dataclass(frozen=True)
class Owned:
    """Result that had to be rebuilt into a fresh object."""
    value: Any
    transformed: ClassVar[bool] = True


Rendered = Union[Borrowed, Owned]
