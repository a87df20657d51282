from __future__ import annotations
import math
import logging
from copy import deepcopy
from typing import (
    Any,
    Dict,
    Iterable,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

logger = logging.getLogger(__name__)

T_Geometry = TypeVar("T_Geometry", bound="Geometry")


class UnsupportedGeometryError(Exception):
    """Raised when a geometry kind is outside the recognised set."""

    pass


class Coordinate(NamedTuple):
    """A vertex. A NaN z means the coordinate is two-dimensional."""

    x: float
    y: float
    z: float = math.nan

    @property
    def has_z(self) -> bool:
        return not math.isnan(self.z)

    def equals_2d(self, other: Sequence[float]) -> bool:
        return self.x == other[0] and self.y == other[1]

    def same_as(self, other: Coordinate) -> bool:
        """Exact 3D equality where two missing z values match."""
        if not self.equals_2d(other):
            return False
        if self.has_z or other.has_z:
            return self.z == other.z
        return True

    def to_list(self) -> List[float]:
        if self.has_z:
            return [self.x, self.y, self.z]
        return [self.x, self.y]


def as_coordinate(value: Sequence[float]) -> Coordinate:
    """Converts an (x, y) or (x, y, z) sequence into a Coordinate."""
    if isinstance(value, Coordinate):
        return value
    if len(value) not in (2, 3):
        raise ValueError(f"Expected 2 or 3 ordinates, got {len(value)}")
    try:
        return Coordinate(*(float(v) for v in value))
    except TypeError as e:
        raise ValueError(f"Invalid ordinates {value!r}: {e}") from e


def _coords_same(a: Sequence[Coordinate], b: Sequence[Coordinate]) -> bool:
    if len(a) != len(b):
        return False
    return all(c1.same_as(c2) for c1, c2 in zip(a, b))


class Geometry:
    """
    Base class of the immutable-by-convention geometry value model.

    Geometries are never modified by the clipping code; every operation
    that changes shape data returns a new instance.
    """

    geom_type = "Geometry"

    def is_empty(self) -> bool:
        raise NotImplementedError

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterates over every vertex of the geometry."""
        raise NotImplementedError

    def copy(self: T_Geometry) -> T_Geometry:
        """Creates a deep copy of the geometry."""
        return deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        if self.is_empty():
            return f"{self.__class__.__name__}(EMPTY)"
        return f"{self.__class__.__name__}({self.to_dict()})"


class Point(Geometry):
    geom_type = "Point"

    def __init__(self, coordinate: Optional[Sequence[float]] = None) -> None:
        self.coordinate: Optional[Coordinate] = (
            as_coordinate(coordinate) if coordinate is not None else None
        )

    @property
    def x(self) -> float:
        if self.coordinate is None:
            raise ValueError("Empty point has no x")
        return self.coordinate.x

    @property
    def y(self) -> float:
        if self.coordinate is None:
            raise ValueError("Empty point has no y")
        return self.coordinate.y

    def is_empty(self) -> bool:
        return self.coordinate is None

    def coordinates(self) -> Iterator[Coordinate]:
        if self.coordinate is not None:
            yield self.coordinate

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.geom_type,
            "coordinates": (
                self.coordinate.to_list() if self.coordinate else []
            ),
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, Point)
        if self.coordinate is None or other.coordinate is None:
            return self.coordinate is None and other.coordinate is None
        return self.coordinate.same_as(other.coordinate)


class LineString(Geometry):
    geom_type = "LineString"

    def __init__(self, coords: Iterable[Sequence[float]] = ()) -> None:
        self.coords: List[Coordinate] = [as_coordinate(c) for c in coords]
        if len(self.coords) == 1:
            raise ValueError(
                f"{self.geom_type} must have 0 or at least 2 coordinates"
            )

    def __len__(self) -> int:
        return len(self.coords)

    def is_empty(self) -> bool:
        return not self.coords

    def is_closed(self) -> bool:
        return bool(self.coords) and self.coords[0].equals_2d(
            self.coords[-1]
        )

    def coordinates(self) -> Iterator[Coordinate]:
        return iter(self.coords)

    def reversed(self: T_Line) -> T_Line:
        """Returns a new line with the vertex order flipped."""
        return type(self)(self.coords[::-1])

    def to_dict(self) -> Dict[str, Any]:
        # GeoJSON has no ring type, rings are plain line strings there.
        return {
            "type": LineString.geom_type,
            "coordinates": [c.to_list() for c in self.coords],
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, LineString)
        return _coords_same(self.coords, other.coords)


T_Line = TypeVar("T_Line", bound=LineString)


class LinearRing(LineString):
    """A closed line string, used for polygon shells and holes."""

    geom_type = "LinearRing"

    def __init__(self, coords: Iterable[Sequence[float]] = ()) -> None:
        super().__init__(coords)
        if self.coords and not self.is_closed():
            raise ValueError("LinearRing must be closed")


class Polygon(Geometry):
    geom_type = "Polygon"

    def __init__(
        self,
        shell: Optional[Iterable[Sequence[float]]] = None,
        holes: Optional[Iterable[Iterable[Sequence[float]]]] = None,
    ) -> None:
        self.shell: LinearRing = _as_ring(shell)
        self.holes: List[LinearRing] = [_as_ring(h) for h in holes or ()]
        if self.shell.is_empty() and self.holes:
            raise ValueError("An empty polygon cannot have holes")

    def is_empty(self) -> bool:
        return self.shell.is_empty()

    @property
    def rings(self) -> List[LinearRing]:
        return [self.shell, *self.holes]

    def coordinates(self) -> Iterator[Coordinate]:
        for ring in self.rings:
            yield from ring.coords

    def to_dict(self) -> Dict[str, Any]:
        if self.is_empty():
            return {"type": self.geom_type, "coordinates": []}
        return {
            "type": self.geom_type,
            "coordinates": [
                [c.to_list() for c in ring.coords] for ring in self.rings
            ],
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, Polygon)
        if len(self.holes) != len(other.holes):
            return False
        return all(a == b for a, b in zip(self.rings, other.rings))


def _as_ring(value: Optional[Iterable[Sequence[float]]]) -> LinearRing:
    if value is None:
        return LinearRing()
    if isinstance(value, LinearRing):
        return value
    if isinstance(value, LineString):
        return LinearRing(value.coords)
    return LinearRing(value)


class GeometryCollection(Geometry):
    geom_type = "GeometryCollection"
    member_type: Type[Geometry] = Geometry

    def __init__(self, geoms: Iterable[Geometry] = ()) -> None:
        self.geoms: List[Geometry] = list(geoms)
        for geom in self.geoms:
            if not isinstance(geom, self.member_type):
                raise TypeError(
                    f"{self.geom_type} cannot contain "
                    f"{type(geom).__name__}"
                )

    def __len__(self) -> int:
        return len(self.geoms)

    def __iter__(self) -> Iterator[Geometry]:
        return iter(self.geoms)

    def is_empty(self) -> bool:
        return all(g.is_empty() for g in self.geoms)

    def coordinates(self) -> Iterator[Coordinate]:
        for geom in self.geoms:
            yield from geom.coordinates()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.geom_type,
            "geometries": [g.to_dict() for g in self.geoms],
        }

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, GeometryCollection)
        if len(self.geoms) != len(other.geoms):
            return False
        return all(a == b for a, b in zip(self.geoms, other.geoms))


class MultiPoint(GeometryCollection):
    geom_type = "MultiPoint"
    member_type = Point

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.geom_type,
            "coordinates": [g.to_dict()["coordinates"] for g in self.geoms],
        }


class MultiLineString(GeometryCollection):
    geom_type = "MultiLineString"
    member_type = LineString

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.geom_type,
            "coordinates": [g.to_dict()["coordinates"] for g in self.geoms],
        }


class MultiPolygon(GeometryCollection):
    geom_type = "MultiPolygon"
    member_type = Polygon

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.geom_type,
            "coordinates": [g.to_dict()["coordinates"] for g in self.geoms],
        }


_MULTI_TYPES: Dict[Type[Geometry], Type[GeometryCollection]] = {
    Point: MultiPoint,
    LineString: MultiLineString,
    Polygon: MultiPolygon,
}


def build_geometry(
    parts: List[Geometry],
    empty_type: Type[Geometry] = GeometryCollection,
) -> Geometry:
    """
    Assembles a list of parts into the most specific geometry.

    Args:
        parts: The geometries to combine. Ownership passes to the result.
        empty_type: The geometry class to instantiate when there are no
                    parts.

    Returns:
        An empty `empty_type` instance, the single part itself, a
        homogeneous Multi* geometry, or a GeometryCollection.
    """
    if not parts:
        return empty_type()
    if len(parts) == 1:
        return parts[0]

    # Rings are line strings as far as collections are concerned
    kinds = set()
    for part in parts:
        kind = LineString if isinstance(part, LineString) else type(part)
        kinds.add(kind)
    if len(kinds) == 1:
        multi_type = _MULTI_TYPES.get(kinds.pop())
        if multi_type is not None:
            return multi_type(parts)
    return GeometryCollection(parts)


def _parse_array(value: Any) -> List[Any]:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Expected a GeoJSON array, got {value!r}")
    return list(value)


def _parse_position(value: Any) -> Coordinate:
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"Invalid GeoJSON position: {value!r}")
    return as_coordinate(value)


def from_dict(data: Dict[str, Any]) -> Geometry:
    """
    Builds a geometry from a GeoJSON geometry object.

    Raises:
        UnsupportedGeometryError: If the `type` member is not recognised.
        ValueError: If the object or its coordinates are malformed.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a GeoJSON object, got {data!r}")
    geom_type = data.get("type")
    if geom_type == "GeometryCollection":
        return GeometryCollection(
            from_dict(g) for g in _parse_array(data.get("geometries", []))
        )

    coords = data.get("coordinates", [])
    if geom_type == "Point":
        return Point(_parse_position(coords) if coords else None)
    elif geom_type == "LineString":
        return LineString(_parse_position(c) for c in _parse_array(coords))
    elif geom_type == "Polygon":
        rings = [
            [_parse_position(c) for c in _parse_array(ring)]
            for ring in _parse_array(coords)
        ]
        if not rings:
            return Polygon()
        return Polygon(rings[0], rings[1:])
    elif geom_type == "MultiPoint":
        return MultiPoint(
            Point(_parse_position(c)) for c in _parse_array(coords)
        )
    elif geom_type == "MultiLineString":
        return MultiLineString(
            from_dict({"type": "LineString", "coordinates": c})
            for c in _parse_array(coords)
        )
    elif geom_type == "MultiPolygon":
        return MultiPolygon(
            from_dict({"type": "Polygon", "coordinates": c})
            for c in _parse_array(coords)
        )
    raise UnsupportedGeometryError(f"Unsupported geometry type: {geom_type}")
