from .geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    LinearRing,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    UnsupportedGeometryError,
    build_geometry,
    from_dict,
)
from .rectangle import Position, Rectangle
from .builder import PartsBuilder
from .intersection import clip, clip_boundary

__all__ = [
    "Coordinate",
    "Geometry",
    "GeometryCollection",
    "LinearRing",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "PartsBuilder",
    "Point",
    "Polygon",
    "Position",
    "Rectangle",
    "UnsupportedGeometryError",
    "build_geometry",
    "clip",
    "clip_boundary",
    "from_dict",
]
