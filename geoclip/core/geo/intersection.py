"""
Rectangle intersection of arbitrary geometries.

Two entry points are provided. `clip` keeps area semantics: clipped
polygons are closed again along the rectangle boundary and keep their
holes. `clip_boundary` only keeps what the outlines leave inside the
rectangle, as line strings.
"""
import logging
from typing import Type
from .analysis import Location, is_ccw, is_in_ring, locate_in_ring
from .builder import PartsBuilder
from .clipping import clip_line_parts
from .geometry import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    UnsupportedGeometryError,
)
from .rectangle import Position, Rectangle

logger = logging.getLogger(__name__)


def _clip_point(point: Point, parts: PartsBuilder, rect: Rectangle) -> None:
    if point.is_empty():
        return
    # Points on the boundary are not part of the intersection
    if rect.position(point.x, point.y) == Position.INSIDE:
        parts.add(point.copy())


def _clip_linestring(
    line: LineString, parts: PartsBuilder, rect: Rectangle
) -> None:
    if line.is_empty():
        return
    if clip_line_parts(line, rect, parts):
        parts.add(line.copy())


def _hole_traces_boundary(hole: LineString, rect: Rectangle) -> bool:
    first = hole.coords[0]
    return rect.on_edge(rect.position(first.x, first.y))


def _clip_polygon_to_linestrings(
    polygon: Polygon, out: PartsBuilder, rect: Rectangle
) -> None:
    if polygon.is_empty():
        return

    parts = PartsBuilder()
    if clip_line_parts(polygon.shell, rect, parts):
        out.add(polygon.copy())
        return

    # Without any shell fragments the rectangle is either outside the
    # polygon or inside it; only in the latter case can holes matter.
    if parts.is_empty() and not polygon.holes:
        return
    parts.reconnect()

    # Clipped holes become line strings, intact ones new polygons
    for hole in polygon.holes:
        hole_parts = PartsBuilder()
        if clip_line_parts(hole, rect, hole_parts):
            if _hole_traces_boundary(hole, rect):
                logger.debug("Hole matches the rectangle, nothing left")
                return
            parts.add(Polygon(hole.copy()))
        elif not hole_parts.is_empty():
            hole_parts.reconnect()
            hole_parts.release(parts)

    parts.release(out)


def _clip_polygon_to_polygons(
    polygon: Polygon, out: PartsBuilder, rect: Rectangle
) -> None:
    if polygon.is_empty():
        return

    parts = PartsBuilder()
    shell = polygon.shell
    if clip_line_parts(shell, rect, parts):
        out.add(polygon.copy())
        return

    if parts.is_empty():
        # The shell does not cross the rectangle: either the rectangle
        # lies inside the polygon or the two are disjoint.
        location = locate_in_ring(rect.center, shell.coords)
        if location != Location.INTERIOR:
            return
    elif not is_ccw(shell.coords):
        parts.reverse_lines()
    parts.reconnect()

    # Clipped holes are merged with the shell fragments, intact ones
    # become holes of the reconnected shells.
    for hole in polygon.holes:
        hole_parts = PartsBuilder()
        if clip_line_parts(hole, rect, hole_parts):
            if _hole_traces_boundary(hole, rect):
                logger.debug("Hole matches the rectangle, nothing left")
                return
            parts.add(Polygon(hole.copy()))
        elif not hole_parts.is_empty():
            if is_ccw(hole.coords):
                hole_parts.reverse_lines()
            hole_parts.reconnect()
            hole_parts.release(parts)
        elif is_in_ring(rect.center, hole.coords):
            logger.debug("Rectangle lies inside a hole, nothing left")
            return

    parts.reconnect_polygons(rect)
    parts.release(out)


def _clip_polygon(
    polygon: Polygon,
    parts: PartsBuilder,
    rect: Rectangle,
    keep_polygons: bool,
) -> None:
    if keep_polygons:
        _clip_polygon_to_polygons(polygon, parts, rect)
    else:
        _clip_polygon_to_linestrings(polygon, parts, rect)


def _clip_geometry(
    geometry: Geometry,
    parts: PartsBuilder,
    rect: Rectangle,
    keep_polygons: bool,
) -> None:
    """Dispatches on the geometry kind, recursing into collections."""
    match geometry:
        case Point():
            _clip_point(geometry, parts, rect)
        case LineString():
            _clip_linestring(geometry, parts, rect)
        case Polygon():
            _clip_polygon(geometry, parts, rect, keep_polygons)
        case GeometryCollection():
            # Multi geometries included, members share one builder
            for member in geometry:
                _clip_geometry(member, parts, rect, keep_polygons)
        case _:
            raise UnsupportedGeometryError(
                "Encountered an unknown geometry component when clipping: "
                f"{type(geometry).__name__}"
            )


def empty_type_for(geometry: Geometry) -> Type[Geometry]:
    """Returns the geometry class of the empty result for `geometry`."""
    match geometry:
        case Point() | MultiPoint():
            return Point
        case LineString() | MultiLineString():
            return LineString
        case Polygon() | MultiPolygon():
            return Polygon
        case GeometryCollection():
            return GeometryCollection
        case _:
            raise UnsupportedGeometryError(
                f"Unsupported geometry type: {type(geometry).__name__}"
            )


def _run(
    geometry: Geometry, rect: Rectangle, keep_polygons: bool
) -> Geometry:
    empty_type = empty_type_for(geometry)
    parts = PartsBuilder()
    _clip_geometry(geometry, parts, rect, keep_polygons)
    logger.debug(
        f"Clipped {geometry.geom_type} to {rect} into {len(parts)} parts"
    )
    return parts.build(empty_type)


def clip(geometry: Geometry, rect: Rectangle) -> Geometry:
    """
    Intersects a geometry with a rectangle, keeping polygons closed.

    Args:
        geometry: The geometry to clip. It is not modified.
        rect: The clipping rectangle.

    Returns:
        A new geometry. When nothing is left, an empty geometry of the
        input's family (Point, LineString, Polygon or GeometryCollection).

    Raises:
        UnsupportedGeometryError: If the geometry, or one of its members,
                                  is of an unknown kind.
    """
    return _run(geometry, rect, keep_polygons=True)


def clip_boundary(geometry: Geometry, rect: Rectangle) -> Geometry:
    """
    Intersects the outline of a geometry with a rectangle.

    Points and lines are clipped as by `clip`. Polygons that are not
    entirely inside the rectangle are returned as the line fragments of
    their rings that fall inside it.
    """
    return _run(geometry, rect, keep_polygons=False)
