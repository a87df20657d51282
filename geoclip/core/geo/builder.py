from __future__ import annotations
import logging
from typing import List, Optional, Tuple, Type
from .analysis import is_ccw, is_in_ring, signed_ring_area
from .geometry import (
    Coordinate,
    Geometry,
    GeometryCollection,
    LinearRing,
    LineString,
    Point,
    Polygon,
    UnsupportedGeometryError,
    build_geometry,
)
from .rectangle import Rectangle

logger = logging.getLogger(__name__)


def normalize_ring(ring: List[Coordinate]) -> List[Coordinate]:
    """
    Rotates a closed ring so that it starts at its lexicographically
    smallest (x, y) vertex.
    """
    body = ring[:-1]
    if not body:
        return list(ring)
    start = min(range(len(body)), key=lambda i: (body[i][0], body[i][1]))
    body = body[start:] + body[:start]
    return body + [body[0]]


def _close_boundary(
    rect: Rectangle,
    ring: List[Coordinate],
    target: Coordinate,
) -> None:
    """
    Extends `ring` counter-clockwise along the rectangle boundary from its
    last point up to `target`, adding every corner passed on the way. The
    target itself is not appended.
    """
    end = ring[-1]
    start_pos = rect.perimeter_position(end.x, end.y)
    distance = _boundary_distance(rect, end, target)
    passed = []
    for corner_pos, corner in rect.corners():
        offset = (corner_pos - start_pos) % rect.perimeter
        if 0.0 < offset < distance:
            passed.append((offset, corner))
    passed.sort(key=lambda item: item[0])
    ring.extend(corner for _, corner in passed)


def _boundary_distance(
    rect: Rectangle, start: Coordinate, end: Coordinate
) -> float:
    """Counter-clockwise distance along the boundary from start to end."""
    return (
        rect.perimeter_position(end.x, end.y)
        - rect.perimeter_position(start.x, start.y)
    ) % rect.perimeter


class PartsBuilder:
    """
    Collects the output of a clip operation.

    Finished polygons and points are kept as they are. Line strings are
    either final output (when clipping lines) or open ring fragments
    waiting to be reconnected along the rectangle boundary (when clipping
    polygons). Builders can be nested: a builder used for a single ring
    hands its parts to the polygon level builder via `release()`.
    """

    def __init__(self) -> None:
        self.polygons: List[Polygon] = []
        self.lines: List[LineString] = []
        self.points: List[Point] = []

    def __len__(self) -> int:
        return len(self.polygons) + len(self.lines) + len(self.points)

    def is_empty(self) -> bool:
        return not (self.polygons or self.lines or self.points)

    def add(self, geometry: Geometry) -> None:
        """Takes ownership of a finished part or an open fragment."""
        if isinstance(geometry, Polygon):
            self.polygons.append(geometry)
        elif isinstance(geometry, LineString):
            self.lines.append(geometry)
        elif isinstance(geometry, Point):
            self.points.append(geometry)
        else:
            raise UnsupportedGeometryError(
                f"Cannot collect {type(geometry).__name__} parts"
            )

    def release(self, other: PartsBuilder) -> None:
        """Moves all parts into another builder, leaving this one empty."""
        other.polygons.extend(self.polygons)
        other.lines.extend(self.lines)
        other.points.extend(self.points)
        self.clear()

    def clear(self) -> None:
        self.polygons = []
        self.lines = []
        self.points = []

    def reverse_lines(self) -> None:
        """
        Reverses the direction of every line as well as their order, so
        the fragment that started the ring stays first.
        """
        self.lines = [line.reversed() for line in reversed(self.lines)]

    def reconnect(self) -> None:
        """
        Joins the last fragment of a clipped ring to the first one.

        When the start vertex of a ring lies inside the rectangle, the walk
        produces one fragment beginning there and another one ending there.
        Those two belong together.
        """
        if len(self.lines) < 2:
            return
        first = self.lines[0]
        last = self.lines[-1]
        if not first.coords[0].equals_2d(last.coords[-1]):
            return
        merged = LineString(last.coords + first.coords[1:])
        self.lines = [merged] + self.lines[1:-1]
        logger.debug(f"Reconnected ring start, {len(self.lines)} fragments")

    def reconnect_polygons(self, rect: Rectangle) -> None:
        """
        Turns the collected fragments of one polygon into closed shells
        and attaches the collected intact holes to them.

        All fragments must run with the polygon interior on their left.
        Open chains are closed by walking the rectangle boundary
        counter-clockwise to the nearest chain start, which may be their
        own. Without any fragments the rectangle itself is the shell.
        """
        shells: List[Tuple[List[Coordinate], List[LinearRing]]] = []
        if not self.lines:
            shells.append((list(rect.to_linear_ring().coords), []))
        else:
            ring: List[Coordinate] = []
            while self.lines or ring:
                if not ring:
                    ring = list(self.lines.pop(0).coords)

                if ring[0].equals_2d(ring[-1]):
                    if signed_ring_area(ring) <= 0.0:
                        logger.debug(f"Dropping degenerate ring {ring}")
                    else:
                        shells.append((normalize_ring(ring), []))
                    ring = []
                    continue

                index = self._find_next_line(rect, ring)
                if index is None:
                    _close_boundary(rect, ring, ring[0])
                    ring.append(ring[0])
                else:
                    line = self.lines.pop(index)
                    _close_boundary(rect, ring, line.coords[0])
                    if ring[-1].equals_2d(line.coords[0]):
                        ring.extend(line.coords[1:])
                    else:
                        ring.extend(line.coords)

        for hole_polygon in self.polygons:
            hole = hole_polygon.shell
            if is_ccw(hole.coords):
                hole = hole.reversed()
            owner = self._find_owner(shells, hole.coords[0])
            if owner is None:
                logger.debug("Dropping hole outside all clipped shells")
            else:
                owner.append(hole)

        self.polygons = [
            Polygon(LinearRing(shell), holes) for shell, holes in shells
        ]
        logger.debug(f"Reconnected into {len(self.polygons)} polygons")

    def _find_next_line(
        self, rect: Rectangle, ring: List[Coordinate]
    ) -> Optional[int]:
        """
        Returns the index of the pending line whose start is reached first
        when walking the boundary from the end of `ring`, or None if the
        ring's own start comes first.
        """
        end = ring[-1]
        best_distance = _boundary_distance(rect, end, ring[0])
        best_index = None
        for i, line in enumerate(self.lines):
            distance = _boundary_distance(rect, end, line.coords[0])
            if distance < best_distance:
                best_distance = distance
                best_index = i
        return best_index

    @staticmethod
    def _find_owner(
        shells: List[Tuple[List[Coordinate], List[LinearRing]]],
        point: Coordinate,
    ) -> Optional[List[LinearRing]]:
        if len(shells) == 1:
            return shells[0][1]
        for shell, holes in shells:
            if is_in_ring(point, shell):
                return holes
        return None

    def build(
        self, empty_type: Type[Geometry] = GeometryCollection
    ) -> Geometry:
        """
        Produces the final geometry from all parts and empties the
        builder.

        Args:
            empty_type: The geometry class returned when nothing was
                        collected.
        """
        parts: List[Geometry] = [*self.polygons, *self.lines, *self.points]
        self.clear()
        return build_geometry(parts, empty_type)
