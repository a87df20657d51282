import math
from dataclasses import dataclass
from enum import IntFlag
from typing import List, Tuple
from .geometry import Coordinate, LinearRing, Polygon


class Position(IntFlag):
    """
    Classification of a point relative to a Rectangle.

    Boundary points carry one edge flag, or two for a corner. Exterior
    points carry OUTSIDE together with every side they lie beyond, which
    makes the flags usable as Cohen-Sutherland style outcodes.
    """

    INSIDE = 1
    OUTSIDE = 2
    LEFT = 4
    TOP = 8
    RIGHT = 16
    BOTTOM = 32
    TOP_LEFT = TOP | LEFT
    TOP_RIGHT = TOP | RIGHT
    BOTTOM_LEFT = BOTTOM | LEFT
    BOTTOM_RIGHT = BOTTOM | RIGHT
    SIDES = LEFT | TOP | RIGHT | BOTTOM


@dataclass(frozen=True)
class Rectangle:
    """
    An axis-aligned clipping rectangle.

    The rectangle must be non-empty and non-degenerate; it is immutable
    and may be shared freely between clip operations.
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    def __post_init__(self) -> None:
        if not (self.xmin < self.xmax and self.ymin < self.ymax):
            raise ValueError(
                "Clipping rectangle must be non-empty: "
                f"({self.xmin}, {self.ymin}, {self.xmax}, {self.ymax})"
            )

    @property
    def width(self) -> float:
        return self.xmax - self.xmin

    @property
    def height(self) -> float:
        return self.ymax - self.ymin

    @property
    def perimeter(self) -> float:
        return 2 * (self.width + self.height)

    @property
    def center(self) -> Coordinate:
        return Coordinate(
            self.xmin + self.width / 2, self.ymin + self.height / 2
        )

    def position(self, x: float, y: float) -> Position:
        """Classifies the point (x, y) relative to this rectangle."""
        if self.xmin < x < self.xmax and self.ymin < y < self.ymax:
            return Position.INSIDE

        if x < self.xmin or x > self.xmax or y < self.ymin or y > self.ymax:
            pos = Position.OUTSIDE
            if x < self.xmin:
                pos |= Position.LEFT
            elif x > self.xmax:
                pos |= Position.RIGHT
            if y < self.ymin:
                pos |= Position.BOTTOM
            elif y > self.ymax:
                pos |= Position.TOP
            return pos

        pos = Position(0)
        if x == self.xmin:
            pos |= Position.LEFT
        elif x == self.xmax:
            pos |= Position.RIGHT
        if y == self.ymin:
            pos |= Position.BOTTOM
        elif y == self.ymax:
            pos |= Position.TOP
        return pos

    @staticmethod
    def on_edge(pos: Position) -> bool:
        """True for positions on an edge or a corner of the rectangle."""
        return (
            bool(pos & Position.SIDES)
            and not pos & (Position.OUTSIDE | Position.INSIDE)
        )

    def perimeter_position(self, x: float, y: float) -> float:
        """
        Returns the counter-clockwise distance along the boundary from
        the bottom-left corner to the boundary point (x, y).

        Raises:
            ValueError: If the point does not lie on the boundary.
        """
        if not self.on_edge(self.position(x, y)):
            raise ValueError(f"Point ({x}, {y}) is not on the boundary")
        w, h = self.width, self.height
        if y == self.ymin:
            return x - self.xmin
        if x == self.xmax:
            return w + (y - self.ymin)
        if y == self.ymax:
            return w + h + (self.xmax - x)
        return 2 * w + h + (self.ymax - y)

    def corners(self) -> List[Tuple[float, Coordinate]]:
        """
        Lists the corners in counter-clockwise order, starting at the
        bottom-left one, each with its perimeter position.
        """
        w, h = self.width, self.height
        return [
            (0.0, Coordinate(self.xmin, self.ymin)),
            (w, Coordinate(self.xmax, self.ymin)),
            (w + h, Coordinate(self.xmax, self.ymax)),
            (2 * w + h, Coordinate(self.xmin, self.ymax)),
        ]

    def to_linear_ring(self, z: float = math.nan) -> LinearRing:
        """Builds the counter-clockwise boundary ring of the rectangle."""
        return LinearRing(
            [
                Coordinate(self.xmin, self.ymin, z),
                Coordinate(self.xmax, self.ymin, z),
                Coordinate(self.xmax, self.ymax, z),
                Coordinate(self.xmin, self.ymax, z),
                Coordinate(self.xmin, self.ymin, z),
            ]
        )

    def to_polygon(self, z: float = math.nan) -> Polygon:
        return Polygon(self.to_linear_ring(z))
