from enum import Enum
from typing import Sequence
import numpy as np


class Location(Enum):
    """Where a point lies relative to a ring."""

    INTERIOR = "interior"
    BOUNDARY = "boundary"
    EXTERIOR = "exterior"


def signed_ring_area(coords: Sequence[Sequence[float]]) -> float:
    """
    Calculates the signed area of a ring using the shoelace formula.

    The ring may be given closed or open. Vertices are shifted relative to
    the first one before summing, which keeps the products small for
    rings far away from the origin.

    Returns:
        The signed area. Positive for counter-clockwise rings (Y-up),
        negative for clockwise rings, 0.0 for degenerate input.
    """
    if len(coords) < 3:
        return 0.0
    pts = np.array([(c[0], c[1]) for c in coords], dtype=float)
    pts -= pts[0]
    x = pts[:, 0]
    y = pts[:, 1]
    # np.roll closes the ring; for an already closed ring the extra term
    # is zero because the last vertex equals the first.
    area = np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)
    return float(area) / 2.0


def is_ccw(coords: Sequence[Sequence[float]]) -> bool:
    """True if the ring winds counter-clockwise. Zero-area rings are not."""
    return signed_ring_area(coords) > 0.0


def _orientation_index(
    p1: Sequence[float], p2: Sequence[float], q: Sequence[float]
) -> int:
    """1 if q is left of p1->p2, -1 if right, 0 if collinear."""
    det = (p2[0] - p1[0]) * (q[1] - p1[1]) - (p2[1] - p1[1]) * (
        q[0] - p1[0]
    )
    if det > 0:
        return 1
    if det < 0:
        return -1
    return 0


def locate_in_ring(
    point: Sequence[float], coords: Sequence[Sequence[float]]
) -> Location:
    """
    Classifies a point against a closed ring by counting crossings of a
    ray cast in the +x direction.

    Points lying exactly on a ring segment are reported as BOUNDARY.
    """
    px, py = point[0], point[1]
    crossings = 0
    for i in range(1, len(coords)):
        p1 = coords[i - 1]
        p2 = coords[i]
        # Segment entirely to the left of the point
        if p1[0] < px and p2[0] < px:
            continue
        if px == p2[0] and py == p2[1]:
            return Location.BOUNDARY
        # Horizontal segment on the ray's line
        if p1[1] == py and p2[1] == py:
            if min(p1[0], p2[0]) <= px <= max(p1[0], p2[0]):
                return Location.BOUNDARY
            continue
        # Half-open rule: a vertex on the ray counts for the segment that
        # has it as its lower endpoint only.
        if (p1[1] > py and p2[1] <= py) or (p2[1] > py and p1[1] <= py):
            orient = _orientation_index(p1, p2, point)
            if orient == 0:
                return Location.BOUNDARY
            if p2[1] < p1[1]:
                orient = -orient
            if orient > 0:
                crossings += 1

    if crossings % 2 == 1:
        return Location.INTERIOR
    return Location.EXTERIOR


def is_in_ring(
    point: Sequence[float], coords: Sequence[Sequence[float]]
) -> bool:
    """True if the point is inside the ring or on its boundary."""
    return locate_in_ring(point, coords) != Location.EXTERIOR
