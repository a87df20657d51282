import logging
from typing import List, NamedTuple, Optional, TYPE_CHECKING
from .geometry import Coordinate, LineString
from .rectangle import Position, Rectangle

if TYPE_CHECKING:
    from .builder import PartsBuilder

logger = logging.getLogger(__name__)


class ClippedSegment(NamedTuple):
    start: Coordinate
    end: Coordinate
    changes: int


def clip_segment(
    p1: Coordinate, p2: Coordinate, rect: Rectangle
) -> Optional[ClippedSegment]:
    """
    Clips a single line segment against a rectangle.

    Endpoints outside the rectangle are moved onto its boundary, first
    along x and then along y. The new ordinates (including z) are always
    interpolated along the original, unclipped segment. An endpoint is
    only moved when it lies strictly outside, so segments that end on
    the boundary come back unchanged.

    Based on Matthes & Drakopoulos, "Another Simple but Faster Method for
    2D Line Clipping" (2019).

    Args:
        p1: The start of the segment.
        p2: The end of the segment.
        rect: The clipping rectangle.

    Returns:
        The clipped segment together with the number of endpoint moves
        (0 means the segment was left untouched), or None if the segment
        lies entirely outside the rectangle.
    """
    common = rect.position(p1.x, p1.y) & rect.position(p2.x, p2.y)
    if common & Position.OUTSIDE and common & Position.SIDES:
        return None

    # No division by zero below: a segment that is parallel to an axis
    # and needs clipping on that axis has been rejected above.
    x = [p1.x, p2.x]
    y = [p1.y, p2.y]
    z = [p1.z, p2.z]
    changes = 0
    for i in range(2):
        if x[i] < rect.xmin or x[i] > rect.xmax:
            bound = rect.xmin if x[i] < rect.xmin else rect.xmax
            x[i] = bound
            y[i] = ((p2.y - p1.y) / (p2.x - p1.x)) * (bound - p1.x) + p1.y
            z[i] = ((p2.z - p1.z) / (p2.x - p1.x)) * (bound - p1.x) + p1.z
            changes += 1

        if y[i] < rect.ymin or y[i] > rect.ymax:
            bound = rect.ymin if y[i] < rect.ymin else rect.ymax
            y[i] = bound
            x[i] = ((p2.x - p1.x) / (p2.y - p1.y)) * (bound - p1.y) + p1.x
            z[i] = ((p2.z - p1.z) / (p2.y - p1.y)) * (bound - p1.y) + p1.z
            changes += 1

    # A segment passing by a corner ends up with both points beyond the
    # same vertical edge.
    if (x[0] < rect.xmin and x[1] < rect.xmin) or (
        x[0] > rect.xmax and x[1] > rect.xmax
    ):
        return None

    return ClippedSegment(
        Coordinate(x[0], y[0], z[0]),
        Coordinate(x[1], y[1], z[1]),
        changes,
    )


def clip_line_parts(
    line: LineString, rect: Rectangle, parts: "PartsBuilder"
) -> bool:
    """
    Walks the segments of a line or ring, clips each of them and adds the
    maximal connected runs of clipped output to `parts` as line strings.

    A segment that is rejected as fully outside counts as a change, so a
    line that leaves the rectangle is never reported as untouched.

    Returns:
        True if no segment needed clipping, i.e. the line lies entirely
        inside the rectangle (possibly touching its boundary). In that case
        nothing is added to `parts` and the caller should use the
        original line.
    """
    coords = line.coords
    if not coords:
        return False

    stored: List[Coordinate] = []
    changes = 0
    for p1, p2 in zip(coords, coords[1:]):
        segment = clip_segment(p1, p2, rect)
        if segment is None:
            changes += 1
            continue

        changes += segment.changes
        if not stored or not stored[-1].equals_2d(segment.start):
            if len(stored) > 1:
                parts.add(LineString(stored))
            stored = [segment.start]
        if not segment.start.equals_2d(segment.end):
            stored.append(segment.end)

    if changes == 0:
        return True

    if len(stored) > 1:
        parts.add(LineString(stored))
    logger.debug(
        f"Clipped {line.geom_type} of {len(coords)} points "
        f"with {changes} changes"
    )
    return False
