import pytest
from geoclip.core.geo import (
    Geometry,
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
    Rectangle,
    UnsupportedGeometryError,
    clip,
    clip_boundary,
)
from geoclip.core.geo.analysis import is_ccw


class UnknownGeometry(Geometry):
    geom_type = "Unknown"

    def is_empty(self):
        return False


@pytest.fixture
def rect():
    return Rectangle(10.0, 10.0, 20.0, 20.0)


@pytest.fixture
def square_with_hole():
    return Polygon(
        [(0, 0), (0, 30), (30, 30), (30, 0), (0, 0)],
        [[(10, 10), (20, 10), (20, 20), (10, 20), (10, 10)]],
    )


@pytest.fixture
def crossing_square():
    # Overlaps the top right quarter of the rectangle
    return Polygon([(15, 15), (25, 15), (25, 25), (15, 25), (15, 15)])


def test_point_outside(rect):
    assert clip(Point((0, 0)), rect) == Point()


def test_point_inside(rect):
    result = clip(Point((15, 15)), rect)
    assert result == Point((15, 15))


def test_point_on_boundary_is_dropped(rect):
    assert clip(Point((15, 10)), rect) == Point()
    assert clip(Point((10, 10)), rect) == Point()


def test_line_outside(rect):
    assert clip(LineString([(0, 0), (-5, 5)]), rect) == LineString()


def test_line_inside(rect):
    line = LineString([(15, 15), (16, 15)])
    result = clip(line, rect)
    assert result == line
    assert result is not line


def test_line_on_boundary_is_kept(rect):
    line = LineString([(10, 15), (10, 10), (15, 10)])
    assert clip(line, rect) == line


def test_line_splitting_rectangle(rect):
    result = clip(LineString([(10, 5), (25, 20)]), rect)
    assert result == LineString([(15, 10), (20, 15)])


def test_line_leaving_and_entering_gives_multilinestring(rect):
    line = LineString([(12, 12), (25, 12), (25, 18), (12, 18)])
    result = clip(line, rect)
    assert result == MultiLineString(
        [
            LineString([(12, 12), (20, 12)]),
            LineString([(20, 18), (12, 18)]),
        ]
    )


def test_line_z_is_interpolated(rect):
    result = clip(LineString([(0, 15, 0), (30, 15, 30)]), rect)
    assert result == LineString([(10, 15, 10), (20, 15, 20)])


def test_shell_on_boundary_is_kept(rect):
    ccw = Polygon([(10, 10), (20, 10), (20, 20), (10, 20), (10, 10)])
    cw = Polygon([(10, 10), (10, 20), (20, 20), (20, 10), (10, 10)])
    assert clip(ccw, rect) == ccw
    assert clip(cw, rect) == cw


def test_hole_on_boundary_gives_empty(rect, square_with_hole):
    assert clip(square_with_hole, rect) == Polygon()

    cw_hole = Polygon(
        [(0, 0), (0, 30), (30, 30), (30, 0), (0, 0)],
        [[(10, 10), (10, 20), (20, 20), (20, 10), (10, 10)]],
    )
    assert clip(cw_hole, rect) == Polygon()


def test_polygon_fully_within_rectangle(square_with_hole):
    polygon = Polygon(
        [(1, 1), (1, 30), (30, 30), (30, 1), (1, 1)],
        square_with_hole.holes,
    )
    assert clip(polygon, Rectangle(0, 0, 40, 40)) == polygon


def test_polygon_overlapping_rectangle(square_with_hole):
    result = clip(square_with_hole, Rectangle(5, 5, 15, 15))
    assert result == Polygon(
        [(5, 5), (15, 5), (15, 10), (10, 10), (10, 15), (5, 15), (5, 5)]
    )


def test_polygon_outside(rect):
    polygon = Polygon([(30, 30), (40, 30), (40, 40), (30, 40), (30, 30)])
    assert clip(polygon, rect) == Polygon()


def test_rectangle_inside_polygon(rect):
    polygon = Polygon([(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)])
    assert clip(polygon, rect) == rect.to_polygon()


@pytest.mark.parametrize("reverse", [False, True])
def test_crossing_polygon_any_orientation(rect, crossing_square, reverse):
    polygon = crossing_square
    if reverse:
        polygon = Polygon(polygon.shell.reversed())
    result = clip(polygon, rect)
    assert result == Polygon(
        [(15, 15), (20, 15), (20, 20), (15, 20), (15, 15)]
    )


def test_clipped_hole_notches_rectangle(rect):
    polygon = Polygon(
        [(0, 0), (30, 0), (30, 30), (0, 30), (0, 0)],
        [[(12, 12), (12, 25), (18, 25), (18, 12), (12, 12)]],
    )
    result = clip(polygon, rect)
    assert result == Polygon(
        [
            (10, 10),
            (20, 10),
            (20, 20),
            (18, 20),
            (18, 12),
            (12, 12),
            (12, 20),
            (10, 20),
            (10, 10),
        ]
    )


def test_rectangle_inside_hole_gives_empty(rect):
    polygon = Polygon(
        [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)],
        [[(5, 5), (5, 25), (25, 25), (25, 5), (5, 5)]],
    )
    assert clip(polygon, rect) == Polygon()


def test_intact_hole_is_kept(rect):
    polygon = Polygon(
        [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)],
        [[(12, 12), (14, 12), (14, 14), (12, 14), (12, 12)]],
    )
    result = clip(polygon, rect)
    assert result == Polygon(
        [(10, 10), (20, 10), (20, 20), (10, 20), (10, 10)],
        [[(12, 12), (12, 14), (14, 14), (14, 12), (12, 12)]],
    )


def test_multipolygon(rect, crossing_square):
    inside = Polygon([(11, 11), (13, 11), (13, 13), (11, 13), (11, 11)])
    result = clip(MultiPolygon([inside, crossing_square]), rect)
    assert result == MultiPolygon(
        [
            inside,
            Polygon([(15, 15), (20, 15), (20, 20), (15, 20), (15, 15)]),
        ]
    )


def test_multipoint(rect):
    points = MultiPoint([Point((0, 0)), Point((15, 15)), Point((12, 18))])
    assert clip(points, rect) == MultiPoint(
        [Point((15, 15)), Point((12, 18))]
    )
    assert clip(MultiPoint([Point((0, 0))]), rect) == Point()


def test_multilinestring(rect):
    lines = MultiLineString(
        [
            LineString([(0, 0), (-5, 5)]),
            LineString([(10, 5), (25, 20)]),
        ]
    )
    assert clip(lines, rect) == LineString([(15, 10), (20, 15)])


def test_heterogeneous_collection(rect, crossing_square):
    collection = GeometryCollection(
        [
            Point((15, 15)),
            Point((0, 0)),
            LineString([(10, 5), (25, 20)]),
            crossing_square,
        ]
    )
    result = clip(collection, rect)
    assert result == GeometryCollection(
        [
            Polygon([(15, 15), (20, 15), (20, 20), (15, 20), (15, 15)]),
            LineString([(15, 10), (20, 15)]),
            Point((15, 15)),
        ]
    )


def test_collection_without_survivors(rect):
    collection = GeometryCollection([Point((0, 0)), LineString()])
    assert clip(collection, rect) == GeometryCollection()


def test_empty_inputs(rect):
    assert clip(Point(), rect) == Point()
    assert clip(LineString(), rect) == LineString()
    assert clip(Polygon(), rect) == Polygon()
    assert clip(GeometryCollection(), rect) == GeometryCollection()


def test_unknown_geometry_raises(rect):
    with pytest.raises(UnsupportedGeometryError):
        clip(UnknownGeometry(), rect)
    with pytest.raises(UnsupportedGeometryError):
        clip_boundary(GeometryCollection([UnknownGeometry()]), rect)


def test_input_is_not_modified(rect, square_with_hole):
    before = square_with_hole.copy()
    clip(square_with_hole, Rectangle(5, 5, 15, 15))
    clip_boundary(square_with_hole, Rectangle(5, 5, 15, 15))
    assert square_with_hole == before


def test_boundary_of_crossing_polygon(rect, crossing_square):
    result = clip_boundary(crossing_square, rect)
    assert result == LineString([(15, 20), (15, 15), (20, 15)])


def test_boundary_of_inside_polygon_is_the_polygon(rect):
    polygon = Polygon([(11, 11), (13, 11), (13, 13), (11, 13), (11, 11)])
    assert clip_boundary(polygon, rect) == polygon


def test_boundary_of_outside_polygon(rect):
    polygon = Polygon([(30, 30), (40, 30), (40, 40), (30, 40), (30, 30)])
    assert clip_boundary(polygon, rect) == Polygon()


def test_boundary_of_clipped_hole(square_with_hole):
    result = clip_boundary(square_with_hole, Rectangle(5, 5, 15, 15))
    assert result == LineString([(10, 15), (10, 10), (15, 10)])


def test_boundary_of_intact_hole(rect):
    hole = [(12, 12), (14, 12), (14, 14), (12, 14), (12, 12)]
    polygon = Polygon(
        [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)], [hole]
    )
    assert clip_boundary(polygon, rect) == Polygon(hole)


def test_boundary_hole_on_boundary_gives_empty(rect, square_with_hole):
    assert clip_boundary(square_with_hole, rect) == Polygon()


SAMPLES = [
    Point((15, 15)),
    LineString([(10, 5), (25, 20)]),
    LineString([(12, 12), (25, 12), (25, 18), (12, 18)]),
    Polygon([(15, 15), (25, 15), (25, 25), (15, 25), (15, 15)]),
    Polygon([(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)]),
    Polygon(
        [(0, 0), (30, 0), (30, 30), (0, 30), (0, 0)],
        [[(12, 12), (12, 25), (18, 25), (18, 12), (12, 12)]],
    ),
    Polygon(
        [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)],
        [[(12, 12), (14, 12), (14, 14), (12, 14), (12, 12)]],
    ),
    Polygon([(5, 12), (25, 12), (25, 14), (5, 14), (5, 12)]),
    GeometryCollection(
        [
            Point((11, 11)),
            LineString([(0, 0), (30, 30)]),
            Polygon([(5, 5), (15, 5), (15, 15), (5, 15), (5, 5)]),
        ]
    ),
]


@pytest.mark.parametrize("geometry", SAMPLES)
def test_clip_is_idempotent(rect, geometry):
    once = clip(geometry, rect)
    assert clip(once, rect) == once


@pytest.mark.parametrize("geometry", SAMPLES)
def test_result_stays_within_rectangle(rect, geometry):
    for clip_func in (clip, clip_boundary):
        for c in clip_func(geometry, rect).coordinates():
            assert not rect.position(c.x, c.y) & Position.OUTSIDE


@pytest.mark.parametrize("geometry", SAMPLES)
def test_reconstructed_rings_are_oriented(rect, geometry):
    result = clip(geometry, rect)
    polygons = [g for g in getattr(result, "geoms", [result])]
    for polygon in polygons:
        if not isinstance(polygon, Polygon) or polygon.is_empty():
            continue
        for hole in polygon.holes:
            assert is_ccw(polygon.shell.coords) != is_ccw(hole.coords)


@pytest.mark.parametrize("clip_func", [clip, clip_boundary])
def test_hole_on_boundary_discards_shell_fragments(rect, clip_func):
    # The shell crosses the rectangle, the intact hole starts on its
    # bottom edge
    polygon = Polygon(
        [(0, 0), (30, 0), (30, 15), (0, 15), (0, 0)],
        [[(15, 10), (16, 12), (14, 12), (15, 10)]],
    )
    assert clip_func(polygon, rect) == Polygon()
