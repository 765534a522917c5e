from __future__ import annotations

import pytest

from spacedetect.geometry.polygon import (
    area_centroid,
    distance,
    ensure_counter_clockwise,
    is_counter_clockwise,
    point_in_polygon,
    point_to_segment_distance,
    polygon_area,
    polygon_perimeter,
    signed_area,
    vertex_centroid,
)
from spacedetect.schema import Point2D
from tests.utils_walls import make_polygon


RECT_CCW = make_polygon((0, 0), (4, 0), (4, 3), (0, 3))


def test_signed_area_follows_winding():
    assert signed_area(RECT_CCW) == pytest.approx(12.0)
    assert signed_area(list(reversed(RECT_CCW))) == pytest.approx(-12.0)
    assert polygon_area(list(reversed(RECT_CCW))) == pytest.approx(12.0)


def test_degenerate_polygons_have_no_area():
    assert polygon_area([]) == 0.0
    assert polygon_area(make_polygon((0, 0), (1, 1))) == 0.0
    # Collinear points
    assert polygon_area(make_polygon((0, 0), (1, 0), (2, 0))) == pytest.approx(0.0)


def test_perimeter_closes_the_ring():
    assert polygon_perimeter(RECT_CCW) == pytest.approx(14.0)
    assert polygon_perimeter(make_polygon((0, 0))) == 0.0


def test_vertex_centroid_is_vertex_mean():
    c = vertex_centroid(RECT_CCW)
    assert (c.x, c.y) == pytest.approx((2.0, 1.5))
    assert vertex_centroid([]) == Point2D(x=0.0, y=0.0)


def test_vertex_centroid_differs_from_area_centroid():
    # Extra vertices bunched on the bottom edge pull the vertex mean down
    poly = make_polygon((0, 0), (1, 0), (2, 0), (3, 0), (4, 0), (4, 4), (0, 4))
    label = vertex_centroid(poly)
    mass = area_centroid(poly)
    assert (mass.x, mass.y) == pytest.approx((2.0, 2.0))
    assert label.y < mass.y


def test_area_centroid_falls_back_for_degenerate_input():
    line = make_polygon((0, 0), (2, 0), (4, 0))
    c = area_centroid(line)
    assert (c.x, c.y) == pytest.approx((2.0, 0.0))


def test_point_in_polygon():
    assert point_in_polygon(Point2D(x=2, y=1.5), RECT_CCW)
    assert not point_in_polygon(Point2D(x=5, y=1.5), RECT_CCW)
    assert not point_in_polygon(Point2D(x=2, y=1.5), make_polygon((0, 0), (1, 1)))


def test_point_in_polygon_concave():
    l_shape = make_polygon((0, 0), (6, 0), (6, 3), (3, 3), (3, 6), (0, 6))
    assert point_in_polygon(Point2D(x=1, y=5), l_shape)
    assert point_in_polygon(Point2D(x=5, y=1), l_shape)
    assert not point_in_polygon(Point2D(x=5, y=5), l_shape)


def test_ensure_counter_clockwise():
    cw = list(reversed(RECT_CCW))
    assert not is_counter_clockwise(cw)
    fixed = ensure_counter_clockwise(cw)
    assert is_counter_clockwise(fixed)
    assert polygon_area(fixed) == pytest.approx(12.0)
    assert ensure_counter_clockwise(RECT_CCW) is RECT_CCW
    assert ensure_counter_clockwise(fixed) == fixed


def test_distances():
    assert distance(Point2D(x=0, y=0), Point2D(x=3, y=4)) == pytest.approx(5.0)
    a, b = Point2D(x=0, y=0), Point2D(x=4, y=0)
    assert point_to_segment_distance(Point2D(x=2, y=2), a, b) == pytest.approx(2.0)
    # Beyond the end the nearest point is the endpoint
    assert point_to_segment_distance(Point2D(x=7, y=4), a, b) == pytest.approx(5.0)
    # Zero-length segment degrades to point distance
    assert point_to_segment_distance(Point2D(x=3, y=4), a, a) == pytest.approx(5.0)
