import pytest

from tabletop.geometry import Edge, Point, Rect
from tabletop.ui.edge_resolver import (axis_center, build_seat_zone, build_seat_zone_from_axis_center,
                                       distance_to_nearest_edge, nearest_edge)

VIEWPORT = Rect(0, 0, 1920, 1080)


@pytest.mark.parametrize("point,edge", [
    (Point(1000, 1075), Edge.BOTTOM),
    (Point(1905, 400), Edge.RIGHT),
    (Point(960, 10), Edge.TOP),
    (Point(5, 540), Edge.LEFT),
])
def test_nearest_edge_picks_closest_side(point, edge):
    assert nearest_edge(point, VIEWPORT) == edge


def test_nearest_edge_tie_prefers_bottom_over_right():
    bounds = Rect(0, 0, 100, 100)
    assert nearest_edge(Point(90, 90), bounds) == Edge.BOTTOM


def test_nearest_edge_tie_prefers_right_over_top():
    bounds = Rect(0, 0, 100, 100)
    assert nearest_edge(Point(90, 10), bounds) == Edge.RIGHT


def test_nearest_edge_tie_prefers_top_over_left():
    bounds = Rect(0, 0, 100, 100)
    assert nearest_edge(Point(10, 10), bounds) == Edge.TOP


def test_distance_to_nearest_edge():
    assert distance_to_nearest_edge(Point(100, 200), VIEWPORT) == 100


def test_build_seat_zone_bottom_region():
    zone = build_seat_zone(Edge.BOTTOM, VIEWPORT, 300, 600, Point(100, 900))
    assert zone.edge == Edge.BOTTOM
    assert zone.rotation_degrees == 0
    assert zone.region.y == pytest.approx(VIEWPORT.max_y - 300)
    assert zone.region.h == 300
    assert zone.region.w == 600
    # Anchor near the left corner pushes the strip flush with the left side.
    assert zone.region.x == 0


def test_build_seat_zone_clamps_thickness():
    zone = build_seat_zone(Edge.TOP, VIEWPORT, 2000, 400, Point(50, 40))
    assert zone.region.h == VIEWPORT.h
    assert zone.rotation_degrees == 180


def test_build_seat_zone_clamps_length():
    zone = build_seat_zone(Edge.BOTTOM, VIEWPORT, 200, 5000, Point(960, 900))
    assert zone.region.w == VIEWPORT.w


def test_build_seat_zone_projects_anchor_onto_edge():
    anchor = Point(800, 1060)
    zone = build_seat_zone(Edge.BOTTOM, VIEWPORT, 250, 400, anchor)
    assert zone.anchor == Point(800, VIEWPORT.max_y)


def test_build_seat_zone_centres_strip_on_anchor():
    anchor = Point(1500, 400)
    zone = build_seat_zone(Edge.RIGHT, VIEWPORT, 200, 500, anchor)
    assert zone.region.x == VIEWPORT.max_x - 200
    assert zone.region.y + 250 == pytest.approx(anchor.y)
    assert zone.region.h == 500
    assert zone.anchor.x == VIEWPORT.max_x
    assert zone.rotation_degrees == 270


@pytest.mark.parametrize("edge", list(Edge))
@pytest.mark.parametrize("anchor", [Point(-50, -50), Point(960, 540), Point(5000, 5000)])
def test_build_seat_zone_stays_inside_bounds(edge, anchor):
    zone = build_seat_zone(edge, VIEWPORT, 320, 520, anchor)
    assert VIEWPORT.contains_rect(zone.region)
    assert VIEWPORT.contains(zone.anchor)


def test_build_seat_zone_degenerate_bounds_gives_zero_width():
    bounds = Rect(10, 10, 0, 200)
    zone = build_seat_zone(Edge.BOTTOM, bounds, 50, 100, Point(10, 200))
    assert zone.region.w == 0
    assert bounds.contains_rect(zone.region)


def test_build_seat_zone_from_axis_center_left_edge():
    zone = build_seat_zone_from_axis_center(Edge.LEFT, VIEWPORT, 320, 400, 800)
    assert zone.anchor == Point(0, 800)
    assert zone.region.x == 0
    assert axis_center(zone) == pytest.approx(800)
    assert zone.rotation_degrees == 90


def test_build_seat_zone_from_axis_center_clamps_center():
    zone = build_seat_zone_from_axis_center(Edge.BOTTOM, VIEWPORT, 320, 520, 1900)
    assert axis_center(zone) == pytest.approx(1920 - 260)
