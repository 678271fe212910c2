"""Pure helpers turning touch points into seat strips hugging a table edge.

Nothing here touches the ECS world; every function is a deterministic
mapping of its inputs, so the lobby glue and the seat planner can share them.
"""
from typing import Dict, Tuple

from tabletop.components.seat_zone import SeatZone
from tabletop.constants import EPSILON, SEAT_STRIP_MIN_EXTENT
from tabletop.geometry import Edge, Point, Rect, clamp


def edge_distances(point: Point, bounds: Rect) -> Dict[Edge, float]:
    return {
        Edge.BOTTOM: bounds.max_y - point.y,
        Edge.RIGHT: bounds.max_x - point.x,
        Edge.TOP: point.y - bounds.min_y,
        Edge.LEFT: point.x - bounds.min_x,
    }


def nearest_edge(point: Point, bounds: Rect) -> Edge:
    """Return the edge of ``bounds`` closest to ``point``.

    Ties within ``EPSILON`` go to the higher-priority edge, so a point equally
    close to Bottom and Right resolves to Bottom.
    """
    best_edge = Edge.BOTTOM
    best_distance = None
    for edge, distance in sorted(edge_distances(point, bounds).items()):
        if best_distance is None or distance < best_distance - EPSILON:
            best_edge, best_distance = edge, distance
    return best_edge


def distance_to_nearest_edge(point: Point, bounds: Rect) -> float:
    return min(edge_distances(point, bounds).values())


def axis_range(edge: Edge, bounds: Rect) -> Tuple[float, float]:
    """Return the ``(start, end)`` coordinates available along ``edge``."""
    if edge.is_horizontal:
        return bounds.min_x, bounds.max_x
    return bounds.min_y, bounds.max_y


def axis_center(zone: SeatZone) -> float:
    center = zone.region.center
    return center.x if zone.edge.is_horizontal else center.y


def _clamped_thickness(edge: Edge, bounds: Rect, thickness: float) -> float:
    max_thickness = bounds.h if edge.is_horizontal else bounds.w
    return clamp(thickness, SEAT_STRIP_MIN_EXTENT, max_thickness)


def _clamped_length(edge: Edge, bounds: Rect, length: float) -> float:
    max_length = bounds.w if edge.is_horizontal else bounds.h
    return clamp(length, SEAT_STRIP_MIN_EXTENT, max_length)


def project_to_edge(point: Point, edge: Edge, bounds: Rect) -> Point:
    x = clamp(point.x, bounds.min_x, bounds.max_x)
    y = clamp(point.y, bounds.min_y, bounds.max_y)
    if edge is Edge.BOTTOM:
        return Point(x, bounds.max_y)
    if edge is Edge.TOP:
        return Point(x, bounds.min_y)
    if edge is Edge.LEFT:
        return Point(bounds.min_x, y)
    return Point(bounds.max_x, y)


def _strip_region(edge: Edge, bounds: Rect, thickness: float, length: float, anchor: Point) -> Rect:
    # The strip start is clamped so the whole strip stays inside the bounds.
    if edge.is_horizontal:
        start = clamp(anchor.x - length / 2.0, bounds.min_x, bounds.max_x - length)
        y = bounds.max_y - thickness if edge is Edge.BOTTOM else bounds.min_y
        return Rect(start, y, length, thickness)
    start = clamp(anchor.y - length / 2.0, bounds.min_y, bounds.max_y - length)
    x = bounds.max_x - thickness if edge is Edge.RIGHT else bounds.min_x
    return Rect(x, start, thickness, length)


def build_seat_zone(edge: Edge, bounds: Rect, thickness: float, length: float, anchor: Point) -> SeatZone:
    """Build the seat strip for ``edge`` centred near ``anchor``.

    Thickness and length are clamped to the bounds, the anchor is projected
    onto the edge line, and the rotation turns seat content towards the
    table interior.
    """
    edge = Edge(edge)
    clamped_thickness = _clamped_thickness(edge, bounds, thickness)
    clamped_length = _clamped_length(edge, bounds, length)
    projected = project_to_edge(anchor, edge, bounds)
    region = _strip_region(edge, bounds, clamped_thickness, clamped_length, projected)
    return SeatZone(
        edge=edge,
        region=region,
        rotation_degrees=edge.rotation_degrees,
        anchor=projected,
    )


def build_seat_zone_from_axis_center(
    edge: Edge,
    bounds: Rect,
    thickness: float,
    length: float,
    center: float,
) -> SeatZone:
    """Build a seat strip whose centre along ``edge`` is ``center`` (clamped into the bounds)."""
    edge = Edge(edge)
    start, end = axis_range(edge, bounds)
    half = _clamped_length(edge, bounds, length) / 2.0
    center = clamp(center, start + half, end - half)
    if edge is Edge.BOTTOM:
        anchor = Point(center, bounds.max_y)
    elif edge is Edge.TOP:
        anchor = Point(center, bounds.min_y)
    elif edge is Edge.LEFT:
        anchor = Point(bounds.min_x, center)
    else:
        anchor = Point(bounds.max_x, center)
    return build_seat_zone(edge, bounds, thickness, length, anchor)
