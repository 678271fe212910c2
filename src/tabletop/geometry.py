"""Geometry primitives shared by seat planning and token placement.

Screen coordinates grow to the right and downwards, so the Bottom edge of a
rectangle sits at ``max_y``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum


@dataclass(frozen=True, slots=True)
class Point:
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point") -> "Point":
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point") -> "Point":
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, factor: float) -> "Point":
        return Point(self.x * factor, self.y * factor)

    def distance_to(self, other: "Point") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other: "Point", t: float) -> "Point":
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)


ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Rect:
    """Axis-aligned rectangle; negative sizes collapse to zero."""

    x: float
    y: float
    w: float
    h: float

    def __post_init__(self) -> None:
        if self.w < 0.0:
            object.__setattr__(self, "w", 0.0)
        if self.h < 0.0:
            object.__setattr__(self, "h", 0.0)

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def size(self) -> tuple[float, float]:
        return self.w, self.h

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def max_x(self) -> float:
        return self.x + self.w

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_y(self) -> float:
        return self.y + self.h

    @property
    def center(self) -> Point:
        return Point(self.x + self.w / 2.0, self.y + self.h / 2.0)

    def contains(self, point: Point) -> bool:
        return self.min_x <= point.x <= self.max_x and self.min_y <= point.y <= self.max_y

    def contains_rect(self, other: "Rect", tolerance: float = 0.0) -> bool:
        return (
            other.min_x >= self.min_x - tolerance
            and other.max_x <= self.max_x + tolerance
            and other.min_y >= self.min_y - tolerance
            and other.max_y <= self.max_y + tolerance
        )


class Edge(IntEnum):
    """Table edges; a lower value wins distance ties."""

    BOTTOM = 0
    RIGHT = 1
    TOP = 2
    LEFT = 3

    @property
    def is_horizontal(self) -> bool:
        return self in (Edge.BOTTOM, Edge.TOP)

    @property
    def rotation_degrees(self) -> int:
        # Seat content faces the interior of the table.
        return _ROTATIONS[self]


_ROTATIONS = {
    Edge.BOTTOM: 0,
    Edge.RIGHT: 270,
    Edge.TOP: 180,
    Edge.LEFT: 90,
}


def clamp(value: float, low: float, high: float) -> float:
    """Clamp ``value`` into ``[low, high]``; ``high`` wins when the range is inverted."""
    return min(max(value, low), high)
