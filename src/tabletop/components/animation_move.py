from dataclasses import dataclass
from typing import Any

from tabletop.geometry import Point


@dataclass(slots=True)
class MoveAnimation:
    token: int
    start: Point
    end: Point
    ticket: Any
    linear: float = 0.0  # 0..1


@dataclass(slots=True)
class BounceAnimation:
    token: int
    origin: Point
    height: float
    ticket: Any
    linear: float = 0.0  # 0..1


@dataclass(slots=True)
class Duration:
    value: float  # seconds
