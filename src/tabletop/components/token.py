from dataclasses import dataclass
from typing import Hashable, Optional

from tabletop.constants import TOKEN_FOOTPRINT_RADIUS
from tabletop.geometry import ORIGIN, Point


@dataclass(slots=True)
class Token:
    """Movable board piece.

    owner: player identifier controlling the token (None until first placement).
    footprint_radius: half the token's visual size, used to space shared locations.
    """
    owner: Optional[Hashable] = None
    footprint_radius: float = TOKEN_FOOTPRINT_RADIUS


@dataclass(slots=True)
class Position:
    """Rendered position of an entity, expressed in its parent frame."""
    x: float = 0.0
    y: float = 0.0

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def set(self, point: Point) -> None:
        self.x = point.x
        self.y = point.y


@dataclass(slots=True)
class Frame:
    """Origin of the token's parent frame in world space."""
    origin: Point = ORIGIN
