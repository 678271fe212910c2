from __future__ import annotations

from typing import Hashable, Optional

from esper import World

from tabletop.components.token import Frame, Position, Token
from tabletop.constants import TOKEN_FOOTPRINT_RADIUS
from tabletop.geometry import ORIGIN, Point


def create_token(
    world: World,
    owner: Optional[Hashable] = None,
    *,
    footprint_radius: float = TOKEN_FOOTPRINT_RADIUS,
    position: Point = ORIGIN,
    frame_origin: Point | None = None,
) -> int:
    """Create a token entity; ``frame_origin`` places its parent frame in world space."""
    components = [
        Token(owner=owner, footprint_radius=footprint_radius),
        Position(position.x, position.y),
    ]
    if frame_origin is not None:
        components.append(Frame(origin=frame_origin))
    return world.create_entity(*components)
