from __future__ import annotations

from typing import Callable, Mapping, Sequence

from esper import World

from tabletop.config import PlacementConfig
from tabletop.events.bus import EventBus
from tabletop.factories.tokens import create_token
from tabletop.geometry import ORIGIN, Point
from tabletop.systems.board import BoardSystem
from tabletop.systems.motion import InstantMotion
from tabletop.world import create_world


class OffsetProjector:
    """Projects every token through the same world-to-local conversion."""

    def __init__(self, to_local: Callable[[Point], Point]):
        self._to_local = to_local

    def to_local(self, token: int, world_point: Point) -> Point:
        return self._to_local(world_point)


def build_board(
    *,
    markers: Mapping[str, Point] | None = None,
    board_root: Point = ORIGIN,
    to_local: Callable[[Point], Point] | None = None,
    instant: bool = True,
    config: PlacementConfig | None = None,
) -> tuple[World, EventBus, BoardSystem]:
    """Build a world and board system; instant motion unless told otherwise."""

    bus = EventBus()
    world = create_world(markers=markers, board_root=board_root)
    motion = InstantMotion(world) if instant else None
    projector = OffsetProjector(to_local) if to_local is not None else None
    board = BoardSystem(world, bus, motion=motion, projector=projector, config=config)
    return world, bus, board


def make_tokens(world: World, owners: Sequence[object], **kwargs) -> list[int]:
    return [create_token(world, owner, **kwargs) for owner in owners]
