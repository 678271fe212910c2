from typing import Hashable, Optional

from esper import World

from tabletop.components.board_location import BoardLocation, BoardPath
from tabletop.components.token import Token
from tabletop.config import PlacementConfig
from tabletop.events.bus import EVENT_PATH_SETTLED, EVENT_TOKEN_PLACED, EventBus
from tabletop.geometry import Point
from tabletop.systems.grid_reflow import GridReflowSystem
from tabletop.systems.motion import FrameProjector, MotionSink, MotionTicket, SpaceProjector, TweenMotionSystem
from tabletop.systems.path_mover import PathMoverSystem
from tabletop.systems.placement_registry import PlacementRegistry
from tabletop.world import marker_table


class BoardSystem:
    """Token-placement surface for game modules.

    Owns the session's placement registry and wires it to grid reflow and
    path movement. Motion and local-space projection are injected once;
    the defaults tween through the event bus and project through ``Frame``.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        motion: Optional[MotionSink] = None,
        projector: Optional[SpaceProjector] = None,
        config: Optional[PlacementConfig] = None,
    ):
        self.world = world
        self.event_bus = event_bus
        self.config = config or PlacementConfig()
        self.motion = motion if motion is not None else TweenMotionSystem(
            world,
            event_bus,
            bounce_height=self.config.bounce_height,
            bounce_duration_ms=self.config.bounce_duration_ms,
        )
        self.projector = projector if projector is not None else FrameProjector(world)
        self.registry = PlacementRegistry(marker_table(world))
        self.reflow = GridReflowSystem(
            world,
            event_bus,
            self.registry,
            self.motion,
            self.projector,
            base_spacing=self.config.grid_spacing,
            margin=self.config.grid_margin,
        )
        self.mover = PathMoverSystem(
            event_bus,
            self.registry,
            self.reflow,
            self.motion,
            step_duration_ms=self.config.step_duration_ms,
        )
        event_bus.subscribe(EVENT_PATH_SETTLED, self.on_path_settled)

    def _require_token(self, token: int) -> Token:
        if token is None:
            raise ValueError("token must not be None")
        try:
            return self.world.component_for_entity(token, Token)
        except KeyError:
            raise ValueError(f"entity {token} is not a token") from None

    def place_token(self, owner: Hashable, token: int, location: BoardLocation) -> None:
        """Seat ``token`` on ``location`` immediately and re-centre affected locations."""
        token_comp = self._require_token(token)
        if self.mover.is_moving(token):
            raise ValueError(f"token {token} is moving and cannot be placed")
        previous = self.registry.current_location(token)
        changed = set(self.registry.place(owner, token, location))
        token_comp.owner = owner
        changed.add(location)
        self.reflow.reflow(changed, skip=self.mover.moving_tokens())
        self.event_bus.emit(EVENT_TOKEN_PLACED, token=token, owner=owner, location=location, previous=previous)

    def move_token(self, owner: Hashable, token: int, path: BoardPath) -> MotionTicket:
        self._require_token(token)
        return self.mover.move_path(owner, token, path)

    def on_path_settled(self, sender, **kwargs):
        token = kwargs.get("token")
        try:
            self.world.component_for_entity(token, Token).owner = kwargs.get("owner")
        except KeyError:
            return

    def current_location(self, token: int) -> Optional[BoardLocation]:
        if token is None:
            raise ValueError("token must not be None")
        return self.registry.current_location(token)

    def world_position_of(self, location: BoardLocation) -> Point:
        return self.registry.world_position_of(location)

    def reset(self) -> None:
        self.registry.reset()
