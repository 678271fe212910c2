from typing import Dict, Hashable

from tabletop.components.board_location import BoardPath
from tabletop.components.path_movement import PathMovement
from tabletop.constants import STEP_DURATION_MS
from tabletop.events.bus import (EVENT_PATH_ABANDONED, EVENT_PATH_BOUNCED, EVENT_PATH_SETTLED, EVENT_PATH_STEP,
                                 EventBus)
from tabletop.systems.grid_reflow import GridReflowSystem
from tabletop.systems.motion import MotionSink, MotionTicket
from tabletop.systems.placement_registry import PlacementRegistry
from tabletop.utils.logging import get_logger

logger = get_logger(__name__)


class PathMoverSystem:
    """Walks a token through a BoardPath one location at a time.

    Each step asks the motion sink for an animation and waits for its ticket
    before requesting the next one. The registry is only updated once the
    final step has completed, so a move is atomic from the registry's point
    of view. Moves of different tokens interleave freely.
    """

    def __init__(
        self,
        event_bus: EventBus,
        registry: PlacementRegistry,
        reflow: GridReflowSystem,
        motion: MotionSink,
        *,
        step_duration_ms: float = STEP_DURATION_MS,
    ):
        self.event_bus = event_bus
        self.registry = registry
        self.reflow = reflow
        self.motion = motion
        self.step_duration_ms = step_duration_ms
        self._active: Dict[int, PathMovement] = {}

    def is_moving(self, token: int) -> bool:
        return token in self._active

    def moving_tokens(self) -> frozenset:
        return frozenset(self._active)

    def move_path(self, owner: Hashable, token: int, path: BoardPath) -> MotionTicket:
        if token is None:
            raise ValueError("token must not be None")
        if owner is None:
            raise ValueError("owner must not be None")
        if path is None:
            raise ValueError("path must not be None")
        if not isinstance(path, BoardPath):
            path = BoardPath.from_iterable(path)
        if token in self._active:
            raise ValueError(f"token {token} is already moving")

        if path.is_empty:
            # Zero-distance move: acknowledge with a bounce, registry untouched.
            self.event_bus.emit(EVENT_PATH_BOUNCED, token=token, owner=owner)
            return self.motion.bounce(token)

        movement = PathMovement(token=token, owner=owner, path=path, ticket=MotionTicket())
        self._active[token] = movement
        self._step(movement)
        return movement.ticket

    def _step(self, movement: PathMovement) -> None:
        while True:
            location = movement.path[movement.index]
            start = self.motion.position_of(movement.token)
            target = self.reflow.target_for(movement.token, movement.owner, location)
            logger.debug("Token %s step %d/%d -> %r", movement.token, movement.index + 1, len(movement.path), location.marker_id)
            self.event_bus.emit(EVENT_PATH_STEP, token=movement.token, index=movement.index, location=location, target=target)
            step_ticket = self.motion.animate_to(movement.token, start, target, self.step_duration_ms)
            movement.step_ticket = step_ticket
            if not step_ticket.done:
                step_ticket.on_cancel(lambda _ticket: self._abandon(movement))
                step_ticket.then(lambda _ticket: self._advance(movement))
                return
            # Synchronous sinks finish the step at once; keep walking in place.
            movement.index += 1
            if movement.index >= len(movement.path):
                self._settle(movement)
                return

    def _advance(self, movement: PathMovement) -> None:
        if self._active.get(movement.token) is not movement:
            return
        movement.index += 1
        if movement.index < len(movement.path):
            self._step(movement)
            return
        self._settle(movement)

    def _settle(self, movement: PathMovement) -> None:
        del self._active[movement.token]
        final = movement.path.last
        changed = set(self.registry.place(movement.owner, movement.token, final))
        changed.add(final)
        self.reflow.reflow(changed, skip=self._active.keys())
        self.event_bus.emit(EVENT_PATH_SETTLED, token=movement.token, owner=movement.owner, location=final)
        movement.ticket.complete()

    def _abandon(self, movement: PathMovement) -> None:
        if self._active.get(movement.token) is not movement:
            return
        del self._active[movement.token]
        logger.debug("Token %s abandoned its path at step %d", movement.token, movement.index)
        self.event_bus.emit(EVENT_PATH_ABANDONED, token=movement.token, index=movement.index)
        movement.ticket.cancel()
