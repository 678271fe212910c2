import math
from typing import Callable, List, Optional, Protocol

from blinker import Signal
from esper import World

from tabletop.components.animation_move import BounceAnimation, Duration, MoveAnimation
from tabletop.components.token import Frame, Position
from tabletop.constants import BOUNCE_DURATION_MS, BOUNCE_HEIGHT
from tabletop.events.bus import (EVENT_ANIMATION_CANCELLED, EVENT_ANIMATION_COMPLETE, EVENT_ANIMATION_START,
                                 EVENT_TICK, EventBus)
from tabletop.geometry import Point


class MotionTicket:
    """Completion signal for one requested motion.

    Callbacks registered with ``then`` run once when the motion completes;
    registering on an already completed ticket runs the callback immediately.
    A cancelled ticket never completes.
    """

    def __init__(self) -> None:
        self.done = False
        self.cancelled = False
        self._completed = Signal("motion_completed")
        self._cancelled = Signal("motion_cancelled")

    @classmethod
    def completed(cls) -> "MotionTicket":
        ticket = cls()
        ticket.complete()
        return ticket

    def then(self, fn: Callable[["MotionTicket"], None]) -> "MotionTicket":
        if self.done:
            fn(self)
        elif not self.cancelled:
            self._completed.connect(fn, weak=False)
        return self

    def on_cancel(self, fn: Callable[["MotionTicket"], None]) -> "MotionTicket":
        if self.cancelled:
            fn(self)
        elif not self.done:
            self._cancelled.connect(fn, weak=False)
        return self

    def complete(self) -> None:
        if self.done or self.cancelled:
            return
        self.done = True
        self._completed.send(self)

    def cancel(self) -> None:
        if self.done or self.cancelled:
            return
        self.cancelled = True
        self._cancelled.send(self)


class MotionSink(Protocol):
    """Capability the placement engine uses to read, set and animate token positions."""

    def position_of(self, token: int) -> Point: ...

    def set_position(self, token: int, point: Point) -> None: ...

    def animate_to(self, token: int, start: Point, end: Point, duration_ms: float) -> MotionTicket: ...

    def bounce(self, token: int) -> MotionTicket: ...


class _PositionStore:
    def __init__(self, world: World):
        self.world = world

    def position_of(self, token: int) -> Point:
        try:
            return self.world.component_for_entity(token, Position).point
        except KeyError:
            return Point()

    def set_position(self, token: int, point: Point) -> None:
        try:
            self.world.component_for_entity(token, Position).set(point)
        except KeyError:
            self.world.add_component(token, Position(point.x, point.y))


class InstantMotion(_PositionStore):
    """Motion sink that snaps every request and completes it synchronously."""

    def __init__(self, world: World):
        super().__init__(world)
        self.moves: List[tuple] = []
        self.bounces: List[int] = []

    def animate_to(self, token: int, start: Point, end: Point, duration_ms: float) -> MotionTicket:
        self.moves.append((token, start, end))
        self.set_position(token, end)
        return MotionTicket.completed()

    def bounce(self, token: int) -> MotionTicket:
        self.bounces.append(token)
        return MotionTicket.completed()


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1.0) / 2.0


class TweenMotionSystem(_PositionStore):
    """Tick-driven tweens; each move or bounce is its own animation entity."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        bounce_height: float = BOUNCE_HEIGHT,
        bounce_duration_ms: float = BOUNCE_DURATION_MS,
    ):
        super().__init__(world)
        self.event_bus = event_bus
        self.bounce_height = bounce_height
        self.bounce_duration_ms = bounce_duration_ms
        event_bus.subscribe(EVENT_TICK, self.on_tick)

    def animate_to(self, token: int, start: Point, end: Point, duration_ms: float) -> MotionTicket:
        ticket = MotionTicket()
        self.set_position(token, start)
        if duration_ms <= 0:
            self.set_position(token, end)
            ticket.complete()
            return ticket
        self.world.create_entity(
            MoveAnimation(token=token, start=start, end=end, ticket=ticket),
            Duration(duration_ms / 1000.0),
        )
        self.event_bus.emit(EVENT_ANIMATION_START, kind='move', token=token, start=start, end=end)
        return ticket

    def bounce(self, token: int) -> MotionTicket:
        ticket = MotionTicket()
        if self.bounce_duration_ms <= 0:
            ticket.complete()
            return ticket
        origin = self.position_of(token)
        self.world.create_entity(
            BounceAnimation(token=token, origin=origin, height=abs(self.bounce_height), ticket=ticket),
            Duration(self.bounce_duration_ms / 1000.0),
        )
        self.event_bus.emit(EVENT_ANIMATION_START, kind='bounce', token=token, start=origin, end=origin)
        return ticket

    def is_animating(self, token: int) -> bool:
        return any(anim.token == token for _, anim in self.world.get_component(MoveAnimation)) or any(
            anim.token == token for _, anim in self.world.get_component(BounceAnimation)
        )

    def cancel(self, token: int) -> None:
        """Stop every animation of ``token`` where it is and cancel their tickets."""
        for comp_type, kind in ((MoveAnimation, 'move'), (BounceAnimation, 'bounce')):
            for ent, anim in list(self.world.get_component(comp_type)):
                if anim.token != token:
                    continue
                if comp_type is BounceAnimation:
                    self.set_position(token, anim.origin)
                self.world.delete_entity(ent, immediate=True)
                anim.ticket.cancel()
                self.event_bus.emit(EVENT_ANIMATION_CANCELLED, kind=kind, token=token)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        finished: List[tuple] = []
        for ent, (move, duration) in list(self.world.get_components(MoveAnimation, Duration)):
            move.linear = min(1.0, move.linear + dt / duration.value)
            self.set_position(move.token, move.start.lerp(move.end, ease_in_out_sine(move.linear)))
            if move.linear >= 1.0:
                finished.append((ent, 'move', move.token, move.end, move.ticket))
        for ent, (bounce, duration) in list(self.world.get_components(BounceAnimation, Duration)):
            bounce.linear = min(1.0, bounce.linear + dt / duration.value)
            lift = bounce.height * math.sin(math.pi * bounce.linear)
            self.set_position(bounce.token, Point(bounce.origin.x, bounce.origin.y - lift))
            if bounce.linear >= 1.0:
                finished.append((ent, 'bounce', bounce.token, bounce.origin, bounce.ticket))
        # Completion callbacks may queue the next step; they run after this tick's bookkeeping.
        for ent, kind, token, final, ticket in finished:
            if not self.world.entity_exists(ent):
                continue
            self.set_position(token, final)
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_ANIMATION_COMPLETE, kind=kind, token=token, position=final)
            ticket.complete()


class SpaceProjector(Protocol):
    """Converts world points into a token's local rendering frame."""

    def to_local(self, token: int, world_point: Point) -> Point: ...


class FrameProjector:
    """Projects through the token's ``Frame`` component; identity without one."""

    def __init__(self, world: World):
        self.world = world

    def to_local(self, token: int, world_point: Point) -> Point:
        try:
            frame = self.world.component_for_entity(token, Frame)
        except KeyError:
            return world_point
        return world_point - frame.origin


def wait_for(ticket: Optional[MotionTicket], event_bus: EventBus, dt: float = 1/60, max_ticks: int = 10_000) -> int:
    """Emit ticks until ``ticket`` completes; returns the number of ticks emitted."""
    ticks = 0
    while ticket is not None and not ticket.done and not ticket.cancelled and ticks < max_ticks:
        event_bus.emit(EVENT_TICK, dt=dt)
        ticks += 1
    return ticks
