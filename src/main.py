"""Entry point for the tabletop placement engine.

Sets up the ECS world, event bus and systems, then drives a short headless
session: players claim seats around the table and walk tokens over the board.
"""
from tabletop.components.board_location import BoardLocation, BoardPath
from tabletop.config import PlacementConfig
from tabletop.events.bus import EVENT_SEAT_CLAIMED, EVENT_SEAT_REJECTED, EVENT_TICK, EventBus
from tabletop.factories.tokens import create_token
from tabletop.geometry import Point, Rect
from tabletop.systems.board import BoardSystem
from tabletop.systems.motion import MotionTicket
from tabletop.systems.seat_planner import SeatPlannerSystem
from tabletop.utils.logging import get_logger, setup_logging
from tabletop.world import create_world

logger = get_logger("tabletop.main")

TABLE_BOUNDS = Rect(0, 0, 1920, 1080)
BOARD_MARKERS = {
    "start": Point(660, 540),
    "tile_1": Point(780, 540),
    "tile_2": Point(900, 540),
    "tile_3": Point(1020, 540),
    "tile_4": Point(1140, 540),
}


class TabletopSession:
    def __init__(self, config: PlacementConfig | None = None):
        self.config = config or PlacementConfig.from_env()
        self.event_bus = EventBus()
        self.world = create_world(markers=BOARD_MARKERS, board_root=TABLE_BOUNDS.center)
        self.board = BoardSystem(self.world, self.event_bus, config=self.config)
        self.seat_planner = SeatPlannerSystem(self.world, self.event_bus, self.config)
        self.event_bus.subscribe(EVENT_SEAT_CLAIMED, self.on_seat_claimed)
        self.event_bus.subscribe(EVENT_SEAT_REJECTED, self.on_seat_rejected)
        self.tickets: list[MotionTicket] = []

    def on_seat_claimed(self, sender, **kwargs):
        zone = kwargs.get('zone')
        logger.info("%s seated on the %s edge at %s", kwargs.get('owner'), zone.edge.name.lower(), zone.region)

    def on_seat_rejected(self, sender, **kwargs):
        logger.info("Seat rejected at (%.0f, %.0f): %s", kwargs.get('x'), kwargs.get('y'), kwargs.get('reason'))

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def pending(self) -> bool:
        return any(not (ticket.done or ticket.cancelled) for ticket in self.tickets)

    def run(self, delta_time: float = 1/60, max_ticks: int = 3600) -> int:
        ticks = 0
        while self.pending() and ticks < max_ticks:
            self.on_update(delta_time)
            ticks += 1
        return ticks


def main():
    setup_logging()
    session = TabletopSession()

    for owner, touch in (
        ("alice", Point(900, 1060)),
        ("bob", Point(960, 1040)),
        ("carol", Point(30, 500)),
        ("dave", Point(960, 540)),
    ):
        session.seat_planner.claim(touch, TABLE_BOUNDS, owner=owner)

    tokens = {
        owner: create_token(session.world, owner)
        for owner in ("alice", "bob", "carol")
    }
    for owner, token in tokens.items():
        session.board.place_token(owner, token, BoardLocation("start"))

    path = BoardPath.of(BoardLocation("tile_1"), BoardLocation("tile_2"), BoardLocation("tile_3"))
    session.tickets.append(session.board.move_token("alice", tokens["alice"], path))
    session.tickets.append(session.board.move_token("bob", tokens["bob"], path))
    session.tickets.append(session.board.move_token("carol", tokens["carol"], BoardPath()))

    ticks = session.run()
    logger.info("Session settled after %d ticks", ticks)
    for owner, token in tokens.items():
        location = session.board.current_location(token)
        logger.info(
            "%s token at %s %s",
            owner,
            location.marker_id,
            session.board.motion.position_of(token),
        )


if __name__ == "__main__":
    main()
