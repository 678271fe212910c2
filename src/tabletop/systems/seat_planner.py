import uuid
from dataclasses import dataclass, field
from typing import Hashable, List, Optional, Tuple

from esper import World

from tabletop.components.seat_zone import Seated, SeatZone
from tabletop.config import PlacementConfig
from tabletop.events.bus import (EVENT_SEAT_CLAIM_REQUEST, EVENT_SEAT_CLAIMED, EVENT_SEAT_REJECTED,
                                 EVENT_SEAT_RELEASED, EventBus)
from tabletop.geometry import Edge, Point, Rect
from tabletop.ui.edge_resolver import (axis_center, build_seat_zone, build_seat_zone_from_axis_center,
                                       distance_to_nearest_edge, nearest_edge)
from tabletop.ui.seat_arrangement import arrange
from tabletop.utils.logging import get_logger

logger = get_logger(__name__)

REASON_TOO_FAR = "Move closer to any edge to claim a seat."
REASON_NO_SPACE = "Not enough space on this edge."
REASON_ALREADY_SEATED = "Player already holds a seat."


@dataclass(slots=True)
class SeatClaim:
    accepted: bool
    owner: Optional[Hashable] = None
    seat_entity: Optional[int] = None
    zone: Optional[SeatZone] = None
    moved: List[Hashable] = field(default_factory=list)
    reason: str = ""


def _extent(zone: SeatZone) -> float:
    return zone.region.w if zone.edge.is_horizontal else zone.region.h


def _thickness(zone: SeatZone) -> float:
    return zone.region.h if zone.edge.is_horizontal else zone.region.w


class SeatPlannerSystem:
    """Turns edge-join touches into seat zones and keeps each edge's seats apart.

    A new claim on an edge is arranged together with the seats already on
    that edge; existing seats may slide along the edge but never swap order.
    """

    def __init__(self, world: World, event_bus: EventBus, config: Optional[PlacementConfig] = None):
        self.world = world
        self.event_bus = event_bus
        self.config = config or PlacementConfig()
        self._claims = 0
        self.event_bus.subscribe(EVENT_SEAT_CLAIM_REQUEST, self.on_claim_request)

    def seats_on(self, edge: Edge) -> List[Tuple[int, Seated, SeatZone]]:
        seats = [
            (ent, seated, zone)
            for ent, (seated, zone) in self.world.get_components(Seated, SeatZone)
            if zone.edge == edge
        ]
        seats.sort(key=lambda item: item[1].claim_index)
        return seats

    def seat_of(self, owner: Hashable) -> Optional[SeatZone]:
        for _, (seated, zone) in self.world.get_components(Seated, SeatZone):
            if seated.owner == owner:
                return zone
        return None

    def on_claim_request(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        bounds = kwargs.get('bounds')
        if x is None or y is None or bounds is None:
            return
        self.claim(Point(x, y), bounds, owner=kwargs.get('owner'))

    def _reject(self, point: Point, reason: str) -> SeatClaim:
        logger.debug("Seat claim at (%.1f, %.1f) rejected: %s", point.x, point.y, reason)
        self.event_bus.emit(EVENT_SEAT_REJECTED, x=point.x, y=point.y, reason=reason)
        return SeatClaim(accepted=False, reason=reason)

    def claim(self, point: Point, bounds: Rect, owner: Optional[Hashable] = None) -> SeatClaim:
        if point is None or bounds is None:
            raise ValueError("point and bounds are required")
        if owner is not None and self.seat_of(owner) is not None:
            return self._reject(point, REASON_ALREADY_SEATED)
        if distance_to_nearest_edge(point, bounds) > self.config.edge_join_margin:
            return self._reject(point, REASON_TOO_FAR)

        edge = nearest_edge(point, bounds)
        candidate = build_seat_zone(edge, bounds, self.config.seat_thickness, self.config.seat_length, point)
        existing = self.seats_on(edge)
        requests = [(axis_center(zone), _extent(zone)) for _, _, zone in existing]
        requests.append((axis_center(candidate), _extent(candidate)))

        arrangement = arrange(edge, bounds, requests)
        if not arrangement:
            return self._reject(point, REASON_NO_SPACE)

        moved: List[Hashable] = []
        for (ent, seated, zone), center in zip(existing, arrangement.centers):
            updated = build_seat_zone_from_axis_center(edge, bounds, _thickness(zone), _extent(zone), center)
            if updated.region != zone.region:
                moved.append(seated.owner)
            self.world.add_component(ent, updated)

        zone = build_seat_zone_from_axis_center(
            edge, bounds, _thickness(candidate), _extent(candidate), arrangement.centers[-1]
        )
        if owner is None:
            owner = uuid.uuid4()
        self._claims += 1
        seat_entity = self.world.create_entity(Seated(owner=owner, claim_index=self._claims), zone)
        logger.info("Seat claimed near the %s edge", edge.name.lower(), extra={"owner": str(owner)})
        self.event_bus.emit(EVENT_SEAT_CLAIMED, owner=owner, seat_entity=seat_entity, zone=zone, moved=moved)
        return SeatClaim(accepted=True, owner=owner, seat_entity=seat_entity, zone=zone, moved=moved)

    def release(self, owner: Hashable) -> bool:
        for ent, (seated, zone) in list(self.world.get_components(Seated, SeatZone)):
            if seated.owner != owner:
                continue
            self.world.delete_entity(ent, immediate=True)
            self.event_bus.emit(EVENT_SEAT_RELEASED, owner=owner, zone=zone)
            return True
        return False
