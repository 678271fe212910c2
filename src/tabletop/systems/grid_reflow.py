"""Spread tokens that share a board location on a small centred grid.

Offsets are laid out row-major on a ``ceil(sqrt(n))``-column grid whose pitch
is the larger of the configured spacing and the widest occupant footprint
plus a margin. The grid is centred on the location's reference point, so the
mean offset is always zero.
"""
import math
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, List, Optional, Sequence, Tuple

from esper import World

from tabletop.components.board_location import BoardLocation
from tabletop.components.token import Token
from tabletop.constants import TOKEN_FOOTPRINT_RADIUS, TOKEN_GRID_MARGIN, TOKEN_GRID_SPACING
from tabletop.events.bus import EVENT_LOCATION_REFLOWED, EventBus
from tabletop.geometry import ORIGIN, Point
from tabletop.systems.motion import MotionSink, SpaceProjector
from tabletop.systems.placement_registry import PlacementRegistry
from tabletop.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Occupant:
    token: int
    owner: Hashable
    footprint_radius: float = TOKEN_FOOTPRINT_RADIUS


def _owner_sort_key(occupant: Occupant) -> Tuple[str, Any, int]:
    # Owners of one type compare natively; the type name keeps mixed types apart.
    owner = occupant.owner
    value = owner if isinstance(owner, (int, float, str)) else str(owner)
    return (type(owner).__name__, value, occupant.token)


def order_occupants(occupants: Iterable[Occupant]) -> List[Occupant]:
    return sorted(occupants, key=_owner_sort_key)


def compute_grid_offsets(
    occupants: Sequence[Occupant],
    base_spacing: float = TOKEN_GRID_SPACING,
    margin: float = TOKEN_GRID_MARGIN,
) -> List[Tuple[int, Point]]:
    """Return ``(token, offset)`` pairs in stable owner order."""
    ordered = order_occupants(occupants)
    count = len(ordered)
    if count == 0:
        return []
    if count == 1:
        return [(ordered[0].token, ORIGIN)]

    widest = max(max(0.0, occupant.footprint_radius) * 2.0 for occupant in ordered)
    spacing = max(base_spacing, widest + margin)
    columns = math.ceil(math.sqrt(count))
    rows = math.ceil(count / columns)
    total_width = (columns - 1) * spacing
    total_height = (rows - 1) * spacing

    offsets: List[Tuple[int, Point]] = []
    for index, occupant in enumerate(ordered):
        row, col = divmod(index, columns)
        offsets.append((
            occupant.token,
            Point(col * spacing - total_width / 2.0, row * spacing - total_height / 2.0),
        ))
    if rows * columns != count:
        # A partial last row would pull the grid off-centre; recentre on the mean.
        mean_x = sum(offset.x for _, offset in offsets) / count
        mean_y = sum(offset.y for _, offset in offsets) / count
        offsets = [(token, Point(offset.x - mean_x, offset.y - mean_y)) for token, offset in offsets]
    return offsets


class GridReflowSystem:
    """Writes grid-adjusted positions for every token at a changed location."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        registry: PlacementRegistry,
        motion: MotionSink,
        projector: SpaceProjector,
        *,
        base_spacing: float = TOKEN_GRID_SPACING,
        margin: float = TOKEN_GRID_MARGIN,
    ):
        self.world = world
        self.event_bus = event_bus
        self.registry = registry
        self.motion = motion
        self.projector = projector
        self.base_spacing = base_spacing
        self.margin = margin

    def _occupant(self, token: int, owner: Optional[Hashable] = None) -> Occupant:
        try:
            comp = self.world.component_for_entity(token, Token)
            radius = comp.footprint_radius
        except KeyError:
            radius = TOKEN_FOOTPRINT_RADIUS
        if owner is None:
            owner = self.registry.owner_of(token)
        return Occupant(token=token, owner=owner, footprint_radius=radius)

    def offsets_at(self, location: BoardLocation, joining: Optional[Occupant] = None) -> List[Tuple[int, Point]]:
        occupants = [self._occupant(token) for token in self.registry.tokens_at(location)]
        if joining is not None:
            occupants = [occ for occ in occupants if occ.token != joining.token]
            occupants.append(joining)
        return compute_grid_offsets(occupants, self.base_spacing, self.margin)

    def local_target(self, token: int, location: BoardLocation, offset: Point) -> Point:
        world_point = self.registry.world_position_of(location)
        return self.projector.to_local(token, world_point) + offset

    def target_for(self, token: int, owner: Hashable, location: BoardLocation) -> Point:
        """Local position ``token`` would take if it joined ``location`` now."""
        joining = self._occupant(token, owner)
        for candidate, offset in self.offsets_at(location, joining):
            if candidate == token:
                return self.local_target(token, location, offset)
        return self.local_target(token, location, ORIGIN)

    def reflow(self, locations: Iterable[BoardLocation], skip: Iterable[int] = ()) -> None:
        skipped = set(skip)
        for location in locations:
            offsets = self.offsets_at(location)
            if not offsets:
                continue
            for token, offset in offsets:
                if token in skipped:
                    continue
                self.motion.set_position(token, self.local_target(token, location, offset))
            logger.debug("Reflowed %d token(s) at %r", len(offsets), location.marker_id)
            self.event_bus.emit(
                EVENT_LOCATION_REFLOWED,
                location=location,
                tokens=[token for token, _ in offsets],
                offsets=[offset for _, offset in offsets],
            )
