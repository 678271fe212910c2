from dataclasses import dataclass
from typing import Hashable

from tabletop.geometry import Edge, Point, Rect


@dataclass(slots=True)
class SeatZone:
    """Screen region assigned to one seated player along a table edge.

    Built by the edge resolver; the seat arrangement only ever moves ``region``
    and ``anchor`` along the edge.
    """
    edge: Edge
    region: Rect
    rotation_degrees: int
    anchor: Point

    def clone(self) -> "SeatZone":
        return SeatZone(
            edge=self.edge,
            region=self.region,
            rotation_degrees=self.rotation_degrees,
            anchor=self.anchor,
        )


@dataclass(slots=True)
class Seated:
    """Marks a seat entity and records which player holds it."""
    owner: Hashable
    claim_index: int = 0
