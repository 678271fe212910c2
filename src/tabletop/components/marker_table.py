from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from tabletop.geometry import ORIGIN, Point


@dataclass(slots=True)
class MarkerTable:
    """World positions of named board markers, stored on a single entity.

    ``root`` is the board's own anchor; locations without a marker id are
    expressed relative to it.
    """
    root: Point = ORIGIN
    markers: Dict[str, Point] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.markers = {name.lower(): point for name, point in self.markers.items()}

    def resolve(self, marker_id: str) -> Optional[Point]:
        if not marker_id:
            return None
        return self.markers.get(marker_id.lower())

    def register(self, marker_id: str, point: Point) -> None:
        if not marker_id:
            raise ValueError("marker id must not be empty")
        self.markers[marker_id.lower()] = point

    def register_many(self, markers: Mapping[str, Point]) -> None:
        for name, point in markers.items():
            self.register(name, point)

    def remove(self, marker_id: str) -> None:
        self.markers.pop(marker_id.lower(), None)
