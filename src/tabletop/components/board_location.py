from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple

from tabletop.geometry import ORIGIN, Point


@dataclass(frozen=True, slots=True, eq=False)
class BoardLocation:
    """Logical position on a board: a marker id plus an offset from that marker.

    Marker ids compare case-insensitively, offsets compare exactly.
    """

    marker_id: str = ""
    offset: Point = ORIGIN

    def __post_init__(self) -> None:
        if self.marker_id is None:
            object.__setattr__(self, "marker_id", "")
        if self.offset is None:
            object.__setattr__(self, "offset", ORIGIN)

    @property
    def key(self) -> Tuple[str, float, float]:
        return (self.marker_id.lower(), self.offset.x, self.offset.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardLocation):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True, slots=True)
class BoardPath:
    """Ordered, immutable sequence of board locations to traverse."""

    steps: Tuple[BoardLocation, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.steps is None:
            raise ValueError("BoardPath steps must not be None")
        object.__setattr__(self, "steps", tuple(self.steps))

    @classmethod
    def of(cls, *steps: BoardLocation) -> "BoardPath":
        return cls(steps)

    @classmethod
    def from_iterable(cls, steps: Iterable[BoardLocation]) -> "BoardPath":
        return cls(tuple(steps))

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[BoardLocation]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> BoardLocation:
        return self.steps[index]

    @property
    def is_empty(self) -> bool:
        return not self.steps

    @property
    def last(self) -> BoardLocation | None:
        return self.steps[-1] if self.steps else None
