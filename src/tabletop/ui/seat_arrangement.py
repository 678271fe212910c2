"""Order-preserving arrangement of competing seats along one table edge.

Each request is a desired centre on the edge axis plus the seat extent along
that axis. The solver keeps the left-to-right order of the (clamped) desired
centres, pushes seats apart until neighbours no longer overlap, and keeps
every seat inside the edge. When the edge is too short the result is an
infeasible ``Arrangement`` rather than an overlapping layout.

Relaxation runs two forward/backward rounds and then rigidly shifts the row
back into range; the result is verified before it is returned.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, NamedTuple, Sequence, Tuple

from tabletop.constants import EPSILON, SEAT_STRIP_MIN_EXTENT
from tabletop.geometry import Edge, Rect, clamp
from tabletop.ui.edge_resolver import axis_range

RELAXATION_ROUNDS = 2


class SeatRequest(NamedTuple):
    desired_center: float
    extent: float


@dataclass(frozen=True, slots=True)
class Arrangement:
    feasible: bool
    centers: Tuple[float, ...] = field(default_factory=tuple)
    reason: str = ""

    @classmethod
    def ok(cls, centers: Iterable[float]) -> "Arrangement":
        return cls(True, tuple(centers))

    @classmethod
    def infeasible(cls, reason: str) -> "Arrangement":
        return cls(False, (), reason)

    def __bool__(self) -> bool:
        return self.feasible


@dataclass(slots=True)
class _Candidate:
    index: int
    center: float
    half: float
    min_center: float
    max_center: float


def _forward(seats: List[_Candidate]) -> None:
    first = seats[0]
    first.center = clamp(first.center, first.min_center, first.max_center)
    for prev, seat in zip(seats, seats[1:]):
        lowest = prev.center + prev.half + seat.half
        if seat.center < lowest:
            seat.center = lowest
        seat.center = clamp(seat.center, seat.min_center, seat.max_center)


def _backward(seats: List[_Candidate]) -> None:
    last = seats[-1]
    last.center = clamp(last.center, last.min_center, last.max_center)
    for i in range(len(seats) - 2, -1, -1):
        seat, nxt = seats[i], seats[i + 1]
        highest = nxt.center - (nxt.half + seat.half)
        if seat.center > highest:
            seat.center = highest
        seat.center = clamp(seat.center, seat.min_center, seat.max_center)


def _shift(seats: List[_Candidate], delta: float) -> None:
    for seat in seats:
        seat.center += delta


def arrange(edge: Edge, bounds: Rect, requests: Sequence[Tuple[float, float]]) -> Arrangement:
    """Resolve seat centres for ``requests`` along ``edge`` of ``bounds``.

    Returns the resolved centres in the caller's request order, or an
    infeasible arrangement when the requests cannot fit.
    """
    if requests is None:
        raise ValueError("requests must not be None")
    requests = [SeatRequest(float(center), float(extent)) for center, extent in requests]
    if not requests:
        return Arrangement.ok(())

    axis_start, axis_end = axis_range(Edge(edge), bounds)
    axis_length = axis_end - axis_start
    if axis_length <= 0.0:
        return Arrangement.infeasible("edge has no usable length")

    extents = [max(SEAT_STRIP_MIN_EXTENT, request.extent) for request in requests]
    if sum(extents) > axis_length + EPSILON:
        return Arrangement.infeasible("not enough space on this edge")

    seats: List[_Candidate] = []
    for index, (request, extent) in enumerate(zip(requests, extents)):
        half = extent / 2.0
        min_center = axis_start + half
        max_center = axis_end - half
        if min_center > max_center:
            return Arrangement.infeasible("seat is longer than the edge")
        seats.append(_Candidate(
            index=index,
            center=clamp(request.desired_center, min_center, max_center),
            half=half,
            min_center=min_center,
            max_center=max_center,
        ))

    # Stable on ties so the earlier claimant keeps the left-hand slot.
    seats.sort(key=lambda seat: (seat.center, seat.index))

    for _ in range(RELAXATION_ROUNDS):
        _forward(seats)
        _backward(seats)

    last, first = seats[-1], seats[0]
    if last.center > last.max_center:
        _shift(seats, -(last.center - last.max_center))
    if first.center < first.min_center:
        _shift(seats, first.min_center - first.center)

    for prev, seat in zip(seats, seats[1:]):
        if seat.center < prev.center + prev.half + seat.half - EPSILON:
            return Arrangement.infeasible("not enough space on this edge")

    centers = [0.0] * len(seats)
    for seat in seats:
        centers[seat.index] = seat.center
    return Arrangement.ok(centers)
