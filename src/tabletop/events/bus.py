from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"  # payload: dt=float (seconds)


# ============================================================================
# ANIMATION
# ============================================================================
EVENT_ANIMATION_START = "animation_start"          # payload: kind=str, token=int, start=Point, end=Point
EVENT_ANIMATION_COMPLETE = "animation_complete"    # payload: kind=str, token=int, position=Point
EVENT_ANIMATION_CANCELLED = "animation_cancelled"  # payload: kind=str, token=int


# ============================================================================
# TOKENS & BOARD
# ============================================================================
EVENT_TOKEN_PLACED = "token_placed"            # payload: token=int, owner=Hashable, location=BoardLocation, previous=BoardLocation|None
EVENT_LOCATION_REFLOWED = "location_reflowed"  # payload: location=BoardLocation, tokens=list[int], offsets=list[Point]
EVENT_PATH_STEP = "path_step"                  # payload: token=int, index=int, location=BoardLocation, target=Point
EVENT_PATH_SETTLED = "path_settled"            # payload: token=int, owner=Hashable, location=BoardLocation
EVENT_PATH_BOUNCED = "path_bounced"            # payload: token=int, owner=Hashable
EVENT_PATH_ABANDONED = "path_abandoned"        # payload: token=int, index=int


# ============================================================================
# SEATS & LOBBY
# ============================================================================
EVENT_SEAT_CLAIM_REQUEST = "seat_claim_request"  # payload: x=float, y=float, bounds=Rect, owner=Hashable|None
EVENT_SEAT_CLAIMED = "seat_claimed"              # payload: owner=Hashable, seat_entity=int, zone=SeatZone, moved=list[Hashable]
EVENT_SEAT_REJECTED = "seat_rejected"            # payload: x=float, y=float, reason=str
EVENT_SEAT_RELEASED = "seat_released"            # payload: owner=Hashable, zone=SeatZone
