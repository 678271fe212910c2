from typing import Dict, FrozenSet, Hashable, List, Optional

from tabletop.components.board_location import BoardLocation
from tabletop.components.marker_table import MarkerTable
from tabletop.geometry import Point
from tabletop.utils.logging import get_logger

logger = get_logger(__name__)


class PlacementRegistry:
    """Session-scoped record of where each token sits and who controls it.

    Mutated only through ``place``. Each call reports the locations whose
    occupancy changed so the caller can reflow exactly those.
    """

    def __init__(self, marker_table: Optional[MarkerTable] = None):
        self.marker_table = marker_table if marker_table is not None else MarkerTable()
        self._locations: Dict[int, BoardLocation] = {}
        self._owners: Dict[int, Hashable] = {}
        self._owner_tokens: Dict[Hashable, int] = {}

    def place(self, owner: Hashable, token: int, location: BoardLocation) -> FrozenSet[BoardLocation]:
        if token is None:
            raise ValueError("token must not be None")
        if owner is None:
            raise ValueError("owner must not be None")
        if not isinstance(location, BoardLocation):
            raise ValueError(f"expected BoardLocation, got {location!r}")
        previous = self._locations.get(token)
        previous_owner = self._owners.get(token)
        if previous_owner is not None and previous_owner != owner and self._owner_tokens.get(previous_owner) == token:
            del self._owner_tokens[previous_owner]
        self._locations[token] = location
        self._owners[token] = owner
        self._owner_tokens[owner] = token
        if previous is None:
            return frozenset({location})
        if previous == location:
            return frozenset()
        return frozenset({previous, location})

    def current_location(self, token: int) -> Optional[BoardLocation]:
        return self._locations.get(token)

    def owner_of(self, token: int) -> Optional[Hashable]:
        return self._owners.get(token)

    def token_for_owner(self, owner: Hashable) -> Optional[int]:
        return self._owner_tokens.get(owner)

    def tokens_at(self, location: BoardLocation) -> List[int]:
        return [token for token, current in self._locations.items() if current == location]

    def occupied_locations(self) -> FrozenSet[BoardLocation]:
        return frozenset(self._locations.values())

    def reset(self) -> None:
        self._locations.clear()
        self._owners.clear()
        self._owner_tokens.clear()

    def world_position_of(self, location: BoardLocation) -> Point:
        """Resolve ``location`` to a world point.

        Unknown markers degrade to the board root plus the offset and log a
        warning; they never raise.
        """
        root = self.marker_table.root
        if not location.marker_id.strip():
            return root + location.offset
        marker = self.marker_table.resolve(location.marker_id)
        if marker is not None:
            return marker + location.offset
        logger.warning(
            "Board marker not found: %s",
            location.marker_id,
            extra={"marker_id": location.marker_id},
        )
        return root + location.offset
