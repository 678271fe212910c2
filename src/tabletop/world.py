from typing import Mapping

from esper import World

from tabletop.components.marker_table import MarkerTable
from tabletop.geometry import ORIGIN, Point


def create_world(
    *,
    markers: Mapping[str, Point] | None = None,
    board_root: Point = ORIGIN,
) -> World:
    """Create the session world with its marker table singleton.

    The world is scoped to one game session; a new session builds a new one.
    """
    world = World()
    # Single marker table entity resolving board marker ids to world points.
    world.create_entity(MarkerTable(root=board_root, markers=dict(markers or {})))
    return world


def marker_table(world: World) -> MarkerTable:
    """Return the world's marker table, creating an empty one if missing."""
    tables = list(world.get_component(MarkerTable))
    if tables:
        return tables[0][1]
    table = MarkerTable()
    world.create_entity(table)
    return table
