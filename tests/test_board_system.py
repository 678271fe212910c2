import logging

import pytest

from tabletop.components.board_location import BoardLocation
from tabletop.components.token import Position, Token
from tabletop.events.bus import EVENT_TOKEN_PLACED
from tabletop.config import PlacementConfig
from tabletop.geometry import Point
from tests.helpers import build_board, make_tokens

TILE = BoardLocation("tile_3")
OTHER = BoardLocation("tile_4")
MARKERS = {"tile_3": Point(300, 200), "tile_4": Point(500, 200)}


def _pos(world, token):
    return world.component_for_entity(token, Position).point


def test_place_uses_local_space_conversion():
    world, bus, board = build_board(markers=MARKERS, to_local=lambda p: p - Point(100, 50))
    (token,) = make_tokens(world, ["p1"])
    board.place_token("p1", token, TILE)
    assert _pos(world, token) == Point(200, 150)


def test_move_converts_every_step():
    world, bus, board = build_board(markers=MARKERS, to_local=lambda p: p * 0.5)
    (token,) = make_tokens(world, ["p1"])
    board.move_token("p1", token, [TILE, OTHER])
    assert [end for _, _, end in board.motion.moves] == [Point(150, 100), Point(250, 100)]


def test_shared_location_spreads_around_marker():
    world, bus, board = build_board(markers=MARKERS)
    t1, t2 = make_tokens(world, ["p1", "p2"])
    board.place_token("p1", t1, TILE)
    board.place_token("p2", t2, TILE)

    a, b = _pos(world, t1), _pos(world, t2)
    assert a != b
    assert (a + b) * 0.5 == Point(300, 200)


def test_vacated_location_recentres_remaining_token():
    world, bus, board = build_board(markers=MARKERS)
    t1, t2 = make_tokens(world, ["p1", "p2"])
    board.place_token("p1", t1, TILE)
    board.place_token("p2", t2, TILE)

    board.place_token("p2", t2, OTHER)

    assert _pos(world, t1) == Point(300, 200)
    assert _pos(world, t2) == Point(500, 200)


def test_framed_tokens_use_frame_origin():
    world, bus, board = build_board(markers=MARKERS)
    (token,) = make_tokens(world, ["p1"], frame_origin=Point(300, 0))
    board.place_token("p1", token, TILE)
    assert _pos(world, token) == Point(0, 200)


def test_placed_event_reports_previous_location():
    world, bus, board = build_board(markers=MARKERS)
    (token,) = make_tokens(world, ["p1"])
    events = []
    bus.subscribe(EVENT_TOKEN_PLACED, lambda sender, **kw: events.append(kw))

    board.place_token("p1", token, TILE)
    board.place_token("p1", token, OTHER)

    assert [e["previous"] for e in events] == [None, TILE]
    assert events[-1]["location"] == OTHER


def test_owner_recorded_on_token():
    world, bus, board = build_board(markers=MARKERS)
    (placed,) = make_tokens(world, [None])
    (moved,) = make_tokens(world, [None])

    board.place_token("p1", placed, TILE)
    board.move_token("p9", moved, [OTHER])

    assert world.component_for_entity(placed, Token).owner == "p1"
    assert world.component_for_entity(moved, Token).owner == "p9"


def test_non_token_entities_rejected():
    world, bus, board = build_board(markers=MARKERS)
    stray = world.create_entity(Position())
    with pytest.raises(ValueError):
        board.place_token("p1", stray, TILE)
    with pytest.raises(ValueError):
        board.place_token("p1", None, TILE)
    with pytest.raises(ValueError):
        board.current_location(None)


def test_unknown_marker_lands_on_board_root(caplog):
    world, bus, board = build_board(markers=MARKERS, board_root=Point(10, 10))
    (token,) = make_tokens(world, ["p1"])
    with caplog.at_level(logging.WARNING, logger="tabletop"):
        board.place_token("p1", token, BoardLocation("missing", Point(5, 0)))
    assert _pos(world, token) == Point(15, 10)
    assert any("missing" in r.getMessage() for r in caplog.records)


def test_custom_grid_spacing():
    world, bus, board = build_board(markers=MARKERS, config=PlacementConfig(grid_spacing=100.0))
    t1, t2 = make_tokens(world, ["p1", "p2"])
    board.place_token("p1", t1, TILE)
    board.place_token("p2", t2, TILE)
    assert _pos(world, t2).x - _pos(world, t1).x == pytest.approx(100.0)


def test_reset_forgets_placements():
    world, bus, board = build_board(markers=MARKERS)
    (token,) = make_tokens(world, ["p1"])
    board.place_token("p1", token, TILE)
    board.reset()
    assert board.current_location(token) is None
    assert board.world_position_of(TILE) == Point(300, 200)
