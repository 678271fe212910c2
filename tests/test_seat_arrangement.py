import random

import pytest

from tabletop.geometry import Edge, Rect
from tabletop.ui.seat_arrangement import Arrangement, SeatRequest, arrange

VIEWPORT = Rect(0, 0, 1920, 1080)


def _assert_separated(requests, centers):
    ordered = sorted(zip(centers, requests), key=lambda item: item[0])
    for (c_a, r_a), (c_b, r_b) in zip(ordered, ordered[1:]):
        assert c_b - c_a >= r_a[1] / 2 + r_b[1] / 2 - 1e-3


def test_overlapping_claims_push_new_seat_right():
    result = arrange(Edge.BOTTOM, VIEWPORT, [(960, 520), (960, 520)])
    assert result.feasible
    assert result.centers == pytest.approx((960, 1480))


def test_non_overlapping_seats_keep_their_spots():
    result = arrange(Edge.BOTTOM, VIEWPORT, [(400, 520), (1500, 520)])
    assert result.centers == pytest.approx((400, 1500))


def test_mixed_seat_lengths():
    requests = [(300, 520), (900, 260), (1200, 260), (1600, 520)]
    result = arrange(Edge.BOTTOM, VIEWPORT, requests)
    assert result.feasible
    assert result.centers == pytest.approx((300, 900, 1200, 1600))


def test_insufficient_space_is_infeasible():
    requests = [(200, 600), (600, 600), (1000, 600), (1400, 600)]
    result = arrange(Edge.BOTTOM, VIEWPORT, requests)
    assert not result
    assert result.centers == ()
    assert result.reason


def test_vertical_edge_uses_height():
    result = arrange(Edge.LEFT, VIEWPORT, [(100, 400), (800, 400)])
    assert result.centers == pytest.approx((200, 800))


def test_results_follow_input_order():
    # Centres come back in request order, not edge order.
    result = arrange(Edge.BOTTOM, VIEWPORT, [(1500, 520), (300, 520)])
    assert result.centers == pytest.approx((1500, 300))


def test_crowded_right_end_shifts_row_left():
    result = arrange(Edge.BOTTOM, VIEWPORT, [(1900, 520), (1900, 520), (1900, 520)])
    assert result.feasible
    assert result.centers == pytest.approx((620, 1140, 1660))


def test_exact_fit_packs_edge():
    requests = [(0, 640), (0, 640), (0, 640)]
    result = arrange(Edge.BOTTOM, VIEWPORT, requests)
    assert result.centers == pytest.approx((320, 960, 1600))


def test_empty_request_list_is_feasible():
    assert arrange(Edge.TOP, VIEWPORT, []) == Arrangement.ok(())


def test_zero_length_edge_is_infeasible():
    result = arrange(Edge.BOTTOM, Rect(0, 0, 0, 100), [(0, 10)])
    assert not result.feasible


def test_seat_longer_than_edge_is_infeasible():
    assert not arrange(Edge.RIGHT, VIEWPORT, [SeatRequest(540, 1200)])


def test_none_requests_rejected():
    with pytest.raises(ValueError):
        arrange(Edge.BOTTOM, VIEWPORT, None)


def test_random_feasible_requests_never_overlap():
    rng = random.Random(1234)
    for _ in range(200):
        count = rng.randint(1, 6)
        extents = [rng.uniform(20, 400) for _ in range(count)]
        scale = min(1.0, 1920 / sum(extents))
        requests = [(rng.uniform(-200, 2100), extent * scale) for extent in extents]
        result = arrange(Edge.BOTTOM, VIEWPORT, requests)
        assert result.feasible
        assert len(result.centers) == count
        _assert_separated(requests, result.centers)
        for center, (_, extent) in zip(result.centers, requests):
            assert center - extent / 2 >= -1e-3
            assert center + extent / 2 <= 1920 + 1e-3


def test_random_overfull_requests_are_infeasible():
    rng = random.Random(99)
    for _ in range(50):
        count = rng.randint(2, 6)
        extents = [rng.uniform(100, 600) for _ in range(count)]
        extra = 1920 / sum(extents) * 1.01
        requests = [(rng.uniform(0, 1920), extent * extra) for extent in extents]
        assert not arrange(Edge.BOTTOM, VIEWPORT, requests)
