import math

import pytest

from duckyland.movement import (
    SCREEN_WRAP_MARGIN,
    MovementController,
    Vec2,
    apply_movement,
    screen_wrap,
)


def test_normalize_or_zero_has_unit_length():
    for v in [Vec2(1.0, 1.0), Vec2(-7.0, 2.5), Vec2(0.0, 9.0)]:
        n = v.normalize_or_zero()
        assert math.isclose(n.length(), 1.0)
        assert math.isclose(n.x * v.y, n.y * v.x, abs_tol=1e-9)


def test_normalize_zero_stays_zero():
    assert Vec2(0.0, 0.0).normalize_or_zero() == Vec2.ZERO


@pytest.mark.parametrize("value", [-13.5, -1.0, 0.0, 2.0, 17.25])
def test_rem_euclid_is_non_negative_and_congruent(value):
    size = Vec2(4.0, 6.0)
    r = Vec2(value, value).rem_euclid(size)
    assert 0.0 <= r.x < size.x
    assert 0.0 <= r.y < size.y
    q = (value - r.x) / size.x
    assert math.isclose(q, round(q))


def test_controller_defaults():
    c = MovementController()
    assert c.intent == Vec2.ZERO
    assert c.max_speed == 400.0


def test_apply_movement_without_intent_keeps_position():
    pos = Vec2(12.0, -3.0)
    assert apply_movement(MovementController(), pos, 1.0) == pos


def test_apply_movement_uses_max_speed():
    c = MovementController(intent=Vec2(1.0, 0.0))
    assert apply_movement(c, Vec2.ZERO, 1.0) == Vec2(400.0, 0.0)


def test_apply_movement_accepts_tuple():
    c = MovementController(intent=Vec2(0.0, 1.0), max_speed=10.0)
    assert apply_movement(c, (0.0, 0.0), 1.0) == Vec2(0.0, 10.0)


def test_screen_wrap_keeps_position_inside_window():
    pos = Vec2(100.0, -50.0)
    assert screen_wrap(pos, (800.0, 600.0)) == pos


@pytest.mark.parametrize("pos", [Vec2(2000.0, 0.0), Vec2(-900.0, 450.0), Vec2(5000.0, -5000.0)])
def test_screen_wrap_result_within_bounds(pos):
    window = Vec2(800.0, 600.0)
    w = screen_wrap(pos, window)
    half = (window + SCREEN_WRAP_MARGIN) / 2.0
    assert -half.x <= w.x < half.x
    assert -half.y <= w.y < half.y


def test_screen_wrap_is_periodic():
    window = Vec2(800.0, 600.0)
    size = window + SCREEN_WRAP_MARGIN
    pos = Vec2(30.0, 40.0)
    shifted = pos + size
    assert screen_wrap(shifted, window) == screen_wrap(pos, window)