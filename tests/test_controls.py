"""Tests for input integration."""

import math

import pytest

from game.chase.controls import (
    KEY_BINDINGS,
    Direction,
    InputState,
    integrate_velocity,
    intent_axes,
    steer_toward,
)
from game.chase.utils import vec_len


class TestIntegrateVelocity:

    def test_axis_aligned_full_speed(self):
        assert integrate_velocity({Direction.RIGHT}, 0.0, 0.0, 3.3) == pytest.approx((3.3, 0.0))
        assert integrate_velocity({Direction.UP}, 0.0, 0.0, 3.3) == pytest.approx((0.0, -3.3))

    def test_diagonal_not_faster(self):
        vx, vy = integrate_velocity({Direction.UP, Direction.RIGHT}, 0.0, 0.0, 3.3)
        assert vec_len(vx, vy) == pytest.approx(3.3)
        assert vx == pytest.approx(3.3 / math.sqrt(2))
        assert vy == pytest.approx(-3.3 / math.sqrt(2))

    def test_opposite_intents_cancel_and_decay(self):
        assert intent_axes({Direction.LEFT, Direction.RIGHT}) == (0.0, 0.0)
        vx, vy = integrate_velocity({Direction.LEFT, Direction.RIGHT}, 2.0, 0.0, 3.3)
        assert (vx, vy) == pytest.approx((1.7, 0.0))

    def test_decay_factor_applied_once(self):
        vx, vy = integrate_velocity(set(), 3.3, -1.0, 3.3, decel=0.85)
        assert vx == pytest.approx(3.3 * 0.85)
        assert vy == pytest.approx(-0.85)

    def test_decay_strictly_decreases_then_snaps_to_zero(self):
        vx, vy = 3.3, 0.0
        previous = vec_len(vx, vy)
        for ticks in range(1, 100):
            vx, vy = integrate_velocity(set(), vx, vy, 3.3)
            speed = vec_len(vx, vy)
            if speed == 0.0:
                break
            assert speed < previous
            previous = speed
        assert (vx, vy) == (0.0, 0.0)
        assert ticks == 32

    def test_small_velocity_snaps_immediately(self):
        assert integrate_velocity(set(), 0.015, 0.01, 3.3) == (0.0, 0.0)


class TestSteerToward:

    def test_full_speed_towards_target(self):
        assert steer_toward(0.0, 0.0, 3.0, 4.0, 5.0) == pytest.approx((3.0, 4.0))

    def test_target_on_player_gives_zero(self):
        assert steer_toward(10.0, 10.0, 10.0, 10.0, 3.3) == (0.0, 0.0)


class TestInputState:

    def test_key_bindings(self):
        state = InputState()
        assert state.press("ArrowUp")
        assert state.press("d")
        assert not state.press("q")
        assert state.held == {Direction.UP, Direction.RIGHT}
        assert state.release("ARROWUP")
        assert state.held == {Direction.RIGHT}

    def test_pointer_velocity_persists(self):
        state = InputState()
        state.steer_velocity = (1.0, 2.0)
        for _ in range(5):
            assert state.velocity(1.0, 2.0, 3.3, 0.85, 0.02) == (1.0, 2.0)

    def test_keys_override_pointer(self):
        state = InputState()
        state.steer_velocity = (1.0, 2.0)
        state.set_intent(Direction.LEFT, True)
        assert state.velocity(1.0, 2.0, 3.3, 0.85, 0.02) == pytest.approx((-3.3, 0.0))

    def test_clear(self):
        state = InputState()
        state.set_held([Direction.DOWN])
        state.steer_velocity = (1.0, 0.0)
        state.clear()
        assert state.held == set()
        assert state.steer_velocity is None

    def test_window_keymap_matches_bindings(self):
        window = pytest.importorskip("game.chase.window")
        keymap_dirs = sorted(d.name for d in window.KEYMAP.values())
        binding_dirs = sorted(d.name for d in KEY_BINDINGS.values())
        assert keymap_dirs == binding_dirs
