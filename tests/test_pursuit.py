"""Tests for pursuer steering and difficulty scaling."""

import math

import pytest

from game.chase.entities import Player, Pursuer
from game.chase.pursuit import advance_pursuer, predict_target, pursue, pursuer_speed


class TestPursuerSpeed:

    def test_base_at_zero_score(self):
        assert pursuer_speed(1.6, 0, 0.06, 2.6) == pytest.approx(1.6)

    def test_grows_with_score(self):
        assert pursuer_speed(1.6, 10, 0.06, 2.6) == pytest.approx(2.2)

    def test_saturates_at_cap(self):
        assert pursuer_speed(1.6, 100, 0.06, 2.6) == pytest.approx(4.2)
        assert pursuer_speed(1.6, 10_000, 0.06, 2.6) == pytest.approx(4.2)

    def test_bonus_added_on_top_of_cap(self):
        assert pursuer_speed(1.6, 100, 0.06, 2.6, bonus=0.8) == pytest.approx(5.0)

    def test_monotonic_in_score(self):
        speeds = [pursuer_speed(1.6, s, 0.06, 2.6) for s in range(200)]
        assert all(b >= a for a, b in zip(speeds, speeds[1:]))
        assert max(speeds) <= 1.6 + 2.6 + 1e-9


class TestPrediction:

    def test_leads_by_velocity(self):
        assert predict_target(100.0, 100.0, 2.0, -1.0, 8.0) == pytest.approx((116.0, 92.0))

    def test_stationary_target_is_position(self):
        assert predict_target(50.0, 60.0, 0.0, 0.0, 8.0) == (50.0, 60.0)


class TestAdvance:

    def test_moves_speed_times_dt_along_heading(self):
        assert advance_pursuer(0.0, 0.0, 10.0, 0.0, 1.6, 1.0) == pytest.approx((1.6, 0.0))
        assert advance_pursuer(0.0, 0.0, 10.0, 0.0, 1.6, 2.5) == pytest.approx((4.0, 0.0))

    def test_diagonal_heading(self):
        x, y = advance_pursuer(0.0, 0.0, 10.0, 10.0, 2.0, 1.0)
        assert math.hypot(x, y) == pytest.approx(2.0)
        assert x == pytest.approx(y)

    def test_pursue_heads_for_predicted_point(self):
        player = Player(x=200.0, y=100.0, vx=0.0, vy=3.0)
        pursuer = Pursuer(x=100.0, y=124.0, speed=2.0)
        # predicted target is (200, 124): straight along +x
        assert pursue(pursuer, player, 8.0, 1.0) == pytest.approx((102.0, 124.0))

    def test_pursue_does_not_mutate(self):
        player = Player(x=200.0, y=100.0)
        pursuer = Pursuer(x=100.0, y=100.0)
        pursue(pursuer, player, 8.0, 1.0)
        assert (pursuer.x, pursuer.y) == (100.0, 100.0)
