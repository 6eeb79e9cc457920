"""Tests for the gymnasium wrapper around GameSession."""

import numpy as np
import pytest

from game.chase.chase_env import ACTIONS, ChaseEnv


def _place_pickup_on_player(env):
    s = env.session
    s.pickup.x, s.pickup.y, s.pickup.taken = s.player.x + 5.0, s.player.y, False


class TestSpaces:

    def test_reset_observation(self):
        env = ChaseEnv()
        obs, info = env.reset(seed=0)
        assert obs.shape == (10,)
        assert obs.dtype == np.float32
        assert env.observation_space.contains(obs)
        assert info["score"] == 0
        assert not info["caught"]

    def test_action_space_matches_table(self):
        env = ChaseEnv()
        assert env.action_space.n == len(ACTIONS) == 9

    def test_random_rollout_stays_in_space(self):
        env = ChaseEnv(max_steps=300)
        env.reset(seed=1)
        env.action_space.seed(1)
        for _ in range(300):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space.contains(obs)
            if terminated or truncated:
                break

    def test_invalid_arguments(self):
        with pytest.raises(ValueError):
            ChaseEnv(render_mode="ascii")
        with pytest.raises(ValueError):
            ChaseEnv(pickup_margin=1.0)
        env = ChaseEnv()
        env.reset(seed=0)
        with pytest.raises(ValueError):
            env.step(9)


class TestDynamics:

    def test_seeded_reset_is_reproducible(self):
        a, b = ChaseEnv(), ChaseEnv()
        obs_a, _ = a.reset(seed=11)
        obs_b, _ = b.reset(seed=11)
        np.testing.assert_array_equal(obs_a, obs_b)
        for action in [4, 4, 6, 2, 0, 8, 3]:
            obs_a = a.step(action)[0]
            obs_b = b.step(action)[0]
        np.testing.assert_array_equal(obs_a, obs_b)

    def test_action_moves_player(self):
        env = ChaseEnv()
        env.reset(seed=0)
        x0 = env.session.player.x
        env.step(4)
        assert env.session.player.x == pytest.approx(x0 + 3.3)

    def test_pickup_reward(self):
        env = ChaseEnv()
        env.reset(seed=0)
        _place_pickup_on_player(env)
        _, reward, terminated, _, info = env.step(0)
        assert reward == pytest.approx(1.01)
        assert not terminated
        assert info["score"] == 1
        assert not info["pickup_available"]

    def test_pickup_respawns_on_env_clock(self):
        env = ChaseEnv()
        env.reset(seed=0)
        _place_pickup_on_player(env)
        env.step(0)
        # 350 ms is 21 nominal frames; the respawn fires on the 22nd step after
        for _ in range(20):
            info = env.step(0)[4]
        assert not info["pickup_available"]
        for _ in range(2):
            info = env.step(0)[4]
        assert info["pickup_available"]

    def test_caught_terminates(self):
        env = ChaseEnv()
        env.reset(seed=0)
        s = env.session
        s.pursuer.x, s.pursuer.y = s.player.x - 20.0, s.player.y
        _, reward, terminated, truncated, info = env.step(0)
        assert terminated
        assert not truncated
        assert reward == pytest.approx(-5.0)
        assert info["caught"]

    def test_truncates_at_max_steps(self):
        env = ChaseEnv(max_steps=5)
        env.reset(seed=0)
        for i in range(5):
            _, _, terminated, truncated, _ = env.step(0)
        assert truncated
        assert not terminated

    def test_reset_after_game_over(self):
        env = ChaseEnv()
        env.reset(seed=0)
        s = env.session
        s.pursuer.x, s.pursuer.y = s.player.x, s.player.y
        assert env.step(0)[2]
        obs, info = env.reset(seed=1)
        assert not info["caught"]
        assert env.session is s
        assert not env.step(0)[2]

    def test_custom_rewards(self):
        env = ChaseEnv(reward_config={"name": "x", "R_SURVIVE": 0.5})
        env.reset(seed=0)
        assert env.step(0)[1] == pytest.approx(0.5)


class TestRender:

    def test_no_render_mode_returns_none(self):
        env = ChaseEnv()
        env.reset(seed=0)
        assert env.render() is None

    def test_rgb_array_frame(self):
        env = ChaseEnv(render_mode="rgb_array")
        env.reset(seed=0)
        frame = env.render()
        assert frame.shape == (600, 800, 3)
        assert frame.dtype == np.uint8
        s = env.session
        assert tuple(frame[int(s.player.y), int(s.player.x)]) == s.player.color
        assert tuple(frame[int(s.pursuer.y), int(s.pursuer.x)]) == s.pursuer.color
        assert tuple(frame[0, 799]) == (18, 18, 22)
