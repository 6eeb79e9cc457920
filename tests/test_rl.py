"""Tests for the RL helpers that do not need a training run."""

import os

import pytest

from game.chase.chase_env import ChaseEnv
from rl.configs.chase_config import TRAINING_CONFIG
from rl.metrics_callback import MetricsCallback
from rl.train import DirectionBoxWrapper, output_dirs


class TestDirectionBoxWrapper:

    @pytest.mark.parametrize("stick,expected", [
        ((0.0, 0.0), 0),
        ((0.1, -0.2), 0),
        ((0.0, -0.9), 1),
        ((0.0, 0.9), 2),
        ((-0.9, 0.0), 3),
        ((0.9, 0.0), 4),
        ((-0.9, -0.9), 5),
        ((0.9, -0.9), 6),
        ((-0.9, 0.9), 7),
        ((0.9, 0.9), 8),
    ])
    def test_stick_to_action(self, stick, expected):
        wrapper = DirectionBoxWrapper(ChaseEnv())
        assert wrapper.action(stick) == expected

    def test_action_space_is_box(self):
        wrapper = DirectionBoxWrapper(ChaseEnv())
        assert wrapper.action_space.shape == (2,)


class TestMetricsCallback:

    def test_records_episode_without_csv(self, tmp_path):
        callback = MetricsCallback(log_dir=str(tmp_path), algo_name="ppo", verbose=0)
        callback.record_episode({
            "episode": {"r": 3.5, "l": 120},
            "score": 4,
            "pursuer_speed": 2.2,
            "caught": True,
        })
        callback.record_episode({
            "episode": {"r": 8.0, "l": 3600},
            "score": 9,
            "pursuer_speed": 2.9,
            "caught": False,
        })
        summary = callback.get_summary()
        assert summary["total_episodes"] == 2
        assert summary["best_score"] == 9
        assert summary["mean_score"] == pytest.approx(6.5)
        assert summary["survival_rate"] == pytest.approx(0.5)

    def test_empty_summary(self, tmp_path):
        assert MetricsCallback(log_dir=str(tmp_path), algo_name="dqn").get_summary() == {}


class TestOutputDirs:

    def test_defaults_come_from_training_config(self):
        save_dir, log_dir, tb_log = output_dirs("dqn")
        assert save_dir == os.path.join(TRAINING_CONFIG["model_dir"], "dqn")
        assert log_dir == os.path.join(TRAINING_CONFIG["log_dir"], "dqn")
        assert tb_log == os.path.join(TRAINING_CONFIG["tensorboard_log"], "dqn")

    def test_explicit_paths_kept(self, tmp_path):
        models = str(tmp_path / "m")
        save_dir, log_dir, tb_log = output_dirs("sac", save_dir=models)
        assert save_dir == models
        assert log_dir == os.path.join(TRAINING_CONFIG["log_dir"], "sac")
        assert tb_log == os.path.join(TRAINING_CONFIG["tensorboard_log"], "sac")
