"""
Training script for the chase environment using Stable-Baselines3
Supports PPO, DQN, and SAC algorithms with metrics tracking.
"""

import os
import argparse
from typing import Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from stable_baselines3 import PPO, DQN, SAC
from stable_baselines3.common.vec_env import DummyVecEnv, VecNormalize
from stable_baselines3.common.callbacks import CheckpointCallback, EvalCallback
from stable_baselines3.common.monitor import Monitor

from game.chase import ChaseEnv
from rl.configs.chase_config import (
    ENV_CONFIG, REWARD_CONFIG, PPO_CONFIG, DQN_CONFIG, SAC_CONFIG, TRAINING_CONFIG,
)
from rl.metrics_callback import MetricsCallback, TensorboardMetricsCallback


class DirectionBoxWrapper(gym.ActionWrapper):
    """
    Wrapper to convert ChaseEnv's Discrete(9) action space to a 2-D Box for SAC.
    Each stick axis past the dead zone counts as a held direction.
    """

    # (x sign, y sign) -> ChaseEnv action index
    _LOOKUP = {
        (0, 0): 0,
        (0, -1): 1,
        (0, 1): 2,
        (-1, 0): 3,
        (1, 0): 4,
        (-1, -1): 5,
        (1, -1): 6,
        (-1, 1): 7,
        (1, 1): 8,
    }

    def __init__(self, env, dead_zone: float = 0.33):
        super().__init__(env)
        self.dead_zone = dead_zone
        self.action_space = spaces.Box(low=-1.0, high=1.0, shape=(2,), dtype=np.float32)

    def _sign(self, value: float) -> int:
        if value > self.dead_zone:
            return 1
        if value < -self.dead_zone:
            return -1
        return 0

    def action(self, action):
        """Convert continuous stick position to a discrete direction index."""
        ax, ay = float(action[0]), float(action[1])
        return self._LOOKUP[(self._sign(ax), self._sign(ay))]


def make_env(render_mode: Optional[str] = None, seed: Optional[int] = None,
             wrap_for_sac: bool = False):
    """Factory function to create the environment"""
    def _init():
        env = ChaseEnv(render_mode=render_mode, reward_config=REWARD_CONFIG, **ENV_CONFIG)
        if wrap_for_sac:
            env = DirectionBoxWrapper(env)
        env = Monitor(env)
        if seed is not None:
            env.reset(seed=seed)
        return env
    return _init


def output_dirs(algo: str, save_dir: Optional[str] = None, log_dir: Optional[str] = None,
                tensorboard_log: Optional[str] = None):
    """Fill unset output paths with TRAINING_CONFIG's per-algorithm subdirectories"""
    if save_dir is None:
        save_dir = os.path.join(TRAINING_CONFIG["model_dir"], algo)
    if log_dir is None:
        log_dir = os.path.join(TRAINING_CONFIG["log_dir"], algo)
    if tensorboard_log is None:
        tensorboard_log = os.path.join(TRAINING_CONFIG["tensorboard_log"], algo)
    return save_dir, log_dir, tensorboard_log


def _banner(lines):
    print(f"\n{'='*60}")
    for line in lines:
        print(line)
    print(f"{'='*60}\n")


def _finish(model, algo: str, save_dir: str, metrics_callback: MetricsCallback, env=None):
    final_path = os.path.join(save_dir, f"{algo}_chase_final")
    model.save(final_path)
    if isinstance(env, VecNormalize):
        env.save(os.path.join(save_dir, "vec_normalize.pkl"))

    lines = [f"{algo.upper()} Training complete! Model saved to {final_path}"]
    summary = metrics_callback.get_summary()
    if summary:
        lines.append(f"Mean Reward: {summary['mean_reward']:.2f} ± {summary['std_reward']:.2f}")
        lines.append(f"Mean Stars: {summary['mean_score']:.2f} (best {summary['best_score']})")
        lines.append(f"Total Episodes: {summary['total_episodes']}")
    _banner(lines)


def _callbacks(algo: str, eval_env, save_dir: str, log_dir: str, n_envs: int = 1):
    checkpoint_callback = CheckpointCallback(
        save_freq=max(1, TRAINING_CONFIG["save_freq"] // n_envs),
        save_path=save_dir,
        name_prefix=f"{algo}_chase",
    )

    eval_callback = EvalCallback(
        eval_env,
        best_model_save_path=save_dir,
        log_path=log_dir,
        eval_freq=max(1, TRAINING_CONFIG.get("eval_freq", 5000) // n_envs),
        deterministic=True,
        render=False,
    )

    metrics_callback = MetricsCallback(
        log_dir=log_dir,
        algo_name=algo,
        verbose=1,
    )

    tb_callback = TensorboardMetricsCallback(verbose=0)
    return [checkpoint_callback, eval_callback, metrics_callback, tb_callback], metrics_callback


def train_ppo(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
    n_envs: int = 4,
):
    """Train PPO agent on the chase environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = output_dirs("ppo", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner([f"Training PPO for {total_timesteps:,} timesteps...",
             f"Using {n_envs} parallel environments"])

    env = DummyVecEnv([make_env(seed=i) for i in range(n_envs)])
    env = VecNormalize(env, norm_obs=True, norm_reward=True)

    eval_env = DummyVecEnv([make_env(seed=100)])
    eval_env = VecNormalize(eval_env, norm_obs=True, norm_reward=False, training=False)

    callbacks, metrics_callback = _callbacks("ppo", eval_env, save_dir, log_dir, n_envs)

    model = PPO(
        env=env,
        tensorboard_log=tensorboard_log,
        **PPO_CONFIG
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    _finish(model, "ppo", save_dir, metrics_callback, env)
    return model, metrics_callback


def train_dqn(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train DQN agent on the chase environment"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = output_dirs("dqn", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner([f"Training DQN for {total_timesteps:,} timesteps..."])

    env = DummyVecEnv([make_env(seed=0)])
    eval_env = DummyVecEnv([make_env(seed=100)])

    callbacks, metrics_callback = _callbacks("dqn", eval_env, save_dir, log_dir)

    model = DQN(
        env=env,
        tensorboard_log=tensorboard_log,
        **DQN_CONFIG
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    _finish(model, "dqn", save_dir, metrics_callback)
    return model, metrics_callback


def train_sac(
    total_timesteps: int = None,
    save_dir: Optional[str] = None,
    log_dir: Optional[str] = None,
    tensorboard_log: Optional[str] = None,
):
    """Train SAC agent on the chase environment (with continuous action wrapper)"""

    if total_timesteps is None:
        total_timesteps = TRAINING_CONFIG["total_timesteps"]
    save_dir, log_dir, tensorboard_log = output_dirs("sac", save_dir, log_dir, tensorboard_log)

    os.makedirs(save_dir, exist_ok=True)
    os.makedirs(log_dir, exist_ok=True)

    _banner([f"Training SAC for {total_timesteps:,} timesteps...",
             "Using Discrete->Box direction wrapper for SAC compatibility"])

    env = DummyVecEnv([make_env(seed=0, wrap_for_sac=True)])
    eval_env = DummyVecEnv([make_env(seed=100, wrap_for_sac=True)])

    callbacks, metrics_callback = _callbacks("sac", eval_env, save_dir, log_dir)

    model = SAC(
        env=env,
        tensorboard_log=tensorboard_log,
        **SAC_CONFIG
    )
    model.learn(total_timesteps=total_timesteps, callback=callbacks)

    _finish(model, "sac", save_dir, metrics_callback)
    return model, metrics_callback


TRAINERS = {
    "ppo": train_ppo,
    "dqn": train_dqn,
    "sac": train_sac,
}


def main():
    parser = argparse.ArgumentParser(description="Train RL agent on the chase environment")
    parser.add_argument(
        "--algo",
        type=str,
        default="ppo",
        choices=["ppo", "dqn", "sac", "all"],
        help="RL algorithm to use (default: ppo)",
    )
    parser.add_argument(
        "--timesteps",
        type=int,
        default=None,
        help=f"Total timesteps to train (default: {TRAINING_CONFIG['total_timesteps']})",
    )
    parser.add_argument(
        "--n-envs",
        type=int,
        default=4,
        help="Number of parallel environments for PPO (default: 4)",
    )

    args = parser.parse_args()

    if args.algo == "all":
        print("Training all algorithms sequentially...")
        algos = ["dqn", "ppo", "sac"]
    else:
        algos = [args.algo]

    for algo in algos:
        if algo == "ppo":
            train_ppo(total_timesteps=args.timesteps, n_envs=args.n_envs)
        else:
            TRAINERS[algo](total_timesteps=args.timesteps)


if __name__ == "__main__":
    main()
