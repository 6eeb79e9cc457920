"""
ChaseEnv - the chase game as a gymnasium environment
----------------------------------------------------
- GameSession does the simulation; the policy plays the input collaborator
- Discrete action space: stay, 4 axis directions, 4 diagonals
- Vector observation: player state + pursuer offset/speed + pickup offset
- Rewards for surviving and collecting, a penalty for being caught
- Arcade window for "human" rendering, numpy raster for "rgb_array"

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.chase.chase_env
"""

from __future__ import annotations

from typing import Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import ChaseConfig
from .controls import Direction
from .scores import MemoryHighScoreStore
from .session import GameSession
from .utils import clamp

# Action index -> held directions
ACTIONS = (
    (),
    (Direction.UP,),
    (Direction.DOWN,),
    (Direction.LEFT,),
    (Direction.RIGHT,),
    (Direction.UP, Direction.LEFT),
    (Direction.UP, Direction.RIGHT),
    (Direction.DOWN, Direction.LEFT),
    (Direction.DOWN, Direction.RIGHT),
)

DEFAULT_REWARDS = {
    "R_PICKUP": 1.0,
    "R_SURVIVE": 0.01,
    "R_CAUGHT": 5.0,
}


class ChaseEnv(gym.Env):
    """Evade the pursuer and collect pickups"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 3600,  # 60s at the nominal 60 FPS
        reward_config: Optional[Dict[str, float]] = None,
        store=None,
        **config_kwargs,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode}")
        if max_steps <= 0:
            raise ValueError("max_steps must be positive")

        self.render_mode = render_mode
        self.config = ChaseConfig(**config_kwargs)
        self.max_steps = max_steps
        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})
        self.store = store if store is not None else MemoryHighScoreStore()

        self.action_space = spaces.Discrete(len(ACTIONS))

        # player pos(2) vel(2), pursuer rel pos(2) speed(1), pickup rel pos(2) available(1)
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(10,), dtype=np.float32)

        self.session: GameSession = None  # type: ignore
        self._now = 0.0
        self._step_count = 0
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._now = 0.0
        self._step_count = 0
        if self.session is None:
            self.session = GameSession(self.config, store=self.store, rng=self.np_random, now=self._now)
        else:
            self.session.rng = self.np_random
            self.session.reset(self._now)

        return self._get_obs(), self._get_info()

    def step(self, action):
        action = int(action)
        if not 0 <= action < len(ACTIONS):
            raise ValueError(f"Invalid action: {action}")

        score_before = self.session.score
        self.session.input.set_held(ACTIONS[action])

        # one nominal frame of synthetic time so respawn delays line up with ticks
        self._now += self.config.frame_ms
        self.session.frame(self._now)
        self._step_count += 1

        terminated = not self.session.running
        truncated = (not terminated) and self._step_count >= self.max_steps

        reward = self._compute_reward(self.session.score - score_before, terminated)

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), reward, terminated, truncated, self._get_info()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        w, h = self.config.width, self.config.height
        p, e, k = self.session.player, self.session.pursuer, self.session.pickup

        obs = [
            p.x / w * 2 - 1, p.y / h * 2 - 1,
            clamp(p.vx / p.max_speed, -1, 1), clamp(p.vy / p.max_speed, -1, 1),
            clamp((e.x - p.x) / w, -1, 1), clamp((e.y - p.y) / h, -1, 1),
            clamp(e.speed / self.session.pursuer_speed_cap * 2 - 1, -1, 1),
        ]
        if k.taken:
            obs += [0.0, 0.0, -1.0]
        else:
            obs += [clamp((k.x - p.x) / w, -1, 1), clamp((k.y - p.y) / h, -1, 1), 1.0]

        return np.array(obs, dtype=np.float32)

    def _compute_reward(self, collected: int, caught: bool) -> float:
        reward = self.rewards["R_PICKUP"] * collected
        if caught:
            reward -= self.rewards["R_CAUGHT"]
        else:
            reward += self.rewards["R_SURVIVE"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        s = self.session
        return {
            "score": s.score,
            "high_score": s.high_score,
            "pursuer_speed": s.pursuer.speed,
            "caught": not s.running,
            "pickup_available": not s.pickup.taken,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "human":
            if self._window is None:
                # arcade needs a display, so only import it when a window is wanted
                from .window import ChaseWindow
                self._window = ChaseWindow(self.session, title="ChaseEnv - Arcade")
            self._window.dispatch_events()
            self._window.on_draw()
            self._window.flip()
            return None

        return self._render_rgb_array()

    def _render_rgb_array(self) -> np.ndarray:
        w, h = self.config.width, self.config.height
        frame = np.empty((h, w, 3), dtype=np.uint8)
        frame[:] = (18, 18, 22)

        ys, xs = np.ogrid[:h, :w]
        s = self.session
        circles = [(s.pursuer.x, s.pursuer.y, s.pursuer.radius, s.pursuer.color),
                   (s.player.x, s.player.y, s.player.radius, s.player.color)]
        if not s.pickup.taken:
            circles.insert(0, (s.pickup.x, s.pickup.y, s.pickup.radius, s.pickup.color))

        for cx, cy, r, color in circles:
            mask = (xs - cx) ** 2 + (ys - cy) ** 2 <= r * r
            frame[mask] = color
        return frame

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = False, seed: Optional[int] = 42):
    """Run a random-policy episode and report how it went"""
    env = ChaseEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running random episode...")
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    print(f"Random episode return: {total:.2f}  "
          f"score: {info['score']}  steps: {info['step']}  caught: {info['caught']}")
    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=False)
