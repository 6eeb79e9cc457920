"""
GameSession - one chase game and everything it owns
---------------------------------------------------
- Player, pursuer and the single pickup, overwritten in place on reset
- Score, run state and the best score read from a store
- A SimulationClock that paces ticks and holds the respawn delay

Per tick, in order: input -> player move + clamp -> pursuer -> collisions.
A run ends the first time the pursuer touches the player; no further ticks
are processed until ``reset``.
"""

from __future__ import annotations

import logging
import random
from typing import Callable, Optional

from .clock import SimulationClock
from .collision import check_collisions, collect_pickup
from .config import ChaseConfig
from .controls import Direction, InputState, steer_toward
from .entities import Player, Pursuer, Pickup, RunState
from .pursuit import pursue, pursuer_speed
from .scores import MemoryHighScoreStore
from .spawner import spawn_pickup
from .utils import clamp

logger = logging.getLogger(__name__)


class GameSession:
    """Explicit owner of all per-run state"""

    def __init__(
        self,
        config: Optional[ChaseConfig] = None,
        store=None,
        rng=None,
        seed: Optional[int] = None,
        on_game_over: Optional[Callable[[int, int, bool], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
        on_score: Optional[Callable[[int], None]] = None,
        now: float = 0.0,
    ):
        self.config = config or ChaseConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng if rng is not None else random.Random(seed)

        self.on_game_over = on_game_over
        self.on_reset = on_reset
        self.on_score = on_score

        self.clock = SimulationClock(self.config.frame_ms, self.config.max_delta)
        self.input = InputState()

        cfg = self.config
        cx, cy = cfg.center
        self.player = Player(x=cx, y=cy, radius=cfg.player_radius, max_speed=cfg.player_speed)
        self.pursuer = Pursuer(
            x=cfg.pursuer_start[0], y=cfg.pursuer_start[1],
            radius=cfg.pursuer_radius,
            base_speed=cfg.pursuer_speed, speed=cfg.pursuer_speed,
        )
        self.pickup = Pickup(x=0.0, y=0.0, radius=cfg.pickup_radius, taken=True)

        self.score = 0
        self.high_score = self.store.load()
        self.state = RunState.RUNNING
        self.new_record = False
        self.ticks = 0

        self.reset(now)

    # ----------------------------
    # Lifecycle
    # ----------------------------

    @property
    def running(self) -> bool:
        return self.state is RunState.RUNNING

    @property
    def generation(self) -> int:
        return self.clock.generation

    @property
    def pursuer_speed_cap(self) -> float:
        """Upper bound on pursuer speed for the current run"""
        return self.pursuer.base_speed + self.config.speed_cap + self.pursuer.bonus_speed

    def reset(self, now: float = 0.0):
        cfg = self.config
        cx, cy = cfg.center

        self.score = 0
        self.ticks = 0
        self.new_record = False

        self.player.x, self.player.y = cx, cy
        self.player.vx = self.player.vy = 0.0

        self.pursuer.x, self.pursuer.y = cfg.pursuer_start
        self.pursuer.bonus_speed = 0.0
        self.pursuer.speed = self.pursuer.base_speed

        self.input.clear()
        self.clock.begin(now)
        self._spawn_pickup()
        self.state = RunState.RUNNING

        logger.debug("Run %d started", self.clock.generation)
        if self.on_reset is not None:
            self.on_reset()

    # ----------------------------
    # Frame driving
    # ----------------------------

    def frame(self, now: float) -> bool:
        """Host frame callback. Returns True when a tick was simulated."""
        self.clock.run_due(now)
        if not self.clock.take_frame():
            return False
        self.tick(now)
        return True

    def tick(self, now: float):
        dt = self.clock.delta(now)
        self.step(dt)
        if self.running:
            self.clock.request_frame()

    def step(self, dt: float):
        if not self.running:
            return
        cfg = self.config
        p = self.player
        e = self.pursuer

        p.vx, p.vy = self.input.velocity(p.vx, p.vy, p.max_speed,
                                         cfg.decel_factor, cfg.stop_epsilon)

        p.x = clamp(p.x + p.vx * dt, p.radius, cfg.width - p.radius)
        p.y = clamp(p.y + p.vy * dt, p.radius, cfg.height - p.radius)

        e.speed = pursuer_speed(e.base_speed, self.score, cfg.speed_growth,
                                cfg.speed_cap, e.bonus_speed)
        e.x, e.y = pursue(e, p, cfg.lead_factor, dt)

        self.ticks += 1

        hits = check_collisions(p, e, self.pickup, cfg.catch_tolerance)
        if hits.caught:
            self._game_over()
        elif hits.collected:
            self._collect()

    # ----------------------------
    # Input surface
    # ----------------------------

    def press(self, key: str) -> bool:
        return self.input.press(key)

    def release(self, key: str) -> bool:
        return self.input.release(key)

    def set_intent(self, direction: Direction, active: bool = True):
        self.input.set_intent(direction, active)

    def steer_toward(self, x: float, y: float):
        """Pointer press: head for (x, y) at full speed until released"""
        p = self.player
        p.vx, p.vy = steer_toward(p.x, p.y, x, y, p.max_speed)
        self.input.steer_velocity = (p.vx, p.vy)

    def release_pointer(self):
        self.input.steer_velocity = None
        self.player.vx = self.player.vy = 0.0

    # ----------------------------
    # Outcomes
    # ----------------------------

    def _collect(self):
        cfg = self.config
        self.score = collect_pickup(self.pickup, self.pursuer, self.score, cfg.speed_bump)
        self.clock.schedule(cfg.respawn_delay_ms, self._respawn, kind="respawn")
        if self.on_score is not None:
            self.on_score(self.score)

    def _respawn(self):
        if not self.running:
            logger.debug("Respawn ignored, run is over")
            return
        self._spawn_pickup()

    def _spawn_pickup(self):
        cfg = self.config
        attempts = spawn_pickup(
            self.pickup, self.rng, cfg.width, cfg.height, cfg.pickup_margin,
            [(self.player.x, self.player.y), (self.pursuer.x, self.pursuer.y)],
            cfg.pickup_clearance, cfg.spawn_attempts,
        )
        if attempts >= cfg.spawn_attempts:
            logger.debug("Pickup placed after %d attempts", attempts)

    def _game_over(self):
        self.state = RunState.GAME_OVER
        self.clock.stop()
        if self.score > self.high_score:
            self.high_score = self.score
            self.new_record = True
            self.store.save(self.score)
            logger.info("New high score: %d", self.score)
        logger.info("Caught after %d ticks with score %d", self.ticks, self.score)
        if self.on_game_over is not None:
            self.on_game_over(self.score, self.high_score, self.new_record)
