"""
Tuning constants for the chase game
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ChaseConfig:
    """All gameplay constants for one arena. Distances in px, speeds in px per nominal frame."""

    # Arena
    width: int = 800
    height: int = 600

    # Timing
    frame_ms: float = 16.6667  # nominal frame duration
    max_delta: float = 4.0  # cap on normalized delta after stalls

    # Player
    player_radius: float = 14.0
    player_speed: float = 3.3
    decel_factor: float = 0.85  # applied once per tick with no intent
    stop_epsilon: float = 0.02

    # Pursuer
    pursuer_radius: float = 18.0
    pursuer_speed: float = 1.6
    pursuer_start: Tuple[float, float] = (80.0, 80.0)
    lead_factor: float = 8.0
    speed_growth: float = 0.06
    speed_cap: float = 2.6
    speed_bump: float = 0.08
    catch_tolerance: float = 2.0

    # Pickup
    pickup_radius: float = 8.0
    pickup_margin: float = 30.0
    pickup_clearance: float = 80.0
    spawn_attempts: int = 50
    respawn_delay_ms: float = 350.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Arena must have a positive size, got {self.width}x{self.height}")
        if self.frame_ms <= 0:
            raise ValueError("frame_ms must be positive")
        if self.max_delta < 1.0:
            raise ValueError("max_delta must be at least 1 frame")
        for name in ("player_radius", "pursuer_radius", "pickup_radius",
                     "player_speed", "pursuer_speed"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if 2 * self.player_radius > min(self.width, self.height):
            raise ValueError("player_radius is too large for the arena")
        if not 0.0 <= self.catch_tolerance < self.player_radius + self.pursuer_radius:
            raise ValueError("catch_tolerance must be in [0, player_radius + pursuer_radius)")
        if not 0.0 <= self.decel_factor < 1.0:
            raise ValueError("decel_factor must be in [0, 1)")
        if self.pickup_margin < self.pickup_radius:
            raise ValueError("pickup_margin must be at least pickup_radius")
        if 2 * self.pickup_margin >= min(self.width, self.height):
            raise ValueError("pickup_margin leaves no room to spawn pickups")
        if self.spawn_attempts < 1:
            raise ValueError("spawn_attempts must be at least 1")
        if self.speed_growth < 0 or self.speed_cap < 0 or self.speed_bump < 0:
            raise ValueError("difficulty terms must be non-negative")
        if self.respawn_delay_ms < 0:
            raise ValueError("respawn_delay_ms must be non-negative")

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2, self.height / 2
