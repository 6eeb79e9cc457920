"""
Pursuer steering: leads the player by its velocity and heads straight for that point
"""

from __future__ import annotations

import math
from typing import Tuple

from .entities import Player, Pursuer
from .utils import angle_to


def pursuer_speed(base: float, score: int, growth: float, cap: float, bonus: float = 0.0) -> float:
    """Difficulty-scaled speed: grows with score, saturates at ``cap``, plus permanent bonus"""
    return base + min(score * growth, cap) + bonus


def predict_target(x: float, y: float, vx: float, vy: float, lead: float) -> Tuple[float, float]:
    """Where the player will be ``lead`` frames from now at constant velocity"""
    return x + vx * lead, y + vy * lead


def advance_pursuer(ex: float, ey: float, tx: float, ty: float,
                    speed: float, dt: float) -> Tuple[float, float]:
    heading = angle_to(ex, ey, tx, ty)
    step = speed * dt
    return ex + math.cos(heading) * step, ey + math.sin(heading) * step


def pursue(pursuer: Pursuer, player: Player, lead: float, dt: float) -> Tuple[float, float]:
    """New pursuer position after one tick at its current speed. Does not mutate."""
    tx, ty = predict_target(player.x, player.y, player.vx, player.vy, lead)
    return advance_pursuer(pursuer.x, pursuer.y, tx, ty, pursuer.speed, dt)
