"""
Collision checks between player, pursuer and pickup
"""

from __future__ import annotations

from dataclasses import dataclass

from .entities import Player, Pursuer, Pickup
from .utils import distance


@dataclass
class CollisionResult:
    caught: bool = False
    collected: bool = False


def is_caught(player: Player, pursuer: Pursuer, tolerance: float) -> bool:
    """
    Lethal contact. ``tolerance`` shrinks the sum-of-radii threshold to give
    a grace margin; the comparison is strict.
    """
    return distance(player, pursuer) < (player.radius + pursuer.radius - tolerance)


def is_collected(player: Player, pickup: Pickup) -> bool:
    if pickup.taken:
        return False
    return distance(player, pickup) < (player.radius + pickup.radius)


def check_collisions(player: Player, pursuer: Pursuer, pickup: Pickup,
                     tolerance: float) -> CollisionResult:
    """Capture is checked first; a caught player cannot also collect."""
    if is_caught(player, pursuer, tolerance):
        return CollisionResult(caught=True)
    return CollisionResult(collected=is_collected(player, pickup))


def collect_pickup(pickup: Pickup, pursuer: Pursuer, score: int, speed_bump: float) -> int:
    """Take the pickup, make the pursuer permanently faster and return the new score"""
    pickup.taken = True
    pursuer.bonus_speed += speed_bump
    pursuer.speed += speed_bump
    return score + 1
