"""
Pickup placement away from the player and pursuer
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from .entities import Pickup


def choose_pickup_position(
    rng,
    width: float,
    height: float,
    margin: float,
    avoid: Sequence[Tuple[float, float]],
    min_distance: float,
    max_attempts: int = 50,
) -> Tuple[float, float, int]:
    """
    Sample uniform points inside the arena inset by ``margin`` until one is
    at least ``min_distance`` from every point in ``avoid``.

    ``rng`` is anything with ``uniform(lo, hi)`` (``random.Random`` or a
    numpy ``Generator``). After ``max_attempts`` samples the last one is
    accepted as is. Returns ``(x, y, attempts)``.
    """
    x = y = 0.0
    attempts = 0
    while attempts < max_attempts:
        x = float(rng.uniform(margin, width - margin))
        y = float(rng.uniform(margin, height - margin))
        attempts += 1
        if all(math.hypot(x - ax, y - ay) >= min_distance for ax, ay in avoid):
            break
    return x, y, attempts


def spawn_pickup(pickup: Pickup, rng, width, height, margin, avoid, min_distance,
                 max_attempts: int = 50) -> int:
    x, y, attempts = choose_pickup_position(
        rng, width, height, margin, avoid, min_distance, max_attempts
    )
    pickup.x = x
    pickup.y = y
    pickup.taken = False
    return attempts
