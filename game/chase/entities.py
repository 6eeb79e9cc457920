"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class RunState(Enum):
    """Whether the current run is still being simulated"""
    RUNNING = auto()
    GAME_OVER = auto()


@dataclass
class Player:
    """Player-controlled circle"""
    x: float
    y: float
    radius: float = 14.0
    max_speed: float = 3.3  # px per nominal frame
    vx: float = 0.0
    vy: float = 0.0
    color: Tuple[int, int, int] = (59, 130, 246)


@dataclass
class Pursuer:
    """AI-controlled chaser"""
    x: float
    y: float
    radius: float = 18.0
    base_speed: float = 1.6
    speed: float = 1.6
    bonus_speed: float = 0.0  # accumulated per-pickup increments
    color: Tuple[int, int, int] = (239, 68, 68)


@dataclass
class Pickup:
    """Collectible star, absent while taken"""
    x: float
    y: float
    radius: float = 8.0
    taken: bool = False
    color: Tuple[int, int, int] = (250, 204, 21)
