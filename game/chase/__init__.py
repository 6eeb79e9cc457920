"""Chase game module - evade the pursuer, collect stars"""

from .config import ChaseConfig
from .entities import Player, Pursuer, Pickup, RunState
from .controls import Direction
from .scores import MemoryHighScoreStore, JsonHighScoreStore
from .session import GameSession
from .chase_env import ChaseEnv, run_random_episode

__all__ = [
    'ChaseConfig',
    'Player',
    'Pursuer',
    'Pickup',
    'RunState',
    'Direction',
    'MemoryHighScoreStore',
    'JsonHighScoreStore',
    'GameSession',
    'ChaseEnv',
    'run_random_episode',
]
