"""
Input integration: turns held directions or a pointer target into player velocity
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Optional, Set, Tuple

from .utils import normalize, vec_len


class Direction(Enum):
    UP = (0.0, -1.0)
    DOWN = (0.0, 1.0)
    LEFT = (-1.0, 0.0)
    RIGHT = (1.0, 0.0)


# Lower-cased key names, as reported by browsers and most toolkits
KEY_BINDINGS: Dict[str, Direction] = {
    "arrowup": Direction.UP,
    "w": Direction.UP,
    "arrowdown": Direction.DOWN,
    "s": Direction.DOWN,
    "arrowleft": Direction.LEFT,
    "a": Direction.LEFT,
    "arrowright": Direction.RIGHT,
    "d": Direction.RIGHT,
}


def intent_axes(intents: Iterable[Direction]) -> Tuple[float, float]:
    """Sum held directions into raw axes (opposite keys cancel)"""
    ax, ay = 0.0, 0.0
    for d in set(intents):
        dx, dy = d.value
        ax += dx
        ay += dy
    return ax, ay


def integrate_velocity(
    intents: Iterable[Direction],
    vx: float,
    vy: float,
    max_speed: float,
    decel: float = 0.85,
    epsilon: float = 0.02,
) -> Tuple[float, float]:
    """
    Velocity for this tick.

    With any axis active the result has magnitude ``max_speed`` in the
    combined direction, so diagonals are not faster. With nothing active the
    previous velocity decays by ``decel`` once per tick and snaps to zero
    when its magnitude falls below ``epsilon``.
    """
    ax, ay = intent_axes(intents)
    if ax != 0.0 or ay != 0.0:
        nx, ny = normalize(ax, ay)
        return nx * max_speed, ny * max_speed

    vx *= decel
    vy *= decel
    if vec_len(vx, vy) < epsilon:
        return 0.0, 0.0
    return vx, vy


def steer_toward(px: float, py: float, tx: float, ty: float, max_speed: float) -> Tuple[float, float]:
    """Full-speed velocity from the player towards a pointer target"""
    nx, ny = normalize(tx - px, ty - py)
    return nx * max_speed, ny * max_speed


class InputState:
    """Held directional intents plus an optional persistent pointer velocity"""

    def __init__(self):
        self.held: Set[Direction] = set()
        self.steer_velocity: Optional[Tuple[float, float]] = None

    def press(self, key: str) -> bool:
        d = KEY_BINDINGS.get(key.lower())
        if d is None:
            return False
        self.held.add(d)
        return True

    def release(self, key: str) -> bool:
        d = KEY_BINDINGS.get(key.lower())
        if d is None:
            return False
        self.held.discard(d)
        return True

    def set_intent(self, direction: Direction, active: bool):
        if active:
            self.held.add(direction)
        else:
            self.held.discard(direction)

    def set_held(self, directions: Iterable[Direction]):
        self.held = set(directions)

    def clear(self):
        self.held.clear()
        self.steer_velocity = None

    def velocity(self, vx: float, vy: float, max_speed: float,
                 decel: float, epsilon: float) -> Tuple[float, float]:
        # Keys win over the pointer; a pointer velocity does not decay
        if not self.held and self.steer_velocity is not None:
            return self.steer_velocity
        return integrate_velocity(self.held, vx, vy, max_speed, decel, epsilon)
