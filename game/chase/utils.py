"""
Vector helpers for the chase simulation
"""

from __future__ import annotations
import math
from typing import Tuple


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def vec_len(x: float, y: float) -> float:
    """Calculate vector length (magnitude)"""
    return math.hypot(x, y)


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(a, b) -> float:
    """Euclidean distance between two objects exposing x and y"""
    return math.hypot(a.x - b.x, a.y - b.y)


def angle_to(x1: float, y1: float, x2: float, y2: float) -> float:
    """Heading in radians from (x1, y1) towards (x2, y2)"""
    return math.atan2(y2 - y1, x2 - x1)
