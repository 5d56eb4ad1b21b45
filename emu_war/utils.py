"""
Geometry helpers and random-source plumbing shared by the game systems
"""

from __future__ import annotations
import math
import random
from typing import Tuple, Optional


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def normalize(x: float, y: float, eps: float = 1e-8) -> Tuple[float, float]:
    """Normalize a vector to unit length"""
    l = math.hypot(x, y)
    if l < eps:
        return 0.0, 0.0
    return x / l, y / l


def distance(a, b) -> float:
    """Euclidean distance between two positioned entities"""
    return math.hypot(a.x - b.x, a.y - b.y)


def is_colliding(a, b, threshold: float = 25.0) -> bool:
    """
    Distance-threshold proximity test.

    True iff the centres of ``a`` and ``b`` are strictly closer than
    ``threshold`` pixels. Anything with numeric ``x``/``y`` works.
    """
    return distance(a, b) < threshold


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Build an isolated random source; None seeds from the OS"""
    return random.Random(seed)
