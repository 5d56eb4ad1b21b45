"""
Per-tick motion: bullets, wandering decoys, and the player's input step
"""

from __future__ import annotations

import math
import random

from .entities import Direction, Facing
from .state import MatchState
from .utils import clamp

DECOY_MOVE_CHANCE = 0.1
DECOY_STEP = 2.0
DECOY_MARGIN = 30.0
PLAYER_MARGIN = 40.0


def update_bullets(state: MatchState) -> int:
    """
    Advance every bullet one Euler step and drop those that left the arena.

    Returns how many bullets were dropped.
    """
    kept = []
    for b in state.bullets:
        b.x += b.vx
        b.y += b.vy
        if state.in_bounds(b.x, b.y):
            kept.append(b)
    dropped = len(state.bullets) - len(kept)
    state.bullets = kept
    return dropped


def move_decoys(
    state: MatchState,
    rng: random.Random,
    chance: float = DECOY_MOVE_CHANCE,
    step: float = DECOY_STEP,
    margin: float = DECOY_MARGIN,
):
    # Sporadic: most ticks a decoy stays put
    for d in state.decoys:
        if rng.random() >= chance:
            continue
        heading = rng.random() * math.pi * 2
        d.x = clamp(d.x + math.cos(heading) * step, 0.0, state.width - margin)
        d.y = clamp(d.y + math.sin(heading) * step, 0.0, state.height - margin)


def move_player(state: MatchState, direction: Direction, margin: float = PLAYER_MARGIN) -> bool:
    """Apply one input step; returns False when the player is already at that edge"""
    p = state.player
    max_x = state.width - margin
    max_y = state.height - margin

    if direction is Direction.UP:
        if p.y <= 0:
            return False
        p.y = clamp(p.y - p.speed, 0.0, max_y)
    elif direction is Direction.DOWN:
        if p.y >= max_y:
            return False
        p.y = clamp(p.y + p.speed, 0.0, max_y)
    elif direction is Direction.LEFT:
        if p.x <= 0:
            return False
        p.x = clamp(p.x - p.speed, 0.0, max_x)
        p.facing = Facing.LEFT
    elif direction is Direction.RIGHT:
        if p.x >= max_x:
            return False
        p.x = clamp(p.x + p.speed, 0.0, max_x)
        p.facing = Facing.RIGHT
    else:
        return False
    return True
