"""
Initial population for a fresh match
"""

from __future__ import annotations

import random
from typing import Tuple

from .entities import Player, Crop, Soldier, Decoy
from .state import MatchState

# Crop grid: 5 columns, 150x80 px pitch, offset (200, 50), jittered
GRID_COLUMNS = 5
GRID_PITCH = (150.0, 80.0)
GRID_OFFSET = (200.0, 50.0)
GRID_JITTER = (50.0, 30.0)

SOLDIER_POSITIONS = ((50.0, 50.0), (750.0, 100.0), (400.0, 300.0))
DECOY_POSITIONS = ((200.0, 200.0), (600.0, 150.0), (300.0, 250.0), (500.0, 100.0))


def spawn_crops(rng: random.Random, count: int = 20):
    crops = []
    for i in range(count):
        col, row = i % GRID_COLUMNS, i // GRID_COLUMNS
        x = col * GRID_PITCH[0] + GRID_OFFSET[0] + rng.random() * GRID_JITTER[0]
        y = row * GRID_PITCH[1] + GRID_OFFSET[1] + rng.random() * GRID_JITTER[1]
        crops.append(Crop(id=i, x=x, y=y))
    return crops


def setup_match(
    state: MatchState,
    rng: random.Random,
    crop_count: int = 20,
    lives: int = 3,
    player_start: Tuple[float, float] = (100.0, 150.0),
    player_speed: float = 5.0,
) -> MatchState:
    """
    Replace every entity collection and reset the counters.

    Calling it twice in a row leaves the same shape of state as calling it
    once; only crop jitter differs. Phase is left to the caller.
    """
    state.crops = spawn_crops(rng, crop_count)
    state.soldiers = [Soldier(id=i + 1, x=x, y=y) for i, (x, y) in enumerate(SOLDIER_POSITIONS)]
    state.decoys = [Decoy(id=i + 1, x=x, y=y) for i, (x, y) in enumerate(DECOY_POSITIONS)]
    state.bullets = []

    state.score = 0
    state.lives = lives
    state.crops_destroyed = 0
    state.tick = 0

    state.player = Player(x=player_start[0], y=player_start[1], speed=player_speed)
    return state
