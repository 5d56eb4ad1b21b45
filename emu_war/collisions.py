"""
Collision resolution and scoring for one tick
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .entities import Bullet, Crop
from .state import MatchState
from .utils import is_colliding

CROP_THRESHOLD = 30.0
BULLET_THRESHOLD = 20.0
CROP_SCORE = 10


@dataclass
class CollisionReport:
    """What happened to the player this tick"""
    crops: List[Crop] = field(default_factory=list)
    hits: List[Bullet] = field(default_factory=list)

    @property
    def any(self) -> bool:
        return bool(self.crops or self.hits)


def resolve_collisions(
    state: MatchState,
    crop_threshold: float = CROP_THRESHOLD,
    bullet_threshold: float = BULLET_THRESHOLD,
    crop_score: int = CROP_SCORE,
) -> CollisionReport:
    """
    Player vs crops, then player vs bullets.

    Every overlapping crop is destroyed and every overlapping bullet costs a
    life, so a crowded tick can cost several lives at once.
    """
    report = CollisionReport()
    player = state.player

    # Player vs crops
    for crop in state.crops:
        if crop.destroyed or not is_colliding(player, crop, crop_threshold):
            continue
        crop.destroyed = True
        state.crops_destroyed += 1
        state.score += crop_score
        report.crops.append(crop)

    # Player vs bullets
    remaining = []
    for b in state.bullets:
        if is_colliding(player, b, bullet_threshold):
            state.lives -= 1
            report.hits.append(b)
        else:
            remaining.append(b)
    state.bullets = remaining

    return report
