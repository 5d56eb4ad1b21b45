"""
Soldier volleys: each soldier picks a random emu and fires one bullet at it
"""

from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Tuple

from .entities import Bullet
from .state import MatchState
from .utils import normalize

logger = logging.getLogger(__name__)

BULLET_SPEED = 3.0
MUZZLE_OFFSET = 15.0


def aim_velocity(
    from_x: float,
    from_y: float,
    to_x: float,
    to_y: float,
    speed: float = BULLET_SPEED,
    eps: float = 1e-8,
) -> Optional[Tuple[float, float]]:
    """
    Velocity of a bullet travelling from one point towards another at ``speed``.

    None when the two points coincide; there is no direction to fire in.
    """
    ux, uy = normalize(to_x - from_x, to_y - from_y, eps)
    if ux == 0.0 and uy == 0.0:
        return None
    return ux * speed, uy * speed


def fire_volley(
    state: MatchState,
    rng: random.Random,
    next_id: Callable[[], int],
    speed: float = BULLET_SPEED,
    muzzle_offset: float = MUZZLE_OFFSET,
) -> List[Bullet]:
    """
    Fire one bullet from every soldier and append them to ``state.bullets``.

    Targets are drawn uniformly from the player plus all decoys, independently
    per soldier. Returns the bullets created this volley.
    """
    fired = []
    candidates = [state.player, *state.decoys]
    for soldier in state.soldiers:
        target = rng.choice(candidates)
        velocity = aim_velocity(soldier.x, soldier.y, target.x, target.y, speed)
        if velocity is None:
            logger.debug("soldier %s is on top of its target, holding fire", soldier.id)
            continue

        vx, vy = velocity
        fired.append(Bullet(
            id=next_id(),
            x=soldier.x + muzzle_offset,
            y=soldier.y + muzzle_offset,
            vx=vx,
            vy=vy,
        ))

    state.bullets.extend(fired)
    return fired
