"""
Match state and the events published while it changes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Literal

from .entities import Player, Crop, Soldier, Bullet, Decoy


class Phase(str, Enum):
    INSTRUCTIONS = "instructions"
    PLAYING = "playing"
    VICTORY = "victory"
    GAME_OVER = "gameOver"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.VICTORY, Phase.GAME_OVER)


EventType = Literal[
    "phase_changed",
    "crop_destroyed",
    "player_hit",
    "volley_fired",
    "player_moved",
]


@dataclass(frozen=True)
class GameEvent:
    type: EventType
    tick: int
    payload: Dict[str, Any]


@dataclass
class MatchState:
    """
    The single mutable object a match lives in.

    Owned by one EmuWarGame; the systems in motion/combat/collisions take it
    by reference and mutate it in place.
    """
    width: int = 800
    height: int = 350
    phase: Phase = Phase.INSTRUCTIONS
    score: int = 0
    lives: int = 3
    crops_destroyed: int = 0
    tick: int = 0
    player: Player = field(default_factory=lambda: Player(x=100.0, y=150.0))
    crops: List[Crop] = field(default_factory=list)
    soldiers: List[Soldier] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    decoys: List[Decoy] = field(default_factory=list)

    @property
    def crops_remaining(self) -> int:
        return len(self.crops) - self.crops_destroyed

    def in_bounds(self, x: float, y: float) -> bool:
        return 0 <= x <= self.width and 0 <= y <= self.height
