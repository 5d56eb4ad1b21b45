"""
Game entity dataclasses
"""

from dataclasses import dataclass
from enum import Enum


class Facing(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value):
        """Return the matching Direction, or None for anything unrecognised"""
        if isinstance(value, cls):
            return value
        if isinstance(value, Enum):
            value = value.value
        try:
            return cls(str(value).lower())
        except ValueError:
            return None


@dataclass
class Player:
    """Player-controlled emu"""
    x: float
    y: float
    facing: Facing = Facing.RIGHT
    moving: bool = False  # display-only pulse, cleared by a timer
    speed: float = 5.0  # px per input step


@dataclass
class Crop:
    """Destructible crop; ``destroyed`` only ever goes False -> True"""
    id: int
    x: float
    y: float
    destroyed: bool = False


@dataclass(frozen=True)
class Soldier:
    """Stationary emitter that fires on the volley cadence"""
    id: int
    x: float
    y: float


@dataclass
class Bullet:
    """Bullet projectile entity"""
    id: int
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class Decoy:
    """Wandering emu that soldiers may pick instead of the player"""
    id: int
    x: float
    y: float
