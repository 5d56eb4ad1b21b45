"""Emu War - crop-raid arcade game core"""

from .game import EmuWarGame
from .emu_env import EmuWarEnv
from .state import Phase, MatchState, GameEvent
from .entities import Direction, Facing

__all__ = ['EmuWarGame', 'EmuWarEnv', 'Phase', 'MatchState', 'GameEvent', 'Direction', 'Facing']
