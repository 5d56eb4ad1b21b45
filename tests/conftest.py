from __future__ import annotations

import random

import pytest

from emu_war import EmuWarGame
from emu_war.state import MatchState
from emu_war.spawner import setup_match


class ScriptedRandom(random.Random):
    """Random source that replays fixed values, then falls back to ``default``.

    ``choice`` picks by index from ``picks`` (cycling), so tests can say
    exactly which candidate a soldier aims at.
    """

    def __init__(self, values=(), picks=(), default: float = 0.99):
        super().__init__(0)
        self.values = list(values)
        self.picks = list(picks)
        self.default = default

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default

    def choice(self, seq):
        if self.picks:
            idx = self.picks.pop(0)
            self.picks.append(idx)
            return seq[idx % len(seq)]
        return seq[0]


@pytest.fixture()
def scripted_rng() -> type[ScriptedRandom]:
    return ScriptedRandom


@pytest.fixture()
def state() -> MatchState:
    return setup_match(MatchState(), random.Random(7))


@pytest.fixture()
def game() -> EmuWarGame:
    return EmuWarGame(seed=1234)


@pytest.fixture()
def playing_game(game: EmuWarGame) -> EmuWarGame:
    game.start()
    return game


@pytest.fixture()
def events(game: EmuWarGame) -> list:
    seen: list = []
    game.subscribe(seen.append)
    return seen
