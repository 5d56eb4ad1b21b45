from __future__ import annotations

import pytest

from emu_war.entities import Player, Crop
from emu_war.utils import clamp, distance, is_colliding, make_rng, normalize


def test_is_colliding_is_strict() -> None:
    a = Player(x=0.0, y=0.0)
    assert is_colliding(a, Crop(id=0, x=29.9, y=0.0), 30)
    assert not is_colliding(a, Crop(id=0, x=30.0, y=0.0), 30)


def test_is_colliding_default_threshold_is_25() -> None:
    a = Player(x=0.0, y=0.0)
    assert is_colliding(a, Crop(id=0, x=15.0, y=20.0 - 1e-9))
    assert not is_colliding(a, Crop(id=0, x=15.0, y=20.0))  # exactly 25 away


def test_distance_uses_both_axes() -> None:
    assert distance(Player(x=0.0, y=0.0), Crop(id=0, x=3.0, y=4.0)) == pytest.approx(5.0)


def test_normalize_guards_zero_vector() -> None:
    assert normalize(0.0, 0.0) == (0.0, 0.0)
    assert normalize(3.0, 4.0) == pytest.approx((0.6, 0.8))


@pytest.mark.parametrize("x,expected", [(-1.0, 0.0), (5.0, 5.0), (11.0, 10.0)])
def test_clamp(x: float, expected: float) -> None:
    assert clamp(x, 0.0, 10.0) == expected


def test_make_rng_is_seedable() -> None:
    assert make_rng(5).random() == make_rng(5).random()
