from __future__ import annotations

import pytest

from emu_war.entities import Bullet, Decoy, Direction, Facing
from emu_war.motion import move_decoys, move_player, update_bullets
from emu_war.state import MatchState


def test_bullets_take_one_euler_step() -> None:
    state = MatchState(bullets=[Bullet(id=1, x=10.0, y=10.0, vx=3.0, vy=-1.5)])
    update_bullets(state)
    assert (state.bullets[0].x, state.bullets[0].y) == (13.0, 8.5)


def test_out_of_bounds_bullets_are_removed_same_tick() -> None:
    state = MatchState(bullets=[
        Bullet(id=1, x=1.0, y=100.0, vx=-3.0, vy=0.0),    # leaves left edge
        Bullet(id=2, x=799.0, y=100.0, vx=3.0, vy=0.0),   # leaves right edge
        Bullet(id=3, x=100.0, y=349.0, vx=0.0, vy=3.0),   # leaves bottom edge
        Bullet(id=4, x=100.0, y=1.0, vx=0.0, vy=-3.0),    # leaves top edge
        Bullet(id=5, x=797.0, y=347.0, vx=3.0, vy=3.0),   # lands exactly on the corner
    ])
    before = len(state.bullets)
    dropped = update_bullets(state)

    assert [b.id for b in state.bullets] == [5]
    assert dropped == 4
    assert len(state.bullets) <= before
    for b in state.bullets:
        assert state.in_bounds(b.x, b.y)


def test_decoys_mostly_stay_put(scripted_rng) -> None:
    state = MatchState(decoys=[Decoy(id=1, x=200.0, y=200.0)])
    move_decoys(state, scripted_rng(values=[0.1]))  # not below the 10% chance
    assert (state.decoys[0].x, state.decoys[0].y) == (200.0, 200.0)


def test_decoy_steps_two_pixels_when_triggered(scripted_rng) -> None:
    state = MatchState(decoys=[Decoy(id=1, x=200.0, y=200.0)])
    move_decoys(state, scripted_rng(values=[0.05, 0.25]))  # heading pi/2, straight down
    assert state.decoys[0].x == pytest.approx(200.0)
    assert state.decoys[0].y == pytest.approx(202.0)


def test_decoy_is_clamped_inside_margin(scripted_rng) -> None:
    state = MatchState(decoys=[Decoy(id=1, x=770.0, y=0.0), Decoy(id=2, x=0.0, y=320.0)])
    # decoy 1 heads right (0 rad), decoy 2 heads up (3pi/2 rad)
    move_decoys(state, scripted_rng(values=[0.0, 0.0, 0.0, 0.75]))
    assert state.decoys[0].x == 770.0
    assert state.decoys[1].y == pytest.approx(318.0)

    state.decoys[1].y = 1.0
    move_decoys(state, scripted_rng(values=[0.5, 0.0, 0.75]))
    assert state.decoys[1].y == 0.0


def test_left_at_edge_is_noop() -> None:
    state = MatchState()
    state.player.x = 0.0
    assert move_player(state, Direction.LEFT) is False
    assert state.player.x == 0.0
    assert state.player.facing is Facing.RIGHT


def test_left_moves_by_speed_and_faces_left() -> None:
    state = MatchState()
    state.player.x = 50.0
    assert move_player(state, Direction.LEFT) is True
    assert state.player.x == 45.0
    assert state.player.facing is Facing.LEFT


def test_right_and_down_stop_at_sprite_margin() -> None:
    state = MatchState()
    state.player.x, state.player.y = 758.0, 308.0
    assert move_player(state, Direction.RIGHT)
    assert move_player(state, Direction.DOWN)
    assert (state.player.x, state.player.y) == (760.0, 310.0)
    assert state.player.facing is Facing.RIGHT

    assert not move_player(state, Direction.RIGHT)
    assert not move_player(state, Direction.DOWN)


def test_up_clamps_at_zero() -> None:
    state = MatchState()
    state.player.y = 3.0
    assert move_player(state, Direction.UP)
    assert state.player.y == 0.0
    assert not move_player(state, Direction.UP)
