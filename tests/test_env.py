from __future__ import annotations

import numpy as np
import pytest

from emu_war import EmuWarEnv, Phase
from emu_war.entities import Bullet


def test_reset_returns_observation_in_space() -> None:
    env = EmuWarEnv()
    obs, info = env.reset(seed=0)

    assert obs.shape == env.observation_space.shape
    assert obs.dtype == np.float32
    assert env.observation_space.contains(obs)
    assert info["phase"] == "playing"
    assert env.game.phase is Phase.PLAYING


def test_one_step_is_one_tick() -> None:
    env = EmuWarEnv()
    env.reset(seed=0)
    env.step(4)  # right
    assert env.game.state.tick == 1
    assert env.game.player.x == 105.0


def test_truncates_at_max_steps_then_refuses_to_step() -> None:
    env = EmuWarEnv(max_steps=5)
    env.reset(seed=0)
    results = [env.step(0) for _ in range(5)]

    assert [r[3] for r in results] == [False, False, False, False, True]
    with pytest.raises(RuntimeError):
        env.step(0)


def test_game_over_terminates_with_penalties() -> None:
    env = EmuWarEnv()
    env.reset(seed=0)
    p = env.game.state.player
    env.game.state.bullets = [Bullet(id=900 + i, x=p.x, y=p.y, vx=0.0, vy=0.0) for i in range(3)]

    obs, reward, terminated, truncated, info = env.step(0)

    assert terminated and not truncated
    assert info["phase"] == "gameOver"
    assert info["lives"] == 0
    assert reward == pytest.approx(-3.0 - 5.0 - 0.001)


def test_crop_reward() -> None:
    env = EmuWarEnv(reward_config={"R_CROP": 2.0, "R_TIME": 0.0})
    env.reset(seed=0)
    crop = env.game.state.crops[0]
    crop.x, crop.y = env.game.player.x, env.game.player.y

    _, reward, _, _, info = env.step(0)
    assert reward == pytest.approx(2.0)
    assert info["crops_destroyed"] == 1


def test_same_seed_same_trajectory() -> None:
    actions = [1, 4, 4, 2, 3, 0] * 50
    trajectories = []
    for _ in range(2):
        env = EmuWarEnv()
        obs, _ = env.reset(seed=123)
        seen = [obs]
        for a in actions:
            obs, *_ = env.step(a)
            seen.append(obs)
        trajectories.append(np.stack(seen))
    np.testing.assert_array_equal(trajectories[0], trajectories[1])


def test_invalid_action_is_rejected() -> None:
    env = EmuWarEnv()
    env.reset(seed=0)
    with pytest.raises(AssertionError):
        env.step(7)


def test_rendering_is_not_supported() -> None:
    with pytest.raises(AssertionError):
        EmuWarEnv(render_mode="human")
