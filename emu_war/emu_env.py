"""
EmuWarEnv - Gymnasium wrapper around one EmuWarGame match
---------------------------------------------------------
- Gymnasium API, one env step == one 50 ms game tick
- Discrete action space: 0 stay, 1 up, 2 down, 3 left, 4 right
- Vector observation: player state + top-K nearest bullets + top-M nearest crops
- Episode ends on victory / game over; truncated after max_steps
- No rendering; a view layer can read env.game.snapshot()

Install:
    pip install gymnasium numpy
"""

from __future__ import annotations

import random
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .entities import Direction
from .game import EmuWarGame
from .state import GameEvent, Phase
from .utils import clamp, make_rng

MOVES = (None, Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT)

DEFAULT_REWARDS = {
    "R_CROP": 1.0,     # per crop destroyed
    "R_HIT": 1.0,      # penalty per bullet taken
    "R_WIN": 5.0,
    "R_LOSS": 5.0,
    "R_TIME": 0.001,   # per step
}


class EmuWarEnv(gym.Env):
    """Top-down crop raid as a Gymnasium environment"""

    metadata = {"render_modes": [], "render_fps": 20}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        max_steps: int = 2400,  # 120s at 20 Hz
        k_bullets: int = 6,
        m_crops: int = 3,
        reward_config: Optional[Dict[str, float]] = None,
        **game_kwargs,
    ):
        super().__init__()

        assert render_mode is None, "EmuWarEnv does not render; read env.game.snapshot() instead."
        self.render_mode = render_mode
        self.max_steps = max_steps

        # Observation config
        self.k_bullets = k_bullets
        self.m_crops = m_crops

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_config:
            self.rewards.update({k: v for k, v in reward_config.items() if k.startswith("R_")})

        self.game_kwargs = game_kwargs
        self.game: EmuWarGame = None  # type: ignore
        self._rng: random.Random = make_rng()

        self.action_space = spaces.Discrete(len(MOVES))

        # Player: pos(2) lives(1) crops_remaining(1)
        # Each bullet: rel pos(2) vel(2)
        # Each crop: rel pos(2)
        obs_dim = 2 + 1 + 1 + (self.k_bullets * 4) + (self.m_crops * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._step_count = 0
        self._done = False
        self._events: Dict[str, float] = {}

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        if seed is not None:
            self._rng = make_rng(seed)

        self.game = EmuWarGame(rng=self._rng, **self.game_kwargs)
        self.game.subscribe(self._on_event)
        self.game.start()

        self._step_count = 0
        self._done = False
        self._events = {}
        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(action), f"invalid action {action!r}"
        if self.game is None or self._done:
            raise RuntimeError("step() called on a finished episode; call reset() first")

        self._events = {"crop": 0.0, "hit": 0.0}

        direction = MOVES[int(action)]
        if direction is not None:
            self.game.handle_direction(direction)

        # Exactly one tick, plus a volley whenever its cadence comes round
        self.game.advance(self.game.tick_ms)

        terminated = self.game.phase.is_terminal
        self._step_count += 1
        truncated = self._step_count >= self.max_steps
        self._done = terminated or truncated

        reward = self._compute_reward()
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self):
        return None

    def close(self):
        if self.game is not None:
            self.game.unsubscribe(self._on_event)
            self.game.reset()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _on_event(self, event: GameEvent) -> None:
        if event.type == "crop_destroyed":
            self._events["crop"] = self._events.get("crop", 0.0) + 1.0
        elif event.type == "player_hit":
            self._events["hit"] = self._events.get("hit", 0.0) + 1.0

    def _get_obs(self) -> np.ndarray:
        state = self.game.state
        w, h = state.width, state.height
        p = state.player

        obs_parts = [
            (p.x / w) * 2 - 1,
            (p.y / h) * 2 - 1,
            (state.lives / max(1, self.game.start_lives)) * 2 - 1,
            (state.crops_remaining / max(1, len(state.crops))) * 2 - 1,
        ]

        # Bullets: top-K nearest
        bullets_sorted = sorted(
            state.bullets,
            key=lambda b: (b.x - p.x) ** 2 + (b.y - p.y) ** 2
        )
        speed = max(1e-6, self.game.bullet_speed)
        for i in range(self.k_bullets):
            if i < len(bullets_sorted):
                b = bullets_sorted[i]
                obs_parts += [
                    clamp((b.x - p.x) / w, -1, 1),
                    clamp((b.y - p.y) / h, -1, 1),
                    clamp(b.vx / speed, -1, 1),
                    clamp(b.vy / speed, -1, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        # Crops: top-M nearest still standing
        crops_sorted = sorted(
            (c for c in state.crops if not c.destroyed),
            key=lambda c: (c.x - p.x) ** 2 + (c.y - p.y) ** 2
        )
        for i in range(self.m_crops):
            if i < len(crops_sorted):
                c = crops_sorted[i]
                obs_parts += [clamp((c.x - p.x) / w, -1, 1), clamp((c.y - p.y) / h, -1, 1)]
            else:
                obs_parts += [0.0, 0.0]

        obs = np.array([clamp(v, -1.0, 1.0) for v in obs_parts], dtype=np.float32)
        return obs

    def _compute_reward(self) -> float:
        r = self.rewards
        reward = 0.0

        reward += r["R_CROP"] * self._events.get("crop", 0.0)
        reward -= r["R_HIT"] * self._events.get("hit", 0.0)
        reward -= r["R_TIME"]

        if self.game.phase is Phase.VICTORY:
            reward += r["R_WIN"]
        elif self.game.phase is Phase.GAME_OVER:
            reward -= r["R_LOSS"]

        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "phase": self.game.phase.value,
            "score": self.game.score,
            "lives": self.game.lives,
            "crops_destroyed": self.game.crops_destroyed,
            "num_bullets": len(self.game.state.bullets),
            "step": self._step_count,
        }
