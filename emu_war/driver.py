"""
Wall-clock driver: pumps a game's scheduler from an asyncio loop
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from .game import EmuWarGame

logger = logging.getLogger(__name__)


async def run_realtime(
    game: EmuWarGame,
    duration_s: Optional[float] = None,
    speed: float = 1.0,
    frame_ms: Optional[float] = None,
) -> float:
    """
    Advance ``game`` in step with real time until the match stops running.

    ``speed`` scales game time against wall time (2.0 plays twice as fast).
    Stops early after ``duration_s`` wall seconds when given. Returns the
    game milliseconds that elapsed.
    """
    if speed <= 0:
        raise ValueError(f"speed must be > 0, got {speed}")
    frame_ms = frame_ms or game.tick_ms

    started = time.monotonic()
    last = started
    elapsed_game_ms = 0.0

    while game.running:
        await asyncio.sleep(frame_ms / 1000.0 / speed)
        now = time.monotonic()
        step = (now - last) * 1000.0 * speed
        last = now

        game.advance(step)
        elapsed_game_ms += step

        if duration_s is not None and now - started >= duration_s:
            break

    logger.debug("realtime driver stopped after %.0f game ms (phase=%s)",
                 elapsed_game_ms, game.phase.value)
    return elapsed_game_ms
