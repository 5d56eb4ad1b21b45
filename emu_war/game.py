"""
EmuWarGame - the game core a view layer drives
----------------------------------------------
- start() / handle_direction() / handle_key() / reset() are the only inputs
- tick() runs on a 50 ms cadence and volleys on a 2 s cadence, both as
  periodic timers on the game's Scheduler; advance() pumps that clock
- Per tick: bullet motion -> collisions -> decoy motion -> win/lose check
- Terminal phases cancel both drivers, so a finished match never changes
- State is read through properties, snapshot() or subscribe() callbacks

Rendering is left entirely to the caller.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import Any, Callable, Dict, List, Optional, Tuple

from .collisions import CollisionReport, resolve_collisions
from .combat import fire_volley
from .entities import Bullet, Direction
from .fsm import MatchFSM
from .motion import move_decoys, move_player, update_bullets
from .scheduler import Scheduler, Timer
from .spawner import setup_match
from .state import GameEvent, MatchState, Phase
from .utils import make_rng

logger = logging.getLogger(__name__)

KEY_BINDINGS = {
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
}

Listener = Callable[[GameEvent], None]


class EmuWarGame:
    """One arena, one match at a time"""

    def __init__(
        self,
        width: int = 800,
        height: int = 350,
        crop_count: int = 20,
        lives: int = 3,
        player_start: Tuple[float, float] = (100.0, 150.0),
        player_speed: float = 5.0,
        player_margin: float = 40.0,
        crop_threshold: float = 30.0,
        bullet_threshold: float = 20.0,
        crop_score: int = 10,
        bullet_speed: float = 3.0,
        muzzle_offset: float = 15.0,
        decoy_move_chance: float = 0.1,
        decoy_step: float = 2.0,
        decoy_margin: float = 30.0,
        tick_ms: float = 50.0,
        volley_ms: float = 2000.0,
        moving_pulse_ms: float = 200.0,
        hit_pulse_ms: float = 500.0,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
    ):
        # Match config
        self.crop_count = crop_count
        self.start_lives = lives
        self.player_start = player_start
        self.player_speed = player_speed
        self.player_margin = player_margin

        # Gameplay config
        self.crop_threshold = crop_threshold
        self.bullet_threshold = bullet_threshold
        self.crop_score = crop_score
        self.bullet_speed = bullet_speed
        self.muzzle_offset = muzzle_offset
        self.decoy_move_chance = decoy_move_chance
        self.decoy_step = decoy_step
        self.decoy_margin = decoy_margin

        # Cadences
        self.tick_ms = tick_ms
        self.volley_ms = volley_ms
        self.moving_pulse_ms = moving_pulse_ms
        self.hit_pulse_ms = hit_pulse_ms

        self.rng = rng if rng is not None else make_rng(seed)
        self.scheduler = scheduler if scheduler is not None else Scheduler()

        self.state = MatchState(width=width, height=height, lives=lives)
        self._fsm = MatchFSM(self.state)
        self._bullet_ids = itertools.count(1)
        self._listeners: List[Listener] = []

        # Driver handles; None while stopped
        self._tick_timer: Optional[Timer] = None
        self._volley_timer: Optional[Timer] = None

        self.setup()

    # ----------------------------
    # Public entry points
    # ----------------------------

    def setup(self) -> None:
        """Rebuild every entity for a fresh match without touching the phase"""
        setup_match(
            self.state,
            self.rng,
            crop_count=self.crop_count,
            lives=self.start_lives,
            player_start=self.player_start,
            player_speed=self.player_speed,
        )

    def start(self) -> bool:
        """Begin a new match; a match already in progress is left alone"""
        if self.phase is Phase.PLAYING:
            logger.debug("start ignored, match already running")
            return False

        self._transition("begin")
        self.setup()
        self._start_drivers()
        return True

    def reset(self) -> None:
        """Stop everything and return to the instructions screen with fresh entities"""
        self._stop_drivers()
        if self.phase is not Phase.INSTRUCTIONS:
            self._transition("back_to_instructions")
        self.setup()

    def handle_direction(self, direction) -> bool:
        """
        Move the player one step. Ignored unless playing; unknown directions
        are ignored too. Returns whether the player actually moved.
        """
        if self.phase is not Phase.PLAYING:
            return False
        parsed = Direction.parse(direction)
        if parsed is None:
            return False

        if not move_player(self.state, parsed, self.player_margin):
            return False

        self._pulse(self.moving_pulse_ms)
        self._emit("player_moved", {
            "direction": parsed.value,
            "x": self.state.player.x,
            "y": self.state.player.y,
        })
        return True

    def handle_key(self, key: str) -> bool:
        """Arrow-key front end for handle_direction"""
        direction = KEY_BINDINGS.get(key)
        if direction is None:
            return False
        return self.handle_direction(direction)

    def advance(self, elapsed_ms: float) -> int:
        """Let ``elapsed_ms`` of game time pass, firing every due timer"""
        return self.scheduler.advance(elapsed_ms)

    # ----------------------------
    # Drivers
    # ----------------------------

    def tick(self) -> Optional[CollisionReport]:
        """One simulation step; a no-op outside the playing phase"""
        if self.phase is not Phase.PLAYING:
            return None

        state = self.state
        state.tick += 1

        update_bullets(state)

        report = resolve_collisions(
            state,
            crop_threshold=self.crop_threshold,
            bullet_threshold=self.bullet_threshold,
            crop_score=self.crop_score,
        )
        for crop in report.crops:
            self._emit("crop_destroyed", {"crop_id": crop.id, "score": state.score})
        for bullet in report.hits:
            self._pulse(self.hit_pulse_ms)
            self._emit("player_hit", {"bullet_id": bullet.id, "lives": max(0, state.lives)})

        move_decoys(
            state,
            self.rng,
            chance=self.decoy_move_chance,
            step=self.decoy_step,
            margin=self.decoy_margin,
        )

        self._check_outcome()
        return report

    def fire_volley(self) -> List[Bullet]:
        """Every soldier fires once; nothing happens outside the playing phase"""
        if self.phase is not Phase.PLAYING:
            return []

        fired = fire_volley(
            self.state,
            self.rng,
            lambda: next(self._bullet_ids),
            speed=self.bullet_speed,
            muzzle_offset=self.muzzle_offset,
        )
        logger.debug("volley at tick %d: %d bullets", self.state.tick, len(fired))
        self._emit("volley_fired", {"bullet_ids": [b.id for b in fired]})
        return fired

    @property
    def running(self) -> bool:
        return self._tick_timer is not None

    def _start_drivers(self) -> None:
        self._stop_drivers()
        self._tick_timer = self.scheduler.call_every(self.tick_ms, self.tick, name="tick")
        self._volley_timer = self.scheduler.call_every(self.volley_ms, self.fire_volley, name="volley")

    def _stop_drivers(self) -> None:
        self.scheduler.cancel(self._tick_timer)
        self.scheduler.cancel(self._volley_timer)
        self._tick_timer = None
        self._volley_timer = None

    def _check_outcome(self) -> None:
        state = self.state
        # Lives are clamped here, not at the decrement
        if state.lives <= 0:
            state.lives = 0
            self._finish("lose")
        elif state.crops_destroyed >= len(state.crops):
            self._finish("win")

    def _finish(self, event: str) -> None:
        self._stop_drivers()
        self._transition(event)

    # ----------------------------
    # Cosmetic pulse
    # ----------------------------

    def _pulse(self, duration_ms: float) -> None:
        self.state.player.moving = True
        self.scheduler.call_later(duration_ms, self._clear_moving, name="pulse")

    def _clear_moving(self) -> None:
        self.state.player.moving = False

    # ----------------------------
    # Observers / read-only state
    # ----------------------------

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, type_: str, payload: Dict[str, Any]) -> None:
        event = GameEvent(type=type_, tick=self.state.tick, payload=payload)
        for listener in list(self._listeners):
            listener(event)

    def _transition(self, event: str) -> None:
        before = self.phase
        self._fsm.send(event)
        self._fsm.sync_phase_to_model()
        logger.info("phase %s -> %s", before.value, self.phase.value)
        self._emit("phase_changed", {"from": before.value, "to": self.phase.value})

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def score(self) -> int:
        return self.state.score

    @property
    def lives(self) -> int:
        return max(0, self.state.lives)

    @property
    def crops_destroyed(self) -> int:
        return self.state.crops_destroyed

    @property
    def player(self):
        return self.state.player

    @property
    def crops(self):
        return tuple(self.state.crops)

    @property
    def soldiers(self):
        return tuple(self.state.soldiers)

    @property
    def bullets(self):
        return tuple(self.state.bullets)

    @property
    def decoys(self):
        return tuple(self.state.decoys)

    def snapshot(self) -> Dict[str, Any]:
        """Plain-data view of everything a renderer needs"""
        s = self.state
        p = s.player
        return {
            "phase": s.phase.value,
            "score": s.score,
            "lives": self.lives,
            "crops_destroyed": s.crops_destroyed,
            "tick": s.tick,
            "arena": {"width": s.width, "height": s.height},
            "player": {"x": p.x, "y": p.y, "facing": p.facing.value, "moving": p.moving},
            "crops": [{"id": c.id, "x": c.x, "y": c.y, "destroyed": c.destroyed} for c in s.crops],
            "soldiers": [{"id": o.id, "x": o.x, "y": o.y} for o in s.soldiers],
            "bullets": [{"id": b.id, "x": b.x, "y": b.y, "vx": b.vx, "vy": b.vy} for b in s.bullets],
            "decoys": [{"id": d.id, "x": d.x, "y": d.y} for d in s.decoys],
        }
