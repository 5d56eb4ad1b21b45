"""
Virtual-time timer queue that stands in for the host event loop.

All game mutation happens inside callbacks fired by ``advance``, one at a
time and in due order, so a tick never interleaves with a volley:

    sched = Scheduler()
    loop = sched.call_every(50, game.tick)
    sched.call_later(200, clear_flag)
    sched.advance(1000)      # fires everything due in the next second
    loop.cancel()
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(order=True)
class Timer:
    """One scheduled callback; ordered by due time, then insertion order"""
    due: float
    _seq: int = field(compare=True, repr=False)
    callback: Callable[[], Any] = field(compare=False, repr=False)
    period: Optional[float] = field(compare=False, default=None)
    name: str = field(compare=False, default="")
    cancelled: bool = field(compare=False, default=False)

    @property
    def periodic(self) -> bool:
        return self.period is not None

    def cancel(self) -> None:
        self.cancelled = True


class Scheduler:
    """Millisecond clock plus a heap of pending timers"""

    def __init__(self, start_ms: float = 0.0) -> None:
        self.now: float = start_ms
        self._queue: List[Timer] = []
        self._seq: int = 0
        self.fired: int = 0

    def _push(self, timer: Timer) -> Timer:
        self._seq += 1
        timer._seq = self._seq
        heapq.heappush(self._queue, timer)
        return timer

    # ── Scheduling ───────────────────────────────────────────────────

    def call_later(self, delay_ms: float, callback: Callable[[], Any], name: str = "") -> Timer:
        """Run ``callback`` once, ``delay_ms`` from now"""
        if delay_ms < 0:
            raise ValueError(f"delay must be >= 0, got {delay_ms}")
        return self._push(Timer(due=self.now + delay_ms, _seq=0, callback=callback, name=name))

    def call_every(self, period_ms: float, callback: Callable[[], Any], name: str = "") -> Timer:
        """Run ``callback`` every ``period_ms``; the first call is one period from now"""
        if period_ms <= 0:
            raise ValueError(f"period must be > 0, got {period_ms}")
        return self._push(Timer(
            due=self.now + period_ms, _seq=0, callback=callback, period=period_ms, name=name,
        ))

    def cancel(self, timer: Optional[Timer]) -> None:
        if timer is not None:
            timer.cancel()

    # ── Running ──────────────────────────────────────────────────────

    def advance(self, elapsed_ms: float) -> int:
        """
        Move the clock forward and fire every timer that falls due.

        Callbacks see ``now`` set to their own due time. Timers scheduled or
        cancelled by a callback are honoured within the same call. Returns the
        number of callbacks fired.
        """
        if elapsed_ms < 0:
            raise ValueError(f"cannot advance by a negative amount: {elapsed_ms}")

        target = self.now + elapsed_ms
        fired = 0
        while self._queue and self._queue[0].due <= target:
            timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self.now = timer.due
            if timer.periodic:
                timer.due += timer.period
                self._push(timer)
            timer.callback()
            fired += 1

        self.now = target
        self.fired += fired
        return fired

    def next_due(self) -> Optional[float]:
        """Due time of the earliest live timer, or None"""
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0].due if self._queue else None

    @property
    def pending(self) -> int:
        return sum(1 for t in self._queue if not t.cancelled)

    def clear(self) -> None:
        for t in self._queue:
            t.cancel()
        self._queue.clear()
        logger.debug("scheduler cleared at t=%.0fms", self.now)
