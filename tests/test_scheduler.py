from __future__ import annotations

import pytest

from emu_war.scheduler import Scheduler


def test_periodic_timer_fires_once_per_period() -> None:
    sched = Scheduler()
    calls: list[float] = []
    sched.call_every(50, lambda: calls.append(sched.now))

    sched.advance(49)
    assert calls == []
    sched.advance(151)
    assert calls == [50, 100, 150, 200]
    assert sched.now == 200


def test_one_shot_fires_once() -> None:
    sched = Scheduler()
    calls: list[str] = []
    sched.call_later(200, lambda: calls.append("x"))

    sched.advance(1000)
    sched.advance(1000)
    assert calls == ["x"]


def test_due_order_then_insertion_order() -> None:
    sched = Scheduler()
    order: list[str] = []
    sched.call_later(100, lambda: order.append("b"))
    sched.call_later(50, lambda: order.append("a"))
    sched.call_later(100, lambda: order.append("c"))

    sched.advance(100)
    assert order == ["a", "b", "c"]


def test_cancelled_timers_never_fire() -> None:
    sched = Scheduler()
    calls: list[str] = []
    t = sched.call_every(10, lambda: calls.append("tick"))
    sched.advance(25)
    t.cancel()
    sched.advance(100)

    assert calls == ["tick", "tick"]
    assert sched.pending == 0
    assert sched.next_due() is None


def test_callback_can_cancel_its_own_periodic_timer() -> None:
    sched = Scheduler()
    calls: list[float] = []
    timer = None

    def cb() -> None:
        calls.append(sched.now)
        if len(calls) == 2:
            sched.cancel(timer)

    timer = sched.call_every(10, cb)
    sched.advance(100)
    assert calls == [10, 20]


def test_callback_scheduled_timers_run_in_same_advance() -> None:
    sched = Scheduler()
    calls: list[float] = []
    sched.call_later(10, lambda: sched.call_later(5, lambda: calls.append(sched.now)))
    sched.advance(20)
    assert calls == [15]


def test_bad_arguments_raise() -> None:
    sched = Scheduler()
    with pytest.raises(ValueError):
        sched.call_every(0, lambda: None)
    with pytest.raises(ValueError):
        sched.call_later(-1, lambda: None)
    with pytest.raises(ValueError):
        sched.advance(-5)


def test_clear_drops_everything() -> None:
    sched = Scheduler()
    calls: list[str] = []
    sched.call_every(10, lambda: calls.append("p"))
    sched.call_later(10, lambda: calls.append("o"))
    sched.clear()
    sched.advance(100)
    assert calls == []
    assert sched.fired == 0
