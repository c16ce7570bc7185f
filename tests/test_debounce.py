from __future__ import annotations

import asyncio

import pytest

from griya_kebaya.viewer.debounce import Debouncer


def test_only_last_trigger_fires(scheduler) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 0.5, scheduler)

    debouncer.trigger("a")
    scheduler.advance(0.3)
    debouncer.trigger("b")
    scheduler.advance(0.3)
    assert calls == []
    assert len(scheduler.pending) == 1

    scheduler.advance(0.2)
    assert calls == ["b"]
    assert not debouncer.pending


def test_close_cancels_pending_timer(scheduler) -> None:
    calls: list[str] = []
    with Debouncer(calls.append, 0.5, scheduler) as debouncer:
        debouncer.trigger("a")
    scheduler.advance(1.0)
    assert calls == []
    with pytest.raises(RuntimeError):
        debouncer.trigger("b")


def test_negative_delay_rejected() -> None:
    with pytest.raises(ValueError):
        Debouncer(lambda: None, -1)


def test_uses_running_loop_by_default() -> None:
    calls: list[int] = []

    async def scenario() -> None:
        debouncer = Debouncer(calls.append, 0.01)
        debouncer.trigger(1)
        debouncer.trigger(2)
        await asyncio.sleep(0.05)

    asyncio.run(scenario())
    assert calls == [2]


def test_trigger_without_loop_or_scheduler_raises_and_keeps_pending_timer(scheduler) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 0.5)
    with pytest.raises(RuntimeError):
        debouncer.trigger("a")
    assert not debouncer.pending

    debouncer.scheduler = scheduler
    debouncer.trigger("b")
    debouncer.scheduler = None
    with pytest.raises(RuntimeError):
        debouncer.trigger("c")
    assert debouncer.pending
    scheduler.advance(0.5)
    assert calls == ["b"]
