from __future__ import annotations

from typing import Any, Callable

import pytest


class _Timer:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Scheduler with a hand-driven clock, stands in for the asyncio loop."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[_Timer] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> _Timer:
        timer = _Timer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[_Timer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (timer for timer in self.pending if timer.when <= self.now), key=lambda t: t.when
        )
        for timer in due:
            self.timers.remove(timer)
            timer.callback(*timer.args)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()
