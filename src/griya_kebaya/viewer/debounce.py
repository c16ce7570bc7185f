from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional, Protocol

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that schedules a delayed callback, e.g. an asyncio loop."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle: ...


class Debouncer:
    """Run *callback* once a burst of triggers has been quiet for *delay* seconds.

    At most one timer is pending at a time; a new trigger cancels it. The
    running asyncio loop is used when no scheduler is given.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay: float = 0.5,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        self.callback = callback
        self.delay = delay
        self.scheduler = scheduler
        self._handle: Optional[TimerHandle] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def trigger(self, *args: Any) -> None:
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        scheduler = self.scheduler
        if scheduler is None:
            try:
                scheduler = asyncio.get_running_loop()
            except RuntimeError as exc:
                raise RuntimeError(
                    "Debouncer needs an explicit scheduler or a running event loop"
                ) from exc
        self.cancel()
        self._handle = scheduler.call_later(self.delay, self._fire, *args)

    def cancel(self) -> None:
        if self._handle is not None:
            logger.debug("Cancelling pending debounce timer")
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def __enter__(self) -> "Debouncer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _fire(self, *args: Any) -> None:
        self._handle = None
        if self._closed:
            return
        self.callback(*args)
