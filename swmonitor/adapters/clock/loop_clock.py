"""
Wall clock backed by the running asyncio event loop.

All callbacks fire on the loop thread, the same thread that runs the
FastAPI handlers, so tracker mutations never interleave.
"""

import asyncio
from datetime import datetime
from typing import Callable

from swmonitor.adapters.clock.base import Clock, TimerHandle


class _LoopTimer(TimerHandle):
    def __init__(self, loop: asyncio.AbstractEventLoop, delay_s: float, fn: Callable[[], None], repeat: bool):
        self._loop = loop
        self._delay_s = delay_s
        self._fn = fn
        self._repeat = repeat
        self._cancelled = False
        self._handle = loop.call_later(delay_s, self._fire)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def _fire(self):
        if self._cancelled:
            return
        if self._repeat:
            # reschedule before running so fn may cancel us
            self._handle = self._loop.call_later(self._delay_s, self._fire)
        else:
            self._cancelled = True
        self._fn()

    def cancel(self) -> None:
        self._cancelled = True
        self._handle.cancel()


class LoopClock(Clock):
    def __init__(self, loop: asyncio.AbstractEventLoop | None = None):
        self._loop = loop

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def now(self) -> datetime:
        return datetime.now()

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle:
        return _LoopTimer(self._get_loop(), delay_s, fn, repeat=False)

    def call_every(self, period_s: float, fn: Callable[[], None]) -> TimerHandle:
        return _LoopTimer(self._get_loop(), period_s, fn, repeat=True)
