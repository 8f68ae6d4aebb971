"""Manual clock: time only moves when advance() is called. Used by tests and replays."""
import heapq
import itertools
from datetime import datetime, timedelta
from typing import Callable

from swmonitor.adapters.clock.base import Clock, TimerHandle

_EPOCH = datetime(2024, 1, 1, 12, 0, 0)


class _ManualTimer(TimerHandle):
    def __init__(self, fn: Callable[[], None], period_s: float | None):
        self.fn = fn
        self.period_s = period_s
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class ManualClock(Clock):
    def __init__(self, start: datetime = _EPOCH):
        self._now = start
        self._queue: list = []
        self._seq = itertools.count()

    def now(self) -> datetime:
        return self._now

    def call_later(self, delay_s: float, fn: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(fn, None)
        self._push(self._now + timedelta(seconds=delay_s), timer)
        return timer

    def call_every(self, period_s: float, fn: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(fn, period_s)
        self._push(self._now + timedelta(seconds=period_s), timer)
        return timer

    def pending(self) -> int:
        """Number of live timers still scheduled."""
        return sum(1 for _, _, t in self._queue if not t.cancelled)

    def advance(self, seconds: float):
        target = self._now + timedelta(seconds=seconds)
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            if timer.cancelled:
                continue
            self._now = due
            if timer.period_s is not None:
                self._push(due + timedelta(seconds=timer.period_s), timer)
            else:
                timer.cancel()
            timer.fn()
        self._now = target

    def _push(self, due: datetime, timer: _ManualTimer):
        heapq.heappush(self._queue, (due, next(self._seq), timer))
