from typing import Callable, Optional

from swmonitor.adapters.clock.base import Clock, TimerHandle
from swmonitor.services.event_log import EventLog

IDLE_NAME = "Idle"
DEFAULT_PERIOD_S = 3.0


class IdlePoller:
    """Emits "Idle" log entries at a fixed period while the worker is inactive.

    `enabled` is the user switch; `running` is true only while a repeating
    timer is scheduled. `is_active` is read from the owning tracker so that
    running always implies enabled and inactive.
    """

    def __init__(self, event_log: EventLog, clock: Clock, is_active: Callable[[], bool],
                 period_s: float = DEFAULT_PERIOD_S, enabled: bool = True):
        self.event_log = event_log
        self.clock = clock
        self.is_active = is_active
        self.period_s = period_s
        self.enabled = enabled
        self._timer: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        return self._timer is not None

    def enable(self):
        self.enabled = True
        if not self.is_active():
            self.start()

    def disable(self):
        self.enabled = False
        self.stop()

    def start(self):
        if self._timer is not None or not self.enabled or self.is_active():
            return
        self._emit()
        self._timer = self.clock.call_every(self.period_s, self._emit)

    def stop(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit(self):
        self.event_log.append(IDLE_NAME, "idle")
