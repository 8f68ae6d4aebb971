from typing import Optional

from swmonitor.adapters.clock.base import Clock, TimerHandle
from swmonitor.adapters.worker.base import WorkerSource
from swmonitor.orchestrator.contracts import (
    Signal, PeriodicPoll, RegistrationFailed, UnsupportedEnvironment,
)
from swmonitor.orchestrator.errors import RegistrationError
from swmonitor.orchestrator.state_machine import StatusTracker

DEFAULT_POLL_PERIOD_S = 3.0


class LifecycleMonitor:
    """Page bootstrap: capability check, registration, and the liveness tick."""

    def __init__(self, tracker: StatusTracker, source: WorkerSource, clock: Clock,
                 poll_period_s: float = DEFAULT_POLL_PERIOD_S):
        self.tracker = tracker
        self.source = source
        self.clock = clock
        self.poll_period_s = poll_period_s
        self.status = tracker.status
        self._liveness: Optional[TimerHandle] = None
        self.started = False

    def start(self):
        if self.started:
            return
        self.started = True
        if not self.source.supported():
            self.tracker.handle(UnsupportedEnvironment())
            return

        self.source.attach(self.dispatch)
        try:
            self.source.register()
        except RegistrationError as e:
            self.dispatch(RegistrationFailed(reason=str(e)))
        if self.source.page_fed:
            self.status.log("monitor: liveness polled by the page")
        elif not self.tracker.state.halted:
            self._liveness = self.clock.call_every(self.poll_period_s, self.poll)
            self.status.log(f"monitor: liveness tick every {self.poll_period_s:g}s")

    def dispatch(self, signal: Signal) -> bool:
        if hasattr(signal, "controller"):
            self.source.note_controller(signal.controller)
        accepted = self.tracker.handle(signal)
        if self.tracker.state.halted:
            self._cancel_liveness()
        return accepted

    def poll(self):
        self.dispatch(PeriodicPoll(controller=self.source.controller()))

    def _cancel_liveness(self):
        if self._liveness is not None:
            self._liveness.cancel()
            self._liveness = None
            self.status.log("monitor: liveness tick stopped")

    @property
    def polling(self) -> bool:
        return self._liveness is not None

    def stop(self):
        self._cancel_liveness()
        self.tracker.shutdown()
        self.source.close()
