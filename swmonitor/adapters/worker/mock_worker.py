from typing import Optional, List

from swmonitor.adapters.clock.base import Clock, TimerHandle
from swmonitor.adapters.worker.base import WorkerSource, Dispatch
from swmonitor.orchestrator.contracts import (
    Controller, RegistrationSucceeded, UpdateFound, WorkerMessage, ControllerChange,
)
from swmonitor.orchestrator.errors import RegistrationError

# Simulated lifecycle offsets after registration, in seconds
_UPDATE_FOUND_S = 0.5
_INSTALLED_S    = 0.8
_ACTIVATING_S   = 1.2
_CLAIM_S        = 1.6   # controllerchange once the new worker claims the page

MODES = ("fresh", "controlled", "fail", "unsupported")


class MockWorker(WorkerSource):
    """Simulated service worker.

    fresh:       no controller yet; plays install -> activate -> claim after registration
    controlled:  a controller is already active when the page registers
    fail:        registration raises RegistrationError
    unsupported: the environment has no service worker support
    """

    def __init__(self, clock: Clock, status_store, mode: str = "fresh"):
        if mode not in MODES:
            raise ValueError(f"unknown mock worker mode: {mode}")
        self.clock = clock
        self.status = status_store
        self.mode = mode
        self._dispatch: Optional[Dispatch] = None
        self._controller: Optional[Controller] = Controller("activated") if mode == "controlled" else None
        self._timers: List[TimerHandle] = []

    def supported(self) -> bool:
        return self.mode != "unsupported"

    def attach(self, dispatch: Dispatch):
        self._dispatch = dispatch

    def register(self):
        if self.mode == "fail":
            self.status.log("mock_worker: registration rejected")
            raise RegistrationError("mock worker: script evaluation failed")
        self.status.log("mock_worker: registered")
        self._emit(RegistrationSucceeded(controller=self._controller))
        if self._controller is None:
            self._schedule(_UPDATE_FOUND_S, lambda: self._emit(UpdateFound(installing=True)))
            self._schedule(_INSTALLED_S, lambda: self._post("installed", "Installed"))
            self._schedule(_ACTIVATING_S, lambda: self._post("activating", "Activating"))
            self._schedule(_CLAIM_S, self.claim)

    def controller(self) -> Optional[Controller]:
        return self._controller

    def claim(self):
        """New worker takes control of the page."""
        self._controller = Controller("activated")
        self.status.log("mock_worker: controller claimed")
        self._emit(ControllerChange(controller=self._controller))

    def fetch(self, url: str = "/"):
        """Simulate an intercepted request."""
        self._post("fetching", f"Fetch {url}")

    def drop_controller(self):
        """Worker stops controlling the page (e.g. unregistered from devtools)."""
        self._controller = None
        self.status.log("mock_worker: controller dropped")

    def close(self):
        for t in self._timers:
            t.cancel()
        self._timers.clear()

    def _post(self, status: str, name: str):
        self._emit(WorkerMessage(status=status, name=name, controller=self._controller))

    def _schedule(self, delay_s: float, fn):
        self._timers.append(self.clock.call_later(delay_s, fn))

    def _emit(self, signal):
        if self._dispatch is None:
            self.status.log(f"mock_worker: not attached, dropped {type(signal).__name__}")
            return
        self._dispatch(signal)
