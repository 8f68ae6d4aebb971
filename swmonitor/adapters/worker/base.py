from typing import Callable, Optional

from swmonitor.orchestrator.contracts import Controller, Signal

Dispatch = Callable[[Signal], bool]


class WorkerSource:
    # page_fed sources are driven by the dashboard page over POST /signal,
    # including the liveness tick, so the server schedules none of its own
    page_fed = False

    def supported(self) -> bool:
        """Whether the host environment can run a background worker at all."""
        return True

    def attach(self, dispatch: Dispatch):
        """Receive the callback used to push lifecycle signals into the tracker."""
        raise NotImplementedError

    def register(self):
        """Register the worker script. Raises RegistrationError on failure."""
        raise NotImplementedError

    def controller(self) -> Optional[Controller]:
        """Current controller, or None when no worker controls the page."""
        raise NotImplementedError

    def note_controller(self, controller: Optional[Controller]):
        """Hook for sources that learn the controller from incoming signals."""
        return None

    def close(self):
        return None
