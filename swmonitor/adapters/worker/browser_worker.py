"""
Browser-fed worker source.

The dashboard page registers the real service worker itself and posts every
lifecycle event to POST /signal, including its own 3 s liveness poll.
This adapter only remembers the last controller the page reported.
"""

from typing import Optional

from swmonitor.adapters.worker.base import WorkerSource, Dispatch
from swmonitor.orchestrator.contracts import Controller


class BrowserWorker(WorkerSource):
    page_fed = True

    def __init__(self, status_store):
        self.status = status_store
        self._dispatch: Optional[Dispatch] = None
        self._controller: Optional[Controller] = None

    def attach(self, dispatch: Dispatch):
        self._dispatch = dispatch

    def register(self):
        # the page registers the worker and reports the outcome
        self.status.log("browser_worker: waiting for page to report registration")

    def controller(self) -> Optional[Controller]:
        return self._controller

    def note_controller(self, controller: Optional[Controller]):
        self._controller = controller
