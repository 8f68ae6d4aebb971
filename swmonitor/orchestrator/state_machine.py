from dataclasses import dataclass
from typing import Optional

from swmonitor.adapters.clock.base import Clock
from swmonitor.orchestrator.contracts import (
    LOG_EVENT, StatusKind, Signal, Controller,
    RegistrationSucceeded, RegistrationFailed, ControllerPresentAtStartup, UpdateFound,
    WorkerMessage, ControllerChange, PeriodicPoll, UnsupportedEnvironment,
)
from swmonitor.orchestrator import errors
from swmonitor.orchestrator.idle_poller import IdlePoller, DEFAULT_PERIOD_S
from swmonitor.services.event_log import EventLog
from swmonitor.services.status_store import StatusStore

# message statuses that mean the worker is (re)installing and may not control the page yet
_PROGRESS_STATUSES = ("installed", "activating", "fetching")


@dataclass
class TrackerState:
    current_status: StatusKind = "idle"
    status_text: str = "Waiting"
    is_active: bool = False
    halted: bool = False


class StatusTracker:
    def __init__(self, event_log: EventLog, status_store: StatusStore, clock: Clock,
                 idle_period_s: float = DEFAULT_PERIOD_S, idle_enabled: bool = True):
        self.log = event_log
        self.status = status_store
        self.state = TrackerState()
        self.poller = IdlePoller(event_log, clock, is_active=lambda: self.state.is_active,
                                 period_s=idle_period_s, enabled=idle_enabled)
        self._handlers = {
            RegistrationSucceeded: self._on_registration_succeeded,
            RegistrationFailed: self._on_registration_failed,
            ControllerPresentAtStartup: self._on_controller_present_at_startup,
            UpdateFound: self._on_update_found,
            WorkerMessage: self._on_message,
            ControllerChange: self._on_controller_change,
            PeriodicPoll: self._on_periodic_poll,
            UnsupportedEnvironment: self._on_unsupported,
        }

    @property
    def current_status(self) -> StatusKind:
        return self.state.current_status

    @property
    def is_active(self) -> bool:
        return self.state.is_active

    def handle(self, signal: Signal) -> bool:
        """Apply one lifecycle signal. Returns False when the tracker no longer accepts signals."""
        if self.state.halted:
            self.status.log(f"tracker: halted, dropped {type(signal).__name__}")
            return False
        handler = self._handlers.get(type(signal))
        if handler is None:
            raise TypeError(f"unknown signal: {signal!r}")
        self.status.last_signal = type(signal).__name__
        handler(signal)
        return True

    # ===== user commands =====

    def clear_logs(self):
        self.log.clear()
        self.status.log("tracker: log cleared")

    def toggle_idle_logging(self) -> bool:
        if self.state.halted:
            # nothing to poll: only the switch moves
            self.poller.enabled = not self.poller.enabled
        elif self.poller.enabled:
            self.poller.disable()
        else:
            self.poller.enable()
        self.status.log(f"tracker: idle logging {'on' if self.poller.enabled else 'off'}")
        return self.poller.enabled

    def shutdown(self):
        self.poller.stop()

    # ===== transitions =====

    def _set_status(self, status: StatusKind, text: str):
        self.state.current_status = status
        self.state.status_text = text

    def _become_active(self) -> bool:
        if self.state.is_active:
            return False
        self.log.append("Active", "active")
        self._set_status("active", "Active")
        self.state.is_active = True
        self.poller.stop()
        return True

    def _on_registration_succeeded(self, sig: RegistrationSucceeded):
        self.status.log("tracker: worker registered")
        self.status.set_error(None)
        self.log.append("Registered", "registered")
        self._set_status("registered", "Registered")
        if sig.controller is not None:
            self._on_controller_present_at_startup(ControllerPresentAtStartup())

    def _on_registration_failed(self, sig: RegistrationFailed):
        self.status.log(f"tracker: registration failed: {sig.reason or 'unknown reason'}")
        self.status.set_error(errors.ERR_REGISTRATION)
        self.log.append("Registration error", "error")
        self._set_status("error", "Registration error")

    def _on_controller_present_at_startup(self, sig: ControllerPresentAtStartup):
        self._become_active()

    def _on_update_found(self, sig: UpdateFound):
        if sig.installing:
            self.log.append("Installed/waiting", "installed")

    def _on_message(self, sig: WorkerMessage):
        if sig.type != LOG_EVENT:
            self.status.log(f"tracker: ignored message type={sig.type!r}")
            return
        if sig.status in _PROGRESS_STATUSES:
            self.log.append(sig.name, sig.status)
            self._set_status(sig.status, sig.name)
            self.state.is_active = _is_activated(sig.controller)
            self.poller.stop()
        elif sig.status == "registered":
            self.log.append(sig.name, "registered")
            self._set_status("registered", sig.name)
        else:
            self.status.log(f"tracker: ignored message status={sig.status!r}")

    def _on_controller_change(self, sig: ControllerChange):
        if sig.controller is not None:
            self._become_active()

    def _on_periodic_poll(self, sig: PeriodicPoll):
        if sig.controller is None and self.state.is_active:
            self.status.log("tracker: controller gone, going idle")
            self.state.is_active = False
            self._set_status("idle", "Idle")
            self.poller.start()
        elif sig.controller is not None and not self.state.is_active:
            self._become_active()

    def _on_unsupported(self, sig: UnsupportedEnvironment):
        self.status.log("tracker: service workers not supported")
        self.status.set_error(errors.ERR_UNSUPPORTED)
        self.log.append("Browser not supported", "error")
        self._set_status("error", "Not supported")
        self.state.halted = True
        self.poller.stop()


def _is_activated(controller: Optional[Controller]) -> bool:
    return controller is not None and controller.state == "activated"
