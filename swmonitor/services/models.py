from pydantic import BaseModel
from typing import Literal, Optional

from swmonitor.orchestrator.contracts import (
    LOG_EVENT, Controller, Signal,
    RegistrationSucceeded, RegistrationFailed, ControllerPresentAtStartup, UpdateFound,
    WorkerMessage, ControllerChange, PeriodicPoll, UnsupportedEnvironment,
)

SignalKind = Literal[
    "registration_succeeded",
    "registration_failed",
    "controller_present_at_startup",
    "update_found",
    "message",
    "controller_change",
    "periodic_poll",
    "unsupported_environment",
]

class ControllerIn(BaseModel):
    state: str = "activated"

class SignalRequest(BaseModel):
    kind: SignalKind
    # controller snapshot at the time of the event; null = no controller
    controller: Optional[ControllerIn] = None
    # update_found
    installing: bool = True
    # message (worker postMessage payload)
    type: str = LOG_EVENT
    status: Optional[str] = None
    name: Optional[str] = None
    # registration_failed
    reason: Optional[str] = None

    def to_signal(self) -> Signal:
        ctrl = Controller(state=self.controller.state) if self.controller else None
        if self.kind == "registration_succeeded":
            return RegistrationSucceeded(controller=ctrl)
        if self.kind == "registration_failed":
            return RegistrationFailed(reason=self.reason or "")
        if self.kind == "controller_present_at_startup":
            return ControllerPresentAtStartup()
        if self.kind == "update_found":
            return UpdateFound(installing=self.installing)
        if self.kind == "message":
            return WorkerMessage(status=self.status or "", name=self.name or "", type=self.type, controller=ctrl)
        if self.kind == "controller_change":
            return ControllerChange(controller=ctrl)
        if self.kind == "periodic_poll":
            return PeriodicPoll(controller=ctrl)
        return UnsupportedEnvironment()

class SignalResponse(BaseModel):
    ok: bool
    accepted: bool
    error_code: Optional[str] = None

class LogEntryOut(BaseModel):
    name: str
    status: str
    icon: str
    timestamp: str      # DD-MM-YYYY HH:MM:SS:mmm
    iso: str

class StatusResponse(BaseModel):
    status: str
    status_text: str
    icon: str
    is_active: bool
    indicator_on: bool
    halted: bool
    page_fed: bool             # page should register the worker and forward its events
    idle_logging: bool
    idle_running: bool
    idle_toggle_label: str
    count: int
    count_text: str            # "N event(s)"
    last_update: Optional[str] = None
    last_error: Optional[str] = None
    entries: list[LogEntryOut]
    logs: list[str]

class ToggleIdleResponse(BaseModel):
    ok: bool
    idle_logging: bool
    label: str
