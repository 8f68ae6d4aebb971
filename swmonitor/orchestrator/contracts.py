from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Literal, Union

StatusKind = Literal["idle", "registered", "installed", "activating", "fetching", "active", "error"]

STATUS_KINDS = ("idle", "registered", "installed", "activating", "fetching", "active", "error")

LOG_EVENT = "LOG_EVENT"    # message type posted by the worker script

@dataclass(frozen=True)
class LogEntry:
    name: str
    status: StatusKind
    timestamp: datetime        # millisecond precision

@dataclass(frozen=True)
class Controller:
    state: str = "activated"   # installing | installed | activating | activated | redundant

# ===== Signals =====

@dataclass(frozen=True)
class RegistrationSucceeded:
    # controller already serving the page at registration time, if any
    controller: Optional[Controller] = None

@dataclass(frozen=True)
class RegistrationFailed:
    reason: str = ""

@dataclass(frozen=True)
class ControllerPresentAtStartup:
    pass

@dataclass(frozen=True)
class UpdateFound:
    installing: bool = True

@dataclass(frozen=True)
class WorkerMessage:
    status: str
    name: str
    type: str = LOG_EVENT
    controller: Optional[Controller] = None

@dataclass(frozen=True)
class ControllerChange:
    controller: Optional[Controller] = None

@dataclass(frozen=True)
class PeriodicPoll:
    controller: Optional[Controller] = None

@dataclass(frozen=True)
class UnsupportedEnvironment:
    pass

Signal = Union[
    RegistrationSucceeded,
    RegistrationFailed,
    ControllerPresentAtStartup,
    UpdateFound,
    WorkerMessage,
    ControllerChange,
    PeriodicPoll,
    UnsupportedEnvironment,
]
