import pytest

from swmonitor.adapters.clock.manual_clock import ManualClock
from swmonitor.orchestrator.state_machine import StatusTracker
from swmonitor.services.event_log import EventLog
from swmonitor.services.status_store import StatusStore


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def status() -> StatusStore:
    return StatusStore()


@pytest.fixture
def event_log(clock: ManualClock) -> EventLog:
    return EventLog(clock)


@pytest.fixture
def tracker(event_log: EventLog, status: StatusStore, clock: ManualClock) -> StatusTracker:
    return StatusTracker(event_log, status, clock)


def names(log: EventLog) -> list[str]:
    """Entry names oldest first, for readable assertions."""
    return [e.name for e in reversed(log.entries())]
