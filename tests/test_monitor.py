import pytest

from conftest import names
from swmonitor.adapters.clock.manual_clock import ManualClock
from swmonitor.adapters.worker.browser_worker import BrowserWorker
from swmonitor.adapters.worker.mock_worker import MockWorker
from swmonitor.orchestrator import errors
from swmonitor.orchestrator.contracts import Controller, ControllerChange, PeriodicPoll, UnsupportedEnvironment
from swmonitor.orchestrator.monitor import LifecycleMonitor
from swmonitor.orchestrator.state_machine import StatusTracker
from swmonitor.services.status_store import StatusStore


def _monitor(tracker, clock, status, mode="fresh"):
    worker = MockWorker(clock, status, mode=mode)
    return LifecycleMonitor(tracker, worker, clock, poll_period_s=3.0), worker


def test_fresh_worker_plays_full_lifecycle(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status)
    monitor.start()
    assert names(tracker.log) == ["Registered"]
    assert monitor.polling

    clock.advance(2)
    assert names(tracker.log) == ["Registered", "Installed/waiting", "Installed", "Activating", "Active"]
    assert tracker.current_status == "active"
    assert tracker.is_active

    # liveness ticks see the same controller: no new entries
    clock.advance(9)
    assert tracker.log.count() == 5


def test_controlled_worker_is_active_at_startup(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status, mode="controlled")
    monitor.start()
    assert names(tracker.log) == ["Registered", "Active"]
    clock.advance(10)
    assert names(tracker.log) == ["Registered", "Active"]


def test_dropped_controller_starts_idle_logging(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, worker = _monitor(tracker, clock, status, mode="controlled")
    monitor.start()
    worker.drop_controller()

    clock.advance(3)
    assert tracker.current_status == "idle"
    assert tracker.poller.running
    assert names(tracker.log)[-1] == "Idle"

    clock.advance(3)
    assert names(tracker.log)[-2:] == ["Idle", "Idle"]

    worker.claim()
    assert tracker.current_status == "active"
    assert not tracker.poller.running


def test_fetch_message(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, worker = _monitor(tracker, clock, status, mode="controlled")
    monitor.start()
    worker.fetch("/app.css")
    assert tracker.current_status == "fetching"
    assert tracker.log.newest.name == "Fetch /app.css"
    assert tracker.is_active


def test_failed_registration(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status, mode="fail")
    monitor.start()

    assert names(tracker.log) == ["Registration error"]
    assert tracker.current_status == "error"
    assert status.last_error == errors.ERR_REGISTRATION
    # not fatal: liveness polling keeps running
    assert monitor.polling


def test_unsupported_environment_schedules_nothing(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status, mode="unsupported")
    monitor.start()

    assert [(e.name, e.status) for e in tracker.log.entries()] == [("Browser not supported", "error")]
    assert not monitor.polling
    assert clock.pending() == 0
    clock.advance(60)
    assert tracker.log.count() == 1


def test_halt_after_start_cancels_liveness_tick(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status, mode="controlled")
    monitor.start()
    assert monitor.polling

    assert monitor.dispatch(UnsupportedEnvironment()) is True
    assert not monitor.polling
    assert clock.pending() == 0

    clock.advance(30)
    assert names(tracker.log) == ["Registered", "Active", "Browser not supported"]
    assert not any("dropped" in line for line in status.logs)


def test_start_twice_is_noop(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status, mode="controlled")
    monitor.start()
    monitor.start()
    assert names(tracker.log) == ["Registered", "Active"]
    assert clock.pending() == 1


def test_stop_cancels_everything(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor, _ = _monitor(tracker, clock, status)
    monitor.start()
    monitor.stop()

    assert not monitor.polling
    assert clock.pending() == 0
    clock.advance(30)
    assert names(tracker.log) == ["Registered"]


def test_browser_worker_tracks_reported_controller(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    worker = BrowserWorker(status)
    monitor = LifecycleMonitor(tracker, worker, clock, poll_period_s=3.0)
    monitor.start()
    assert tracker.log.count() == 0

    monitor.dispatch(ControllerChange(controller=Controller("activated")))
    assert worker.controller() == Controller("activated")
    assert tracker.is_active

    monitor.dispatch(PeriodicPoll(controller=None))
    assert worker.controller() is None
    assert tracker.current_status == "idle"


def test_unknown_mock_mode(clock: ManualClock, status: StatusStore):
    with pytest.raises(ValueError):
        MockWorker(clock, status, mode="sideways")


def test_browser_worker_leaves_liveness_to_the_page(tracker: StatusTracker, clock: ManualClock, status: StatusStore):
    monitor = LifecycleMonitor(tracker, BrowserWorker(status), clock, poll_period_s=3.0)
    monitor.start()

    assert not monitor.polling
    assert clock.pending() == 0
    assert "monitor: liveness polled by the page" in status.logs
