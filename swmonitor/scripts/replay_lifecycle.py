"""
Offline replay of a simulated worker lifecycle on a manual clock.

Prints the activity log the dashboard would show, newest first.

Usage:
    python swmonitor/scripts/replay_lifecycle.py [fresh|controlled|fail|unsupported] [seconds]
"""

import sys

from swmonitor.adapters.clock.manual_clock import ManualClock
from swmonitor.adapters.worker.mock_worker import MockWorker, MODES
from swmonitor.orchestrator.monitor import LifecycleMonitor
from swmonitor.orchestrator.state_machine import StatusTracker
from swmonitor.services import display
from swmonitor.services.event_log import EventLog
from swmonitor.services.status_store import StatusStore


def main():
    mode = sys.argv[1] if len(sys.argv) > 1 else "fresh"
    seconds = float(sys.argv[2]) if len(sys.argv) > 2 else 10.0
    if mode not in MODES:
        print(f"unknown mode {mode!r}, expected one of {', '.join(MODES)}")
        sys.exit(2)

    clock = ManualClock()
    status = StatusStore()
    worker = MockWorker(clock, status, mode=mode)
    tracker = StatusTracker(EventLog(clock, capacity=0), status, clock)
    monitor = LifecycleMonitor(tracker, worker, clock)

    monitor.start()
    clock.advance(seconds / 2)
    if mode in ("fresh", "controlled"):
        worker.fetch("/index.html")
        worker.drop_controller()
    clock.advance(seconds / 2)
    monitor.stop()

    st = tracker.state
    print(f"\nmode={mode} status={st.current_status} ({st.status_text}) "
          f"indicator={'on' if display.indicator_on(st.current_status) else 'off'} "
          f"{display.event_count_text(tracker.log.count())}\n")
    for e in tracker.log.entries():
        print(f"  {display.icon_for(e.status)}  {display.format_timestamp(e.timestamp)}  {e.name:<24} {e.status}")
    print("\ndiagnostics:")
    for line in status.logs:
        print(f"  {line}")


if __name__ == "__main__":
    main()
