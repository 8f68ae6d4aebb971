import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Query
from dotenv import load_dotenv

from swmonitor.adapters.clock.base import Clock
from swmonitor.adapters.clock.loop_clock import LoopClock
from swmonitor.adapters.worker.base import WorkerSource
from swmonitor.orchestrator import errors
from swmonitor.orchestrator.monitor import LifecycleMonitor
from swmonitor.orchestrator.state_machine import StatusTracker
from swmonitor.services import display
from swmonitor.services.event_log import EventLog, DEFAULT_CAPACITY
from swmonitor.services.models import (
    SignalRequest, SignalResponse, StatusResponse, LogEntryOut, ToggleIdleResponse,
)
from swmonitor.services.status_store import StatusStore

load_dotenv(dotenv_path="swmonitor/.env", override=False)


def _int_env(status: StatusStore, name: str, default: int, minimum: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        value = minimum - 1
    if value < minimum:
        status.log(f"config: bad {name}={raw!r}, using {default}")
        return default
    return value


def build_app(clock: Clock, status: StatusStore, source: WorkerSource, *,
              capacity: int = DEFAULT_CAPACITY, idle_period_s: float = 3.0,
              poll_period_s: float = 3.0, idle_enabled: bool = True) -> FastAPI:
    event_log = EventLog(clock, capacity=capacity)
    tracker = StatusTracker(event_log, status, clock, idle_period_s=idle_period_s, idle_enabled=idle_enabled)
    monitor = LifecycleMonitor(tracker, source, clock, poll_period_s=poll_period_s)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        monitor.start()
        try:
            yield
        finally:
            monitor.stop()

    app = FastAPI(title="service worker lifecycle monitor", lifespan=lifespan)
    app.state.tracker = tracker
    app.state.monitor = monitor
    app.state.source = source

    # handlers are async so they run on the loop thread alongside the timers
    @app.get("/status", response_model=StatusResponse)
    async def get_status(limit: int = Query(100, ge=0)):
        st = tracker.state
        entries = [
            LogEntryOut(
                name=e.name,
                status=e.status,
                icon=display.icon_for(e.status),
                timestamp=display.format_timestamp(e.timestamp),
                iso=e.timestamp.isoformat(timespec="milliseconds"),
            )
            for e in event_log.entries(limit)
        ]
        n = event_log.count()
        return StatusResponse(
            status=st.current_status,
            status_text=st.status_text,
            icon=display.icon_for(st.current_status),
            is_active=st.is_active,
            indicator_on=display.indicator_on(st.current_status),
            halted=st.halted,
            page_fed=source.page_fed,
            idle_logging=tracker.poller.enabled,
            idle_running=tracker.poller.running,
            idle_toggle_label=display.idle_toggle_label(tracker.poller.enabled),
            count=n,
            count_text=display.event_count_text(n),
            last_update=display.format_clock(event_log.updated_at),
            last_error=status.last_error,
            entries=entries,
            logs=status.logs,
        )

    @app.post("/signal", response_model=SignalResponse)
    async def post_signal(req: SignalRequest):
        if not source.page_fed:
            status.log(f"api: rejected page signal {req.kind} (source {type(source).__name__})")
            return SignalResponse(ok=False, accepted=False, error_code=errors.ERR_SOURCE)
        accepted = monitor.dispatch(req.to_signal())
        if not accepted:
            return SignalResponse(ok=False, accepted=False, error_code=errors.ERR_HALTED)
        return SignalResponse(ok=True, accepted=True)

    @app.post("/clear_logs")
    async def clear_logs():
        tracker.clear_logs()
        return {"ok": True, "count": event_log.count(), "count_text": display.event_count_text(event_log.count())}

    @app.post("/toggle_idle", response_model=ToggleIdleResponse)
    async def toggle_idle():
        enabled = tracker.toggle_idle_logging()
        return ToggleIdleResponse(ok=True, idle_logging=enabled, label=display.idle_toggle_label(enabled))

    @app.get("/health")
    async def health():
        return {
            "api": True,
            "worker_source": type(source).__name__,
            "supported": source.supported(),
            "liveness_polling": monitor.polling,
            "page_fed": source.page_fed,
            "halted": tracker.state.halted,
            "all_ok": not tracker.state.halted and status.last_error is None,
        }

    return app


def build_app_from_env() -> FastAPI:
    status = StatusStore()
    clock = LoopClock()

    # Worker source: read from WORKER_SOURCE env var (default: mock)
    worker_source = os.getenv("WORKER_SOURCE", "mock").lower()
    if worker_source == "browser":
        from swmonitor.adapters.worker.browser_worker import BrowserWorker
        source = BrowserWorker(status)
        status.log("worker source: browser")
    else:
        from swmonitor.adapters.worker.mock_worker import MockWorker, MODES
        mode = os.getenv("MOCK_WORKER_MODE", "fresh").lower()
        if mode not in MODES:
            status.log(f"config: bad MOCK_WORKER_MODE={mode!r}, using 'fresh'")
            mode = "fresh"
        source = MockWorker(clock, status, mode=mode)
        status.log(f"worker source: mock ({mode})")

    return build_app(
        clock, status, source,
        capacity=_int_env(status, "EVENT_LOG_CAPACITY", DEFAULT_CAPACITY, minimum=0),
        idle_period_s=_int_env(status, "IDLE_PERIOD_MS", 3000, minimum=1) / 1000.0,
        poll_period_s=_int_env(status, "POLL_PERIOD_MS", 3000, minimum=1) / 1000.0,
        idle_enabled=os.getenv("IDLE_LOGGING", "1") != "0",
    )


app = build_app_from_env()
