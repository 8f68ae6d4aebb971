"""Display contract for the dashboard: icons, indicator, counters, timestamps."""
from datetime import datetime

ICONS = {
    "idle":       "💤",
    "registered": "📋",
    "installed":  "🔧",
    "activating": "⚡",
    "fetching":   "🌐",
    "active":     "✅",
    "error":      "❌",
}
DEFAULT_ICON = "📝"


def icon_for(status: str) -> str:
    return ICONS.get(status, DEFAULT_ICON)


def indicator_on(status: str) -> bool:
    return status == "active"


def event_count_text(n: int) -> str:
    return f"{n} event{'' if n == 1 else 's'}"


def format_timestamp(ts: datetime) -> str:
    # DD-MM-YYYY HH:MM:SS:mmm
    return f"{ts:%d-%m-%Y %H:%M:%S}:{ts.microsecond // 1000:03d}"


def format_clock(ts: datetime | None) -> str | None:
    return ts.strftime("%H:%M:%S") if ts else None


def idle_toggle_label(enabled: bool) -> str:
    return "Disable idle log" if enabled else "Enable idle log"
