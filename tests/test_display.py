from datetime import datetime

import pytest

from swmonitor.orchestrator.contracts import STATUS_KINDS
from swmonitor.services import display


@pytest.mark.parametrize("status,icon", [
    ("idle", "💤"),
    ("registered", "📋"),
    ("installed", "🔧"),
    ("activating", "⚡"),
    ("fetching", "🌐"),
    ("active", "✅"),
    ("error", "❌"),
    ("something-else", "📝"),
])
def test_icon_for(status, icon):
    assert display.icon_for(status) == icon


def test_every_status_kind_has_its_own_icon():
    icons = [display.icon_for(s) for s in STATUS_KINDS]
    assert display.DEFAULT_ICON not in icons
    assert len(set(icons)) == len(STATUS_KINDS)


def test_indicator_only_on_for_active():
    assert [s for s in STATUS_KINDS if display.indicator_on(s)] == ["active"]


@pytest.mark.parametrize("n,text", [(0, "0 events"), (1, "1 event"), (2, "2 events"), (200, "200 events")])
def test_event_count_text(n, text):
    assert display.event_count_text(n) == text


def test_format_timestamp():
    ts = datetime(2024, 3, 7, 9, 5, 4, 42000)
    assert display.format_timestamp(ts) == "07-03-2024 09:05:04:042"


def test_format_clock():
    assert display.format_clock(datetime(2024, 3, 7, 21, 0, 9)) == "21:00:09"
    assert display.format_clock(None) is None


def test_idle_toggle_label():
    assert display.idle_toggle_label(True) == "Disable idle log"
    assert display.idle_toggle_label(False) == "Enable idle log"
