"""
Activity log: newest-first, bounded list of LogEntry.

capacity > 0 keeps only the most recent `capacity` entries (oldest dropped,
counted in `evicted`); capacity == 0 means unbounded.
"""

from collections import deque
from datetime import datetime
from typing import Optional, List

from swmonitor.adapters.clock.base import Clock
from swmonitor.orchestrator.contracts import LogEntry, StatusKind

DEFAULT_CAPACITY = 200


def _to_millis(ts: datetime) -> datetime:
    return ts.replace(microsecond=ts.microsecond // 1000 * 1000)


class EventLog:
    def __init__(self, clock: Clock, capacity: int = DEFAULT_CAPACITY):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self.clock = clock
        self.capacity = capacity
        self._entries: deque[LogEntry] = deque(maxlen=capacity or None)
        self.evicted = 0
        self.updated_at: Optional[datetime] = None

    def append(self, name: str, status: StatusKind) -> LogEntry:
        ts = _to_millis(self.clock.now())
        # a clock stepping backwards must not break newest-first ordering
        if self._entries and ts < self._entries[0].timestamp:
            ts = self._entries[0].timestamp
        entry = LogEntry(name=name, status=status, timestamp=ts)
        if self.capacity and len(self._entries) == self.capacity:
            self.evicted += 1
        self._entries.appendleft(entry)
        self.updated_at = self.clock.now()
        return entry

    def clear(self):
        self._entries.clear()
        self.evicted = 0
        self.updated_at = self.clock.now()

    def count(self) -> int:
        return len(self._entries)

    def entries(self, limit: Optional[int] = None) -> List[LogEntry]:
        items = list(self._entries)
        return items if limit is None else items[:limit]

    @property
    def newest(self) -> Optional[LogEntry]:
        return self._entries[0] if self._entries else None
