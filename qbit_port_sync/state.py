"""
In-memory synchronization state.

Written by the reconciliation loop and read by the HTTP handlers. All access
goes through the lock; readers get an immutable StateSnapshot.
"""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional


def isoformat(timestamp: float) -> str:
    """Format a Unix timestamp as ISO8601 UTC with millisecond precision."""
    dt = datetime.fromtimestamp(timestamp, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class StateSnapshot:
    current_port: Optional[int]
    last_check: float
    update_count: int
    started_at: float

    def next_update_in(self, interval: float, now: Optional[float] = None) -> int:
        """Whole seconds until the next scheduled cycle, never negative."""
        if now is None:
            now = time.time()
        remaining = max(0.0, interval - (now - self.last_check))
        return int(round(remaining))


class SyncState:
    def __init__(self, now: Optional[float] = None):
        if now is None:
            now = time.time()
        self._lock = threading.Lock()
        self._current_port: Optional[int] = None
        self._last_check = now
        self._update_count = 0
        self._started_at = now

    def begin_cycle(self, now: Optional[float] = None) -> int:
        """Record a cycle attempt and return its sequence number."""
        with self._lock:
            self._last_check = time.time() if now is None else now
            self._update_count += 1
            return self._update_count

    def record_port(self, port: int) -> None:
        with self._lock:
            self._current_port = port

    def snapshot(self) -> StateSnapshot:
        with self._lock:
            return StateSnapshot(
                current_port=self._current_port,
                last_check=self._last_check,
                update_count=self._update_count,
                started_at=self._started_at,
            )
