from __future__ import annotations

from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Callable, Optional

_TICK = timedelta(microseconds=1)


# PUBLIC_INTERFACE
class MonotonicClock:
    """
    Issue UTC timestamps that strictly increase across calls.

    Two mutations landing within the same clock tick would otherwise get the
    same `updated_at`; every value handed out here is at least one
    microsecond after the previous one.
    """

    def __init__(self, source: Optional[Callable[[], datetime]] = None) -> None:
        self._source = source or (lambda: datetime.now(timezone.utc))
        self._lock = Lock()
        self._last: Optional[datetime] = None

    def now(self) -> datetime:
        with self._lock:
            current = self._source()
            if self._last is not None and current <= self._last:
                current = self._last + _TICK
            self._last = current
            return current


_clock = MonotonicClock()


# PUBLIC_INTERFACE
def utcnow() -> datetime:
    """Return the next timestamp from the process-wide clock."""
    return _clock.now()


# PUBLIC_INTERFACE
def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO8601 timestamp as stored by the SQLite backend. Naive values
    are assumed to be UTC.
    """
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
