"""Clocks for notification timestamps and analytics ``timestamp`` fields.

``WallClock`` reads the system clock.  ``SimClock`` only moves when told
to, which keeps tests and scripted sessions reproducible.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol

_EPOCH_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _to_ms(t: datetime) -> int:
    return int(t.timestamp() * 1000)


class IClock(Protocol):
    def now(self) -> datetime:
        """Timezone-aware UTC time."""
        ...

    def now_ms(self) -> int:
        """Milliseconds since the Unix epoch."""
        ...


class WallClock:
    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def now_ms(self) -> int:
        return _to_ms(self.now())


class SimClock:
    """Manually driven clock.  Never moves backwards."""

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or _EPOCH_START

    def now(self) -> datetime:
        return self._time

    def now_ms(self) -> int:
        return _to_ms(self._time)

    def set_time(self, t: datetime) -> None:
        if t < self._time:
            raise ValueError(f"SimClock cannot go backwards: {t} < {self._time}")
        self._time = t

    def advance_ms(self, ms: int) -> None:
        self.set_time(self._time + timedelta(milliseconds=ms))
