"""Shared fixtures for the storefront test suite."""

from __future__ import annotations

from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable

import pytest
import structlog

from storefront.app import Storefront
from storefront.bus.memory_bus import EventBus
from storefront.bus.schemas import is_signal
from storefront.core.clock import SimClock
from storefront.core.enums import EventName


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------

class FakeTimer:
    def __init__(self, when: float, callback: Callable[..., Any], args: tuple) -> None:
        self.when = when
        self.callback = callback
        self.args = args
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Manual ``call_later`` scheduler; time moves only via ``advance``."""

    def __init__(self) -> None:
        self.now = 0.0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> FakeTimer:
        timer = FakeTimer(self.now + delay, callback, args)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> list[FakeTimer]:
        return [t for t in self.timers if not t.cancelled and not t.fired]

    def advance(self, seconds: float) -> None:
        self.now += seconds
        due = sorted(
            (t for t in self.pending if t.when <= self.now), key=lambda t: t.when
        )
        for timer in due:
            timer.fired = True
            timer.callback(*timer.args)

    def fire_all(self) -> None:
        """Fire every timer, including cancelled ones (stale timer check)."""
        for timer in list(self.timers):
            if not timer.fired:
                timer.fired = True
                timer.callback(*timer.args)


# ---------------------------------------------------------------------------
# Event recording
# ---------------------------------------------------------------------------

class EventRecorder:
    """Subscribes to every registered event and records ``(name, payload)``."""

    def __init__(self, bus: EventBus) -> None:
        self.events: list[tuple[str, Any]] = []
        for name in EventName:
            if is_signal(name):
                bus.subscribe_signal(name, partial(self._record, name, None))
            else:
                bus.subscribe(name, partial(self._record, name))

    def _record(self, name: EventName, payload: Any) -> None:
        self.events.append((name.value, payload))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def payloads(self, name: EventName) -> list[Any]:
        return [p for n, p in self.events if n == name.value]

    def clear(self) -> None:
        self.events.clear()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def sim_clock() -> SimClock:
    """Return a SimClock starting at 2024-06-01 00:00 UTC."""
    return SimClock(start=datetime(2024, 6, 1, tzinfo=timezone.utc))


@pytest.fixture
def bus() -> EventBus:
    """Return a fresh EventBus instance."""
    return EventBus()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def recorder(bus) -> EventRecorder:
    return EventRecorder(bus)


@pytest.fixture
def storefront(sim_clock, scheduler):
    """A fully wired Storefront on a simulated clock and manual timers."""
    with Storefront.create(clock=sim_clock, scheduler=scheduler) as app:
        yield app


@pytest.fixture
def app_recorder(storefront) -> EventRecorder:
    return EventRecorder(storefront.bus)
