"""In-memory event bus.

No external dependencies. Handlers are called synchronously, in
registration order, on the publisher's own call stack.

Delivery rules:
- Each publish iterates a snapshot of the subscriber list taken when the
  publish starts.  Handlers added during delivery wait for the next
  publish; handlers removed during delivery still receive the in-flight
  event.
- A handler may publish again (re-entrant); the nested publish runs to
  completion before the outer loop moves on.
- A failing handler is logged, counted and dead-lettered.  The remaining
  handlers still run and the publisher never sees the exception.
"""

from __future__ import annotations

import itertools
import logging
import time
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from storefront.core.enums import EventName
from storefront.core.errors import BusClosedError, SubscriptionError

from .events import Event, Payload
from .schemas import EVENT_SCHEMAS, resolve_event_name, validate_payload

logger = logging.getLogger(__name__)

PayloadHandler = Callable[[Any], None]
SignalHandler = Callable[[], None]


@dataclass
class DeadLetter:
    """Record of a handler failure."""

    event_name: str
    subscription_id: int
    event_id: str
    error: str
    timestamp: float = field(default_factory=time.monotonic)


class Subscription:
    """Token for one (event name, handler) registration.

    Calling the token, or ``unsubscribe()``, removes the registration.
    Repeated calls are no-ops.
    """

    __slots__ = ("_bus", "id", "name", "handler", "is_signal")

    def __init__(
        self,
        bus: EventBus,
        sub_id: int,
        name: EventName,
        handler: Callable[..., None],
        is_signal: bool,
    ) -> None:
        self._bus: EventBus | None = bus
        self.id = sub_id
        self.name = name
        self.handler = handler
        self.is_signal = is_signal

    @property
    def active(self) -> bool:
        return self._bus is not None

    def unsubscribe(self) -> None:
        bus, self._bus = self._bus, None
        if bus is not None:
            bus._remove(self)

    def __call__(self) -> None:
        self.unsubscribe()

    def _deliver(self, payload: Payload | None) -> None:
        if self.is_signal:
            self.handler()
        else:
            self.handler(payload)

    def __repr__(self) -> str:
        state = "active" if self.active else "released"
        return f"<Subscription #{self.id} {self.name.value} {state}>"


class EventBus:
    """Synchronous publish/subscribe bus over the event registry.

    Construct one per owning scope and inject it; there is no global
    instance.

    Parameters
    ----------
    on_handler_error
        Optional callback ``(event_name, subscription_id, exc)`` invoked
        when a handler raises.  Useful for external alerting.
    log_handler_errors
        When ``False`` handler failures are still counted and
        dead-lettered but not logged.
    """

    def __init__(
        self,
        on_handler_error: Callable[[str, int, Exception], None] | None = None,
        *,
        log_handler_errors: bool = True,
    ) -> None:
        self._subscribers: dict[EventName, list[Subscription]] = defaultdict(list)
        self._ids = itertools.count(1)
        self._closed = False
        self._depth = 0
        self._on_handler_error = on_handler_error
        self._log_handler_errors = log_handler_errors

        # Observability
        self._error_counts: dict[str, int] = defaultdict(int)
        self._dead_letters: list[DeadLetter] = []
        self._messages_processed: int = 0

    # -- Lifecycle ---------------------------------------------------------

    def close(self) -> None:
        """Release every subscription.  Later publishes are no-ops."""
        if self._closed:
            return
        self._closed = True
        for subs in list(self._subscribers.values()):
            for sub in list(subs):
                sub.unsubscribe()
        self._subscribers.clear()

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> EventBus:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # -- Core API ----------------------------------------------------------

    def subscribe(
        self,
        name: EventName | str,
        handler: PayloadHandler,
    ) -> Subscription:
        """Register *handler* for a payload-bearing event.

        The handler receives the validated payload model.
        """
        event_name = resolve_event_name(name)
        if EVENT_SCHEMAS[event_name] is None:
            raise SubscriptionError(
                f"{event_name.value} carries no payload; use subscribe_signal()"
            )
        return self._add(event_name, handler, is_signal=False)

    def subscribe_signal(
        self,
        name: EventName | str,
        handler: SignalHandler,
    ) -> Subscription:
        """Register a no-argument *handler* for a signal-only event."""
        event_name = resolve_event_name(name)
        if EVENT_SCHEMAS[event_name] is not None:
            raise SubscriptionError(
                f"{event_name.value} carries a payload; use subscribe()"
            )
        return self._add(event_name, handler, is_signal=True)

    def publish(self, name: EventName | str, payload: Any = None) -> Event:
        """Validate and deliver an event to the current subscribers.

        Returns the envelope that was delivered.

        Raises
        ------
        UnknownEventError
            If *name* is not in the registry.
        PayloadValidationError
            If *payload* does not match the registered schema.
        """
        event_name = resolve_event_name(name)
        detail = validate_payload(event_name, payload)
        event = Event(name=event_name, detail=detail)

        if self._closed:
            logger.debug("Publish on closed bus dropped: %s", event_name.value)
            return event

        snapshot = tuple(self._subscribers.get(event_name, ()))
        if not snapshot:
            return event

        self._depth += 1
        try:
            for sub in snapshot:
                self._deliver(sub, event)
        finally:
            self._depth -= 1
        return event

    # -- Internals ---------------------------------------------------------

    def _add(
        self,
        name: EventName,
        handler: Callable[..., None],
        *,
        is_signal: bool,
    ) -> Subscription:
        if self._closed:
            raise BusClosedError(f"Cannot subscribe to {name.value}: bus is closed")
        if not callable(handler):
            raise SubscriptionError(f"Handler for {name.value} is not callable")
        sub = Subscription(self, next(self._ids), name, handler, is_signal)
        self._subscribers[name].append(sub)
        return sub

    def _remove(self, sub: Subscription) -> None:
        # Rebind rather than mutate so in-flight snapshots stay intact.
        subs = self._subscribers.get(sub.name)
        if subs is None:
            return
        remaining = [s for s in subs if s is not sub]
        if remaining:
            self._subscribers[sub.name] = remaining
        else:
            del self._subscribers[sub.name]

    def _deliver(self, sub: Subscription, event: Event) -> None:
        try:
            sub._deliver(event.detail)
            self._messages_processed += 1
        except Exception as exc:
            key = event.name.value
            self._error_counts[key] += 1
            self._dead_letters.append(
                DeadLetter(
                    event_name=key,
                    subscription_id=sub.id,
                    event_id=event.event_id,
                    error=str(exc),
                )
            )
            if self._log_handler_errors:
                logger.exception(
                    "Handler error on event=%s subscription=%d",
                    key,
                    sub.id,
                )

            if self._on_handler_error is not None:
                try:
                    self._on_handler_error(key, sub.id, exc)
                except Exception:
                    logger.warning(
                        "on_handler_error callback failed",
                        exc_info=True,
                    )

    # -- Observability -----------------------------------------------------

    def subscriber_count(self, name: EventName | str | None = None) -> int:
        """Number of active registrations, for one event or overall."""
        if name is None:
            return sum(len(subs) for subs in self._subscribers.values())
        return len(self._subscribers.get(resolve_event_name(name), ()))

    @property
    def publish_depth(self) -> int:
        """Current nesting level of in-flight publishes (0 when idle)."""
        return self._depth

    def get_error_counts(self) -> dict[str, int]:
        """Return per-event handler error counts."""
        return dict(self._error_counts)

    @property
    def dead_letters(self) -> list[DeadLetter]:
        """Access the dead-letter list (read-only snapshot)."""
        return list(self._dead_letters)

    @property
    def messages_processed(self) -> int:
        """Total handler invocations that completed without raising."""
        return self._messages_processed

    def clear_dead_letters(self) -> list[DeadLetter]:
        """Drain the dead-letter list and return all entries."""
        drained = self._dead_letters[:]
        self._dead_letters.clear()
        return drained
