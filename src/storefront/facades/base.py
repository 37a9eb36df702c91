"""Domain channel base class.

A channel restricts the shared bus to one domain's event names.  It holds
no state of its own besides the bus reference.
"""

from __future__ import annotations

from typing import Any, ClassVar

from storefront.bus.events import Event
from storefront.bus.memory_bus import EventBus, PayloadHandler, SignalHandler, Subscription
from storefront.bus.schemas import resolve_event_name
from storefront.core.enums import EventName
from storefront.core.errors import UnknownEventError


class DomainChannel:
    """Typed adapter over ``EventBus`` for a closed set of event names."""

    DOMAIN: ClassVar[str] = ""
    EVENT_NAMES: ClassVar[frozenset[EventName]] = frozenset()

    def __init__(self, bus: EventBus) -> None:
        self._bus = bus

    @property
    def bus(self) -> EventBus:
        return self._bus

    def _check(self, name: EventName | str) -> EventName:
        event_name = resolve_event_name(name)
        if event_name not in self.EVENT_NAMES:
            raise UnknownEventError(
                event_name.value, reason=f"not a {self.DOMAIN} event"
            )
        return event_name

    def publish(self, name: EventName | str, payload: Any = None) -> Event:
        return self._bus.publish(self._check(name), payload)

    def subscribe(self, name: EventName | str, handler: PayloadHandler) -> Subscription:
        return self._bus.subscribe(self._check(name), handler)

    def subscribe_signal(self, name: EventName | str, handler: SignalHandler) -> Subscription:
        return self._bus.subscribe_signal(self._check(name), handler)
