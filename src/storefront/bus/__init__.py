"""Typed publish/subscribe event bus and its event registry."""

from storefront.bus.events import Event, Payload
from storefront.bus.memory_bus import DeadLetter, EventBus, Subscription
from storefront.bus.schemas import EVENT_SCHEMAS, get_payload_class, is_signal

__all__ = [
    "EVENT_SCHEMAS",
    "DeadLetter",
    "Event",
    "EventBus",
    "Payload",
    "Subscription",
    "get_payload_class",
    "is_signal",
]
