"""UI interaction facade: counters, modals, forms."""

from __future__ import annotations

from typing import Any, Callable

from storefront.bus.events import (
    CounterPayload,
    CounterResetPayload,
    Event,
    FormSubmittedPayload,
    FormValidationFailedPayload,
    ModalPayload,
)
from storefront.bus.memory_bus import Subscription
from storefront.core.enums import EventName

from .base import DomainChannel


class UIEvents(DomainChannel):
    DOMAIN = "ui"
    EVENT_NAMES = frozenset({
        EventName.COUNTER_INCREMENTED,
        EventName.COUNTER_DECREMENTED,
        EventName.COUNTER_RESET,
        EventName.MODAL_OPENED,
        EventName.MODAL_CLOSED,
        EventName.FORM_SUBMITTED,
        EventName.FORM_VALIDATION_FAILED,
    })

    def counter_incremented(self, count: int, label: str) -> Event:
        return self.publish(
            EventName.COUNTER_INCREMENTED, CounterPayload(count=count, label=label)
        )

    def counter_decremented(self, count: int, label: str) -> Event:
        return self.publish(
            EventName.COUNTER_DECREMENTED, CounterPayload(count=count, label=label)
        )

    def counter_reset(self, label: str) -> Event:
        return self.publish(EventName.COUNTER_RESET, CounterResetPayload(label=label))

    def modal_opened(self, modal_id: str) -> Event:
        return self.publish(EventName.MODAL_OPENED, ModalPayload(modal_id=modal_id))

    def modal_closed(self, modal_id: str) -> Event:
        return self.publish(EventName.MODAL_CLOSED, ModalPayload(modal_id=modal_id))

    def form_submitted(self, form_id: str, data: dict[str, Any]) -> Event:
        return self.publish(
            EventName.FORM_SUBMITTED, FormSubmittedPayload(form_id=form_id, data=data)
        )

    def form_validation_failed(self, form_id: str, errors: list[str]) -> Event:
        return self.publish(
            EventName.FORM_VALIDATION_FAILED,
            FormValidationFailedPayload(form_id=form_id, errors=errors),
        )

    def on_counter_incremented(self, handler: Callable[[CounterPayload], None]) -> Subscription:
        return self.subscribe(EventName.COUNTER_INCREMENTED, handler)

    def on_counter_decremented(self, handler: Callable[[CounterPayload], None]) -> Subscription:
        return self.subscribe(EventName.COUNTER_DECREMENTED, handler)

    def on_counter_reset(self, handler: Callable[[CounterResetPayload], None]) -> Subscription:
        return self.subscribe(EventName.COUNTER_RESET, handler)

    def on_modal_opened(self, handler: Callable[[ModalPayload], None]) -> Subscription:
        return self.subscribe(EventName.MODAL_OPENED, handler)

    def on_modal_closed(self, handler: Callable[[ModalPayload], None]) -> Subscription:
        return self.subscribe(EventName.MODAL_CLOSED, handler)

    def on_form_submitted(self, handler: Callable[[FormSubmittedPayload], None]) -> Subscription:
        return self.subscribe(EventName.FORM_SUBMITTED, handler)

    def on_form_validation_failed(
        self, handler: Callable[[FormValidationFailedPayload], None]
    ) -> Subscription:
        return self.subscribe(EventName.FORM_VALIDATION_FAILED, handler)
