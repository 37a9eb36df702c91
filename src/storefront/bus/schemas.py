"""Event name → schema registry.

Maps every event name to its Pydantic payload model, or to ``None`` for
signal-only events that carry no payload.  Used for validation at
subscribe and publish time.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from storefront.core.enums import EventName
from storefront.core.errors import PayloadValidationError, UnknownEventError

from .events import (
    CheckoutStartedPayload,
    CounterPayload,
    CounterResetPayload,
    FormSubmittedPayload,
    FormValidationFailedPayload,
    HideNotificationPayload,
    ItemAddedPayload,
    ItemRemovedPayload,
    ItemUpdatedPayload,
    ModalPayload,
    PageViewPayload,
    Payload,
    ShowNotificationPayload,
    TrackPayload,
    UserActionPayload,
)

EVENT_SCHEMAS: dict[EventName, type[Payload] | None] = {
    EventName.ANALYTICS_TRACK: TrackPayload,
    EventName.ANALYTICS_PAGE_VIEW: PageViewPayload,
    EventName.ANALYTICS_USER_ACTION: UserActionPayload,
    EventName.CART_ITEM_ADDED: ItemAddedPayload,
    EventName.CART_ITEM_REMOVED: ItemRemovedPayload,
    EventName.CART_ITEM_UPDATED: ItemUpdatedPayload,
    EventName.CART_CLEARED: None,
    EventName.CART_CHECKOUT_STARTED: CheckoutStartedPayload,
    EventName.NOTIFICATION_SHOW: ShowNotificationPayload,
    EventName.NOTIFICATION_HIDE: HideNotificationPayload,
    EventName.NOTIFICATION_CLEAR_ALL: None,
    EventName.COUNTER_INCREMENTED: CounterPayload,
    EventName.COUNTER_DECREMENTED: CounterPayload,
    EventName.COUNTER_RESET: CounterResetPayload,
    EventName.MODAL_OPENED: ModalPayload,
    EventName.MODAL_CLOSED: ModalPayload,
    EventName.FORM_SUBMITTED: FormSubmittedPayload,
    EventName.FORM_VALIDATION_FAILED: FormValidationFailedPayload,
}

# Every EventName member must be registered exactly once.
assert set(EVENT_SCHEMAS) == set(EventName)


def resolve_event_name(name: EventName | str) -> EventName:
    """Map *name* to a registered ``EventName``.

    Accepts the enum member or its string value.  Anything else raises
    ``UnknownEventError``; nothing is coerced.
    """
    if isinstance(name, EventName):
        return name
    if isinstance(name, str):
        try:
            return EventName(name)
        except ValueError:
            pass
    raise UnknownEventError(name)


def get_payload_class(name: EventName | str) -> type[Payload] | None:
    """Look up the payload model for an event (``None`` for signals)."""
    return EVENT_SCHEMAS[resolve_event_name(name)]


def is_signal(name: EventName | str) -> bool:
    """True if the event carries no payload."""
    return get_payload_class(name) is None


def validate_payload(name: EventName, payload: Any) -> Payload | None:
    """Validate *payload* against the schema registered for *name*.

    Mappings are parsed through the model; model instances must be of the
    exact registered class.
    """
    schema = EVENT_SCHEMAS[name]

    if schema is None:
        if payload is not None:
            raise PayloadValidationError(
                f"{name.value} is a signal event and takes no payload, "
                f"got {type(payload).__name__}"
            )
        return None

    if isinstance(payload, schema):
        return payload
    if isinstance(payload, Payload):
        raise PayloadValidationError(
            f"{name.value} expects {schema.__name__}, "
            f"got {type(payload).__name__}"
        )
    if payload is None:
        raise PayloadValidationError(f"{name.value} requires a payload")
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise PayloadValidationError(
            f"Invalid payload for {name.value}: {exc}"
        ) from exc


def describe_registry() -> list[tuple[str, list[str]]]:
    """Return ``(event name, wire field names)`` pairs in catalog order."""
    rows: list[tuple[str, list[str]]] = []
    for name, schema in EVENT_SCHEMAS.items():
        if schema is None:
            rows.append((name.value, []))
            continue
        fields = [
            (info.alias or field_name)
            + ("" if info.is_required() else "?")
            for field_name, info in schema.model_fields.items()
        ]
        rows.append((name.value, fields))
    return rows
