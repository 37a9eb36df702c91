"""Event payload schemas.

All payloads inherit from Payload and are frozen Pydantic models.
Attribute names are snake_case; the camelCase aliases are the wire names
(``model_dump(by_alias=True)``).  Unknown fields are rejected so a facade
can never silently rename or drop one.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from storefront.core.enums import EventName, NotificationKind
from storefront.core.ids import new_id, utc_now

logger = logging.getLogger(__name__)


class Payload(BaseModel):
    """Base for all event payloads."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)


# ===========================================================================
# Domain: analytics
# ===========================================================================

class TrackPayload(Payload):
    event: str
    properties: dict[str, Any] | None = None
    user_id: str | None = Field(default=None, alias="userId")
    timestamp: int | None = None  # ms since epoch


class PageViewPayload(Payload):
    page: str
    title: str | None = None
    referrer: str | None = None


class UserActionPayload(Payload):
    action: str
    category: str
    label: str | None = None
    value: float | None = None


# ===========================================================================
# Domain: cart
# ===========================================================================

class ItemAddedPayload(Payload):
    product_id: str = Field(alias="productId")
    product_name: str = Field(alias="productName")


class ItemRemovedPayload(Payload):
    product_id: str = Field(alias="productId")


class ItemUpdatedPayload(Payload):
    product_id: str = Field(alias="productId")
    quantity: int


class CheckoutStartedPayload(Payload):
    total_items: int = Field(alias="totalItems", ge=0)
    total_price: float = Field(alias="totalPrice", ge=0)


# ===========================================================================
# Domain: notification
# ===========================================================================

class NotificationAction(Payload):
    """Optional call-to-action attached to a notification."""

    label: str
    trigger: Callable[[], Any]


class ShowNotificationPayload(Payload):
    message: str
    kind: NotificationKind = Field(alias="type")
    duration: float | None = None  # ms; None means the consumer default
    action: NotificationAction | None = None

    @field_validator("duration", mode="before")
    @classmethod
    def _lenient_duration(cls, v: Any) -> Any:
        # Bad durations fall back to the default instead of failing the call.
        if v is None:
            return None
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            logger.debug("Ignoring non-numeric notification duration %r", v)
            return None
        if not math.isfinite(v) or v <= 0:
            logger.debug("Ignoring out-of-range notification duration %r", v)
            return None
        return v


class HideNotificationPayload(Payload):
    id: str | None = None


# ===========================================================================
# Domain: ui
# ===========================================================================

class CounterPayload(Payload):
    count: int
    label: str


class CounterResetPayload(Payload):
    label: str


class ModalPayload(Payload):
    modal_id: str = Field(alias="modalId")


class FormSubmittedPayload(Payload):
    form_id: str = Field(alias="formId")
    data: dict[str, Any] = Field(default_factory=dict)


class FormValidationFailedPayload(Payload):
    form_id: str = Field(alias="formId")
    errors: list[str] = Field(default_factory=list)


# ===========================================================================
# Envelope
# ===========================================================================

class Event(BaseModel):
    """Envelope built at publish time and discarded after delivery."""

    model_config = ConfigDict(frozen=True)

    name: EventName
    detail: Payload | None = None
    event_id: str = Field(default_factory=new_id)
    timestamp: datetime = Field(default_factory=utc_now)
