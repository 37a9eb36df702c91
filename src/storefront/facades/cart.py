"""Cart domain facade."""

from __future__ import annotations

from typing import Callable

from storefront.bus.events import (
    CheckoutStartedPayload,
    Event,
    ItemAddedPayload,
    ItemRemovedPayload,
    ItemUpdatedPayload,
)
from storefront.bus.memory_bus import Subscription
from storefront.core.enums import EventName

from .base import DomainChannel


class CartEvents(DomainChannel):
    DOMAIN = "cart"
    EVENT_NAMES = frozenset({
        EventName.CART_ITEM_ADDED,
        EventName.CART_ITEM_REMOVED,
        EventName.CART_ITEM_UPDATED,
        EventName.CART_CLEARED,
        EventName.CART_CHECKOUT_STARTED,
    })

    def item_added(self, product_id: str, product_name: str) -> Event:
        return self.publish(
            EventName.CART_ITEM_ADDED,
            ItemAddedPayload(product_id=product_id, product_name=product_name),
        )

    def item_removed(self, product_id: str) -> Event:
        return self.publish(
            EventName.CART_ITEM_REMOVED,
            ItemRemovedPayload(product_id=product_id),
        )

    def item_updated(self, product_id: str, quantity: int) -> Event:
        return self.publish(
            EventName.CART_ITEM_UPDATED,
            ItemUpdatedPayload(product_id=product_id, quantity=quantity),
        )

    def cleared(self) -> Event:
        return self.publish(EventName.CART_CLEARED)

    def checkout_started(self, total_items: int, total_price: float) -> Event:
        return self.publish(
            EventName.CART_CHECKOUT_STARTED,
            CheckoutStartedPayload(total_items=total_items, total_price=total_price),
        )

    def on_item_added(self, handler: Callable[[ItemAddedPayload], None]) -> Subscription:
        return self.subscribe(EventName.CART_ITEM_ADDED, handler)

    def on_item_removed(self, handler: Callable[[ItemRemovedPayload], None]) -> Subscription:
        return self.subscribe(EventName.CART_ITEM_REMOVED, handler)

    def on_item_updated(self, handler: Callable[[ItemUpdatedPayload], None]) -> Subscription:
        return self.subscribe(EventName.CART_ITEM_UPDATED, handler)

    def on_cleared(self, handler: Callable[[], None]) -> Subscription:
        return self.subscribe_signal(EventName.CART_CLEARED, handler)

    def on_checkout_started(
        self, handler: Callable[[CheckoutStartedPayload], None]
    ) -> Subscription:
        return self.subscribe(EventName.CART_CHECKOUT_STARTED, handler)
