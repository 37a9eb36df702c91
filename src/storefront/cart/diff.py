"""Side-effect diff engine.

Runs once per committed cart transition.  ``diff_cart`` is a pure
comparison of the previous and new states; ``CartSideEffects`` turns the
resulting changes into bus events, notifications and analytics.

Change order (stable for identical inputs):

1. Items of the new state, in new-state order: ADDED when the id is new,
   QUANTITY_INCREASED when the quantity went up.  Decreases yield nothing.
2. Items of the previous state, in previous-state order: REMOVED when the
   id is gone.
3. CLEARED when the previous state had items and the new one has none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from storefront.core.enums import ChangeKind
from storefront.facades.analytics import AnalyticsEvents
from storefront.facades.cart import CartEvents
from storefront.facades.notifications import Notifier

from .models import CartItem, CartState
from .reducer import total_items, total_price

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartChange:
    kind: ChangeKind
    item: CartItem | None = None
    previous_quantity: int | None = None


def diff_cart(previous: CartState, new: CartState) -> list[CartChange]:
    """Classify the differences between two cart snapshots."""
    previous_by_id = {item.id: item for item in previous}
    new_ids = {item.id for item in new}
    changes: list[CartChange] = []

    for item in new:
        before = previous_by_id.get(item.id)
        if before is None:
            changes.append(CartChange(ChangeKind.ADDED, item))
        elif item.quantity > before.quantity:
            changes.append(
                CartChange(ChangeKind.QUANTITY_INCREASED, item, before.quantity)
            )

    for item in previous:
        if item.id not in new_ids:
            changes.append(CartChange(ChangeKind.REMOVED, item, item.quantity))

    if previous and not new:
        changes.append(CartChange(ChangeKind.CLEARED))

    return changes


class CartSideEffects:
    """Maps cart changes onto the cart, notification and analytics facades."""

    def __init__(
        self,
        cart_events: CartEvents,
        notifier: Notifier,
        analytics: AnalyticsEvents,
    ) -> None:
        self._cart_events = cart_events
        self._notify = notifier
        self._analytics = analytics

    def emit(self, previous: CartState, new: CartState) -> list[CartChange]:
        """Diff the two states and apply every resulting change."""
        changes = diff_cart(previous, new)
        self.apply(changes)
        return changes

    def apply(self, changes: list[CartChange]) -> None:
        for change in changes:
            self._apply_one(change)

    def _apply_one(self, change: CartChange) -> None:
        item = change.item

        if change.kind is ChangeKind.ADDED:
            assert item is not None
            self._cart_events.item_added(item.id, item.name)
            self._notify.success(f"{item.name} added to cart!")
            self._analytics.track(
                "cart_item_added",
                {"productId": item.id, "productName": item.name},
            )

        elif change.kind is ChangeKind.QUANTITY_INCREASED:
            assert item is not None
            self._notify.info(f"Updated {item.name} quantity in cart")

        elif change.kind is ChangeKind.REMOVED:
            assert item is not None
            self._cart_events.item_removed(item.id)
            self._notify.info(f"{item.name} removed from cart")
            self._analytics.track(
                "cart_item_removed",
                {"productId": item.id, "productName": item.name},
            )

        elif change.kind is ChangeKind.CLEARED:
            self._cart_events.cleared()
            self._notify.info("Cart cleared")
            self._analytics.track(
                "cart_cleared", {"timestamp": self._analytics.clock.now_ms()}
            )

        logger.debug("Applied cart change %s", change.kind.value)

    def checkout(self, state: CartState) -> bool:
        """Announce a checkout of *state*.  Returns False for an empty cart."""
        if not state:
            self._notify.warning("Your cart is empty")
            return False
        items = total_items(state)
        price = total_price(state)
        self._cart_events.checkout_started(items, price)
        self._analytics.track(
            "checkout_started", {"totalItems": items, "totalPrice": price}
        )
        return True
