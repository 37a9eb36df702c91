"""Analytics logger: structured log line per analytics and cart event.

A pure subscriber.  In a deployed app this is where events would be
forwarded to an analytics service.
"""

from __future__ import annotations

from collections import Counter

from storefront.bus.events import (
    ItemAddedPayload,
    ItemRemovedPayload,
    PageViewPayload,
    TrackPayload,
    UserActionPayload,
)
from storefront.bus.memory_bus import EventBus, Subscription
from storefront.core.enums import EventName
from storefront.facades.analytics import AnalyticsEvents
from storefront.facades.cart import CartEvents
from storefront.observability.logger import get_logger


class AnalyticsLogger:
    def __init__(self, bus: EventBus) -> None:
        self._log = get_logger("storefront.analytics")
        self._counts: Counter[str] = Counter()

        analytics = AnalyticsEvents(bus)
        cart = CartEvents(bus)
        self._subscriptions: list[Subscription] = [
            analytics.on_track(self._on_track),
            analytics.on_page_view(self._on_page_view),
            analytics.on_user_action(self._on_user_action),
            cart.on_item_added(self._on_item_added),
            cart.on_item_removed(self._on_item_removed),
            cart.on_cleared(self._on_cleared),
        ]

    @property
    def counts(self) -> dict[str, int]:
        """Events seen so far, keyed by event name."""
        return dict(self._counts)

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()

    def _on_track(self, payload: TrackPayload) -> None:
        self._counts[EventName.ANALYTICS_TRACK.value] += 1
        self._log.info(
            "analytics.track",
            analytics_event=payload.event,
            properties=payload.properties,
            user_id=payload.user_id,
            ts=payload.timestamp,
        )

    def _on_page_view(self, payload: PageViewPayload) -> None:
        self._counts[EventName.ANALYTICS_PAGE_VIEW.value] += 1
        self._log.info(
            "analytics.page_view",
            page=payload.page,
            title=payload.title,
            referrer=payload.referrer,
        )

    def _on_user_action(self, payload: UserActionPayload) -> None:
        self._counts[EventName.ANALYTICS_USER_ACTION.value] += 1
        self._log.info(
            "analytics.user_action",
            action=payload.action,
            category=payload.category,
            label=payload.label,
            value=payload.value,
        )

    def _on_item_added(self, payload: ItemAddedPayload) -> None:
        self._counts[EventName.CART_ITEM_ADDED.value] += 1
        self._log.info(
            "cart.item_added",
            product_id=payload.product_id,
            product_name=payload.product_name,
        )

    def _on_item_removed(self, payload: ItemRemovedPayload) -> None:
        self._counts[EventName.CART_ITEM_REMOVED.value] += 1
        self._log.info("cart.item_removed", product_id=payload.product_id)

    def _on_cleared(self) -> None:
        self._counts[EventName.CART_CLEARED.value] += 1
        self._log.info("cart.cleared")
