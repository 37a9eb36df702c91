"""Analytics domain facade."""

from __future__ import annotations

from typing import Any, Callable

from storefront.bus.events import Event, PageViewPayload, TrackPayload, UserActionPayload
from storefront.bus.memory_bus import EventBus, Subscription
from storefront.core.clock import IClock, WallClock
from storefront.core.enums import EventName

from .base import DomainChannel


class AnalyticsEvents(DomainChannel):
    """Dispatch helpers for ``analytics:*`` events.

    ``track`` stamps ``timestamp`` (ms since epoch) from the injected clock.
    """

    DOMAIN = "analytics"
    EVENT_NAMES = frozenset({
        EventName.ANALYTICS_TRACK,
        EventName.ANALYTICS_PAGE_VIEW,
        EventName.ANALYTICS_USER_ACTION,
    })

    def __init__(self, bus: EventBus, clock: IClock | None = None) -> None:
        super().__init__(bus)
        self._clock = clock or WallClock()

    @property
    def clock(self) -> IClock:
        return self._clock

    def track(
        self,
        event: str,
        properties: dict[str, Any] | None = None,
        user_id: str | None = None,
    ) -> Event:
        return self.publish(
            EventName.ANALYTICS_TRACK,
            TrackPayload(
                event=event,
                properties=properties,
                user_id=user_id,
                timestamp=self._clock.now_ms(),
            ),
        )

    def page_view(
        self,
        page: str,
        title: str | None = None,
        referrer: str | None = None,
    ) -> Event:
        return self.publish(
            EventName.ANALYTICS_PAGE_VIEW,
            PageViewPayload(page=page, title=title, referrer=referrer),
        )

    def user_action(
        self,
        action: str,
        category: str,
        label: str | None = None,
        value: float | None = None,
    ) -> Event:
        return self.publish(
            EventName.ANALYTICS_USER_ACTION,
            UserActionPayload(action=action, category=category, label=label, value=value),
        )

    def on_track(self, handler: Callable[[TrackPayload], None]) -> Subscription:
        return self.subscribe(EventName.ANALYTICS_TRACK, handler)

    def on_page_view(self, handler: Callable[[PageViewPayload], None]) -> Subscription:
        return self.subscribe(EventName.ANALYTICS_PAGE_VIEW, handler)

    def on_user_action(self, handler: Callable[[UserActionPayload], None]) -> Subscription:
        return self.subscribe(EventName.ANALYTICS_USER_ACTION, handler)
