"""Application wiring.

Builds one EventBus per Storefront and hands it to every component that
needs it.  Closing the Storefront releases the consumers' subscriptions
and then the bus.
"""

from __future__ import annotations

import logging

from .bus.memory_bus import EventBus
from .cart.diff import CartSideEffects
from .cart.store import CartStore
from .consumers.analytics_logger import AnalyticsLogger
from .consumers.notification_center import IScheduler, NotificationCenter
from .core.clock import IClock, WallClock
from .core.config import Settings
from .facades.analytics import AnalyticsEvents
from .facades.cart import CartEvents
from .facades.notifications import Notifier
from .facades.ui import UIEvents

logger = logging.getLogger(__name__)


class Storefront:
    """Owns the bus, facades, cart store and consumers for one session."""

    def __init__(
        self,
        settings: Settings,
        bus: EventBus,
        clock: IClock,
        scheduler: IScheduler | None = None,
    ) -> None:
        self.settings = settings
        self.bus = bus
        self.clock = clock

        self.analytics = AnalyticsEvents(bus, clock=clock)
        self.cart_events = CartEvents(bus)
        self.notify = Notifier(bus)
        self.ui = UIEvents(bus)

        self.notifications = NotificationCenter(
            bus,
            clock=clock,
            scheduler=scheduler,
            default_duration_ms=settings.notifications.default_duration_ms,
            max_visible=settings.notifications.max_visible,
        )
        self.analytics_logger = AnalyticsLogger(bus)

        self.side_effects = CartSideEffects(self.cart_events, self.notify, self.analytics)
        self.cart = CartStore(self.side_effects)

    @classmethod
    def create(
        cls,
        settings: Settings | None = None,
        clock: IClock | None = None,
        scheduler: IScheduler | None = None,
    ) -> Storefront:
        settings = settings or Settings()
        bus = EventBus(log_handler_errors=settings.bus.log_handler_errors)
        logger.debug("Storefront created")
        return cls(settings, bus, clock or WallClock(), scheduler)

    def close(self) -> None:
        self.notifications.close()
        self.analytics_logger.close()
        self.bus.close()

    def __enter__(self) -> Storefront:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
