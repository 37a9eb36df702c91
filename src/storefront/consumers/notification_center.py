"""Notification center: keeps the list of live notifications.

Subscribes to ``notification:show``, ``notification:hide`` and
``notification:clear-all``.  Each shown notification gets an expiry timer
scheduled through ``call_later`` (an asyncio event loop satisfies the
scheduler protocol).  Removing a notification early cancels its timer; a
timer that fires for an already removed notification does nothing.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any, Callable, Protocol

from pydantic import BaseModel, ConfigDict, Field

from storefront.bus.events import (
    HideNotificationPayload,
    NotificationAction,
    ShowNotificationPayload,
)
from storefront.bus.memory_bus import EventBus, Subscription
from storefront.core.clock import IClock, WallClock
from storefront.core.config import DEFAULT_NOTIFICATION_DURATION_MS
from storefront.core.enums import NotificationKind
from storefront.core.ids import new_id
from storefront.facades.notifications import Notifier

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class IScheduler(Protocol):
    """Deferred-call interface (``asyncio.AbstractEventLoop`` fits)."""

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> TimerHandle:
        ...


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    message: str
    kind: NotificationKind
    created_at: datetime
    duration_ms: float = DEFAULT_NOTIFICATION_DURATION_MS
    action: NotificationAction | None = None


class NotificationCenter:
    """Subscriber that owns notification lifecycles.

    Parameters
    ----------
    bus
        Bus to subscribe on.
    clock
        Source of ``created_at`` (defaults to WallClock).
    scheduler
        Timer source for expiry.  When ``None`` the running asyncio loop is
        used; with no running loop expiry is skipped and the notification
        lives until hidden.
    default_duration_ms
        Used when ``notification:show`` carries no valid duration.
    max_visible
        When set, showing a notification beyond this count dismisses the
        oldest ones.
    """

    def __init__(
        self,
        bus: EventBus,
        clock: IClock | None = None,
        scheduler: IScheduler | None = None,
        default_duration_ms: float = DEFAULT_NOTIFICATION_DURATION_MS,
        max_visible: int | None = None,
    ) -> None:
        self._clock = clock or WallClock()
        self._scheduler = scheduler
        self._default_duration_ms = default_duration_ms
        self._max_visible = max_visible
        self._notifications: dict[str, Notification] = {}
        self._timers: dict[str, TimerHandle] = {}

        notifier = Notifier(bus)
        self._subscriptions: list[Subscription] = [
            notifier.on_show(self._on_show),
            notifier.on_hide(self._on_hide),
            notifier.on_clear_all(self._on_clear_all),
        ]

    # -- Queries -----------------------------------------------------------

    @property
    def notifications(self) -> list[Notification]:
        """Live notifications, oldest first."""
        return list(self._notifications.values())

    def get(self, notification_id: str) -> Notification | None:
        return self._notifications.get(notification_id)

    @property
    def pending_timers(self) -> int:
        return len(self._timers)

    # -- Bus handlers ------------------------------------------------------

    def _on_show(self, payload: ShowNotificationPayload) -> None:
        duration = payload.duration or self._default_duration_ms
        notification = Notification(
            message=payload.message,
            kind=payload.kind,
            created_at=self._clock.now(),
            duration_ms=duration,
            action=payload.action,
        )
        self._notifications[notification.id] = notification
        self._schedule_expiry(notification)
        logger.debug(
            "Notification shown id=%s kind=%s", notification.id, notification.kind.value,
        )

        if self._max_visible is not None:
            while len(self._notifications) > self._max_visible:
                oldest = next(iter(self._notifications))
                self.dismiss(oldest)

    def _on_hide(self, payload: HideNotificationPayload) -> None:
        if payload.id:
            self.dismiss(payload.id)

    def _on_clear_all(self) -> None:
        for handle in self._timers.values():
            handle.cancel()
        self._timers.clear()
        self._notifications.clear()

    # -- Lifecycle ---------------------------------------------------------

    def dismiss(self, notification_id: str) -> bool:
        """Remove a notification and cancel its timer.  False if unknown."""
        handle = self._timers.pop(notification_id, None)
        if handle is not None:
            handle.cancel()
        return self._notifications.pop(notification_id, None) is not None

    def trigger_action(self, notification_id: str) -> bool:
        """Run the notification's action, if it has one."""
        notification = self._notifications.get(notification_id)
        if notification is None or notification.action is None:
            return False
        notification.action.trigger()
        return True

    def close(self) -> None:
        """Cancel all timers and release the bus subscriptions."""
        self._on_clear_all()
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions.clear()

    def _schedule_expiry(self, notification: Notification) -> None:
        scheduler = self._scheduler
        if scheduler is None:
            try:
                scheduler = asyncio.get_running_loop()
            except RuntimeError:
                logger.warning(
                    "No scheduler or running event loop; notification %s will not expire",
                    notification.id,
                )
                return
        self._timers[notification.id] = scheduler.call_later(
            notification.duration_ms / 1000.0, self._expire, notification.id,
        )

    def _expire(self, notification_id: str) -> None:
        self._timers.pop(notification_id, None)
        if self._notifications.pop(notification_id, None) is not None:
            logger.debug("Notification expired id=%s", notification_id)
