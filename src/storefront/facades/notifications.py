"""Notification domain facade.

``notify.success("Saved")`` publishes ``notification:show`` with
``type="success"``; the NotificationCenter consumer does the rest.
"""

from __future__ import annotations

from typing import Callable

from storefront.bus.events import (
    Event,
    HideNotificationPayload,
    NotificationAction,
    ShowNotificationPayload,
)
from storefront.bus.memory_bus import Subscription
from storefront.core.enums import EventName, NotificationKind

from .base import DomainChannel


class Notifier(DomainChannel):
    DOMAIN = "notification"
    EVENT_NAMES = frozenset({
        EventName.NOTIFICATION_SHOW,
        EventName.NOTIFICATION_HIDE,
        EventName.NOTIFICATION_CLEAR_ALL,
    })

    def show(
        self,
        message: str,
        kind: NotificationKind | str,
        duration: float | None = None,
        action: NotificationAction | None = None,
    ) -> Event:
        return self.publish(
            EventName.NOTIFICATION_SHOW,
            {"message": message, "type": kind, "duration": duration, "action": action},
        )

    def success(
        self, message: str, duration: float | None = None,
        action: NotificationAction | None = None,
    ) -> Event:
        return self.show(message, NotificationKind.SUCCESS, duration, action)

    def error(
        self, message: str, duration: float | None = None,
        action: NotificationAction | None = None,
    ) -> Event:
        return self.show(message, NotificationKind.ERROR, duration, action)

    def info(
        self, message: str, duration: float | None = None,
        action: NotificationAction | None = None,
    ) -> Event:
        return self.show(message, NotificationKind.INFO, duration, action)

    def warning(
        self, message: str, duration: float | None = None,
        action: NotificationAction | None = None,
    ) -> Event:
        return self.show(message, NotificationKind.WARNING, duration, action)

    def hide(self, notification_id: str | None = None) -> Event:
        return self.publish(
            EventName.NOTIFICATION_HIDE,
            HideNotificationPayload(id=notification_id),
        )

    def clear_all(self) -> Event:
        return self.publish(EventName.NOTIFICATION_CLEAR_ALL)

    def on_show(self, handler: Callable[[ShowNotificationPayload], None]) -> Subscription:
        return self.subscribe(EventName.NOTIFICATION_SHOW, handler)

    def on_hide(self, handler: Callable[[HideNotificationPayload], None]) -> Subscription:
        return self.subscribe(EventName.NOTIFICATION_HIDE, handler)

    def on_clear_all(self, handler: Callable[[], None]) -> Subscription:
        return self.subscribe_signal(EventName.NOTIFICATION_CLEAR_ALL, handler)
