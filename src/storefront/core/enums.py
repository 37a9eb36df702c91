"""Enumerations used across the storefront."""

from enum import Enum


class EventName(str, Enum):
    # analytics
    ANALYTICS_TRACK = "analytics:track"
    ANALYTICS_PAGE_VIEW = "analytics:page-view"
    ANALYTICS_USER_ACTION = "analytics:user-action"

    # cart
    CART_ITEM_ADDED = "cart:item-added"
    CART_ITEM_REMOVED = "cart:item-removed"
    CART_ITEM_UPDATED = "cart:item-updated"
    CART_CLEARED = "cart:cleared"
    CART_CHECKOUT_STARTED = "cart:checkout-started"

    # notification
    NOTIFICATION_SHOW = "notification:show"
    NOTIFICATION_HIDE = "notification:hide"
    NOTIFICATION_CLEAR_ALL = "notification:clear-all"

    # ui
    COUNTER_INCREMENTED = "counter:incremented"
    COUNTER_DECREMENTED = "counter:decremented"
    COUNTER_RESET = "counter:reset"
    MODAL_OPENED = "modal:opened"
    MODAL_CLOSED = "modal:closed"
    FORM_SUBMITTED = "form:submitted"
    FORM_VALIDATION_FAILED = "form:validation-failed"

    @property
    def domain(self) -> str:
        """Prefix before the colon, e.g. ``cart``."""
        return self.value.split(":", 1)[0]


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


class ChangeKind(str, Enum):
    ADDED = "added"
    QUANTITY_INCREASED = "quantity_increased"
    REMOVED = "removed"
    CLEARED = "cleared"
