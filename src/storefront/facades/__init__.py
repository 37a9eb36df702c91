"""Domain facades over the event bus.

Public API
----------
::

    from storefront.facades import AnalyticsEvents, CartEvents, Notifier, UIEvents
"""

from __future__ import annotations

from storefront.facades.analytics import AnalyticsEvents
from storefront.facades.base import DomainChannel
from storefront.facades.cart import CartEvents
from storefront.facades.notifications import Notifier
from storefront.facades.ui import UIEvents

__all__ = [
    "AnalyticsEvents",
    "CartEvents",
    "DomainChannel",
    "Notifier",
    "UIEvents",
]
