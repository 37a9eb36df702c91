"""Bus consumers: notification center and analytics logger."""

from storefront.consumers.analytics_logger import AnalyticsLogger
from storefront.consumers.notification_center import Notification, NotificationCenter

__all__ = ["AnalyticsLogger", "Notification", "NotificationCenter"]
