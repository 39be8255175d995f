"""Owner notifications."""

from .router import router
from .sink import DatabaseNotificationSink, NotificationSink, get_notification_sink

__all__ = ["router", "NotificationSink", "DatabaseNotificationSink", "get_notification_sink"]
