"""Fire-and-forget notifications about report submission events."""

from .notifier import (
    LoggingNotifier,
    NotificationService,
    Notifier,
    WebhookNotifier,
    get_notification_service,
)

__all__ = [
    "Notifier",
    "LoggingNotifier",
    "WebhookNotifier",
    "NotificationService",
    "get_notification_service",
]
