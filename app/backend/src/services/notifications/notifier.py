"""Notifier implementations and the service that shields callers from their failures."""

import logging
from typing import Any, Protocol

import httpx

from src.core.config import get_settings

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """Delivers a named event with a JSON-serialisable payload."""

    async def notify(self, event: str, payload: dict[str, Any]) -> None: ...


class LoggingNotifier:
    """Notifier that only records events in the application log."""

    async def notify(self, event: str, payload: dict[str, Any]) -> None:
        logger.info("Notification event=%s payload=%s", event, payload)


class WebhookNotifier:
    """Notifier that POSTs events to an HTTP endpoint (single attempt)."""

    def __init__(self, url: str, timeout: float = 10.0):
        """
        Initialize webhook notifier.

        Args:
            url: Endpoint receiving ``{"event": ..., "payload": ...}`` JSON bodies
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    async def notify(self, event: str, payload: dict[str, Any]) -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                self.url,
                json={"event": event, "payload": payload},
                timeout=self.timeout,
            )
            response.raise_for_status()


class NotificationService:
    """Sends notifications without ever failing the calling operation."""

    def __init__(self, notifier: Notifier):
        self.notifier = notifier

    async def send(self, event: str, payload: dict[str, Any]) -> bool:
        """Send ``event`` and report whether delivery succeeded.

        Any notifier error is logged and swallowed.
        """
        try:
            await self.notifier.notify(event, payload)
            return True
        except Exception:
            logger.exception("Notification delivery failed: event=%s", event)
            return False


def get_notification_service() -> NotificationService:
    """Build the notification service from settings (webhook when configured)."""
    settings = get_settings()
    if settings.NOTIFICATION_WEBHOOK_URL:
        return NotificationService(
            WebhookNotifier(
                settings.NOTIFICATION_WEBHOOK_URL,
                timeout=settings.NOTIFICATION_TIMEOUT_SECONDS,
            )
        )
    return NotificationService(LoggingNotifier())
