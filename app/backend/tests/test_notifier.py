"""Tests for notification delivery."""

import httpx
import pytest

from src.core.config import get_settings
from src.services.notifications import (
    LoggingNotifier,
    NotificationService,
    WebhookNotifier,
    get_notification_service,
)


@pytest.mark.asyncio
async def test_webhook_notifier_posts_event(mocker):
    request = httpx.Request("POST", "https://hooks.example.com/reports")
    mock_post = mocker.patch(
        "httpx.AsyncClient.post",
        new=mocker.AsyncMock(return_value=httpx.Response(202, request=request)),
    )
    notifier = WebhookNotifier("https://hooks.example.com/reports", timeout=5.0)

    await notifier.notify("report_submission.approved", {"submission_id": "abc"})

    mock_post.assert_awaited_once_with(
        "https://hooks.example.com/reports",
        json={"event": "report_submission.approved", "payload": {"submission_id": "abc"}},
        timeout=5.0,
    )


@pytest.mark.asyncio
async def test_webhook_notifier_raises_on_error_status(mocker):
    request = httpx.Request("POST", "https://hooks.example.com/reports")
    mocker.patch(
        "httpx.AsyncClient.post",
        new=mocker.AsyncMock(return_value=httpx.Response(500, request=request)),
    )

    with pytest.raises(httpx.HTTPStatusError):
        await WebhookNotifier("https://hooks.example.com/reports").notify("event", {})


@pytest.mark.asyncio
async def test_notification_service_swallows_failures(mock_notifier, caplog):
    mock_notifier.notify.side_effect = httpx.ConnectError("refused")
    service = NotificationService(mock_notifier)

    delivered = await service.send("report_submission.submitted", {"submission_id": "abc"})

    assert delivered is False
    assert "Notification delivery failed" in caplog.text


@pytest.mark.asyncio
async def test_notification_service_reports_success(mock_notifier):
    delivered = await NotificationService(mock_notifier).send("event", {"a": 1})

    assert delivered is True
    mock_notifier.notify.assert_awaited_once_with("event", {"a": 1})


def test_logging_notifier_is_default(monkeypatch):
    monkeypatch.setattr(get_settings(), "NOTIFICATION_WEBHOOK_URL", None)

    assert isinstance(get_notification_service().notifier, LoggingNotifier)


def test_webhook_notifier_when_configured(monkeypatch):
    settings = get_settings()
    monkeypatch.setattr(settings, "NOTIFICATION_WEBHOOK_URL", "https://hooks.example.com/x")
    monkeypatch.setattr(settings, "NOTIFICATION_TIMEOUT_SECONDS", 3.0)

    notifier = get_notification_service().notifier

    assert isinstance(notifier, WebhookNotifier)
    assert notifier.url == "https://hooks.example.com/x"
    assert notifier.timeout == 3.0
