"""Tests for logging configuration and request logging."""

import json
import logging

import pytest
from httpx import AsyncClient

from src.core.config import get_settings
from src.core.logging_config.setup import JSONFormatter, configure_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    root.handlers = handlers
    root.setLevel(level)


def test_json_formatter_includes_request_fields():
    record = logging.LogRecord(
        name="src.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="HTTP %s %s",
        args=("GET", "/api/reports"),
        exc_info=None,
    )
    record.caller_id = "agent-123"
    record.status_code = 200

    entry = json.loads(JSONFormatter().format(record))

    assert entry["message"] == "HTTP GET /api/reports"
    assert entry["level"] == "INFO"
    assert entry["caller_id"] == "agent-123"
    assert entry["status_code"] == 200
    assert "duration_ms" not in entry


def test_configure_logging_uses_json_outside_development(monkeypatch, restore_root_logger):
    settings = get_settings()
    monkeypatch.setattr(settings, "ENVIRONMENT", "production")
    monkeypatch.setattr(settings, "LOG_LEVEL", "warning")

    configure_logging()

    assert len(restore_root_logger.handlers) == 1
    assert isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
    assert restore_root_logger.level == logging.WARNING


def test_configure_logging_readable_in_tests(restore_root_logger):
    configure_logging()

    assert not isinstance(restore_root_logger.handlers[0].formatter, JSONFormatter)
    assert restore_root_logger.level == logging.INFO


@pytest.mark.asyncio
async def test_requests_are_logged_with_caller_id(client: AsyncClient, caller_headers, caplog):
    with caplog.at_level(logging.INFO, logger="src.core.logging_config.middleware"):
        await client.get("/api/project-types", headers=caller_headers)

    records = [r for r in caplog.records if r.name == "src.core.logging_config.middleware"]
    assert len(records) == 1
    assert records[0].caller_id == "agent-123"
    assert records[0].status_code == 200
    assert records[0].path == "/api/project-types"
