"""Centralized test fixtures.

This module re-exports all fixtures from fixture modules so conftest.py can
pull them in with a single star import.
"""

from .auth import caller_headers
from .client import client
from .database import db_session, test_engine
from .mocks import avoid_external_requests, clear_rate_limits, mock_notifier, notification_service
from .projects import other_project, test_project
from .submissions import (
    approved_submission,
    draft_submission,
    make_submission,
    rejected_submission,
    submitted_submission,
)
from .templates import capped_template, project_type_commercial, test_project_type, test_template

__all__ = [
    "test_engine",
    "db_session",
    "caller_headers",
    "client",
    "test_project_type",
    "project_type_commercial",
    "test_template",
    "capped_template",
    "test_project",
    "other_project",
    "make_submission",
    "draft_submission",
    "submitted_submission",
    "approved_submission",
    "rejected_submission",
    "avoid_external_requests",
    "clear_rate_limits",
    "mock_notifier",
    "notification_service",
]
