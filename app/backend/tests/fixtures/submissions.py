"""Report submission test fixtures."""

from collections.abc import Awaitable, Callable
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models.project import Project
from src.db.models.report_submission import ReportSubmission, SubmissionStatus
from src.db.models.report_template import ReportTemplate
from src.db.session import utcnow

COMPLETE_REPORT_DATA: list[dict[str, Any]] = [
    {
        "id": "site",
        "name": "Site inspection",
        "description": None,
        "data": [
            {"id": "inspector", "name": "Inspector name", "value": "Dana Lee", "type": "text"},
            {"id": "condition", "name": "Overall condition", "value": "Good", "type": "dropdown"},
        ],
    },
]

SubmissionFactory = Callable[..., Awaitable[ReportSubmission]]


@pytest.fixture
def make_submission(
    db_session: AsyncSession, test_project: Project, test_template: ReportTemplate
) -> SubmissionFactory:
    """Factory inserting submissions directly, bypassing workflow checks.

    Defaults to the test project and template; lifecycle timestamps are set to
    match the requested status.
    """

    async def _make(
        status: SubmissionStatus = SubmissionStatus.DRAFT,
        project: Project | None = None,
        template: ReportTemplate | None = None,
        report_data: list[dict[str, Any]] | None = None,
    ) -> ReportSubmission:
        now = utcnow()
        submission = ReportSubmission(
            project_id=(project or test_project).id,
            report_template_id=(template or test_template).id,
            status=status,
            report_data=COMPLETE_REPORT_DATA if report_data is None else report_data,
        )
        if status != SubmissionStatus.DRAFT:
            submission.submitted_at = now
        if status == SubmissionStatus.APPROVED:
            submission.approved_at = now
        if status == SubmissionStatus.REJECTED:
            submission.rejected_at = now
        db_session.add(submission)
        await db_session.commit()
        await db_session.refresh(submission)
        return submission

    return _make


@pytest.fixture
async def draft_submission(make_submission: SubmissionFactory) -> ReportSubmission:
    return await make_submission(SubmissionStatus.DRAFT)


@pytest.fixture
async def submitted_submission(make_submission: SubmissionFactory) -> ReportSubmission:
    return await make_submission(SubmissionStatus.SUBMITTED)


@pytest.fixture
async def approved_submission(make_submission: SubmissionFactory) -> ReportSubmission:
    return await make_submission(SubmissionStatus.APPROVED)


@pytest.fixture
async def rejected_submission(make_submission: SubmissionFactory) -> ReportSubmission:
    return await make_submission(SubmissionStatus.REJECTED)
