"""Submission engine: creation, editing and review workflow for report submissions."""

import logging
from typing import Any
from uuid import UUID

from fastapi import BackgroundTasks
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.core.config import get_settings
from src.db.models.report_submission import ReportSubmission, SubmissionStatus
from src.db.models.report_template import ReportTemplate
from src.db.session import utcnow
from src.schemas.report_submission import (
    ReportSubmissionCreate,
    ReportSubmissionUpdate,
    SubmissionSection,
)
from src.services.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ReportDataValidationError,
)
from src.services.notifications import NotificationService, get_notification_service
from src.services.pagination import DEFAULT_PAGE_SIZE, Page, paginate
from src.services.project_service import ProjectDirectory, ProjectService
from src.services.report_data_validator import validate_report_data

logger = logging.getLogger(__name__)

# Legal status changes; APPROVED and REJECTED are terminal.
ALLOWED_TRANSITIONS: dict[SubmissionStatus, frozenset[SubmissionStatus]] = {
    SubmissionStatus.DRAFT: frozenset({SubmissionStatus.SUBMITTED}),
    SubmissionStatus.SUBMITTED: frozenset({SubmissionStatus.APPROVED, SubmissionStatus.REJECTED}),
    SubmissionStatus.APPROVED: frozenset(),
    SubmissionStatus.REJECTED: frozenset(),
}

INITIAL_STATUSES = frozenset({SubmissionStatus.DRAFT, SubmissionStatus.SUBMITTED})

EVENT_SUBMITTED = "report_submission.submitted"
EVENT_APPROVED = "report_submission.approved"
EVENT_REJECTED = "report_submission.rejected"

_STATUS_EVENTS = {
    SubmissionStatus.SUBMITTED: EVENT_SUBMITTED,
    SubmissionStatus.APPROVED: EVENT_APPROVED,
    SubmissionStatus.REJECTED: EVENT_REJECTED,
}


def _dump_report_data(report_data: list[SubmissionSection]) -> list[dict[str, Any]]:
    return [section.model_dump(mode="json") for section in report_data]


def _select_submissions() -> Select:
    """Submissions with the project and template they are returned with."""
    return (
        select(ReportSubmission)
        .options(
            selectinload(ReportSubmission.project),
            selectinload(ReportSubmission.report_template),
        )
        .execution_options(populate_existing=True)
    )


class ReportSubmissionService:
    """Creates report submissions and moves them through the review workflow.

    DRAFT -> SUBMITTED -> APPROVED | REJECTED. Terminal submissions can no
    longer be edited, re-reviewed or deleted.
    """

    def __init__(
        self,
        db_session: AsyncSession,
        projects: ProjectDirectory | None = None,
        notifications: NotificationService | None = None,
        strict_validation: bool | None = None,
        background_tasks: BackgroundTasks | None = None,
    ):
        """Initialize the engine.

        Args:
            db_session: AsyncSession for database operations
            projects: Project existence check (database-backed by default)
            notifications: Notification sender (built from settings by default)
            strict_validation: Validate report data against the template;
                defaults to the REPORT_DATA_STRICT_VALIDATION setting
            background_tasks: When given, notifications are sent after the
                response instead of inside the request
        """
        self.db_session = db_session
        self.projects = projects or ProjectService(db_session)
        self.notifications = notifications or get_notification_service()
        if strict_validation is None:
            strict_validation = get_settings().REPORT_DATA_STRICT_VALIDATION
        self.strict_validation = strict_validation
        self.background_tasks = background_tasks

    async def _ensure_project(self, project_id: UUID) -> None:
        if not await self.projects.exists(project_id):
            raise NotFoundError(f"Project with ID {project_id} not found")

    async def _get_template(self, template_id: UUID, lock: bool = False) -> ReportTemplate:
        query = select(ReportTemplate).where(ReportTemplate.id == template_id)
        if lock:
            # Serialises concurrent creates against the same template's cap
            query = query.with_for_update()
        result = await self.db_session.execute(query)
        template = result.scalar_one_or_none()
        if not template:
            raise NotFoundError(f"Report template with ID {template_id} not found")
        return template

    async def count_submissions(self, project_id: UUID, report_template_id: UUID) -> int:
        """Number of submissions already made for a project/template pair."""
        result = await self.db_session.execute(
            select(func.count())
            .select_from(ReportSubmission)
            .where(
                ReportSubmission.project_id == project_id,
                ReportSubmission.report_template_id == report_template_id,
            )
        )
        return result.scalar_one()

    def _validate(
        self,
        template: ReportTemplate,
        report_data: list[SubmissionSection],
        check_required: bool,
    ) -> None:
        if not self.strict_validation:
            return
        errors = validate_report_data(template.sections or [], report_data, check_required)
        if errors:
            raise ReportDataValidationError(errors)

    @staticmethod
    def _ensure_mutable(submission: ReportSubmission, action: str) -> None:
        if submission.status.is_terminal:
            logger.warning(
                "Rejected %s of terminal report submission %s (status=%s)",
                action,
                submission.id,
                submission.status.value,
            )
            raise InvalidStateError(
                f"Cannot {action} approved or rejected report submissions"
            )

    @staticmethod
    def _ensure_transition(current: SubmissionStatus, target: SubmissionStatus) -> None:
        if target not in ALLOWED_TRANSITIONS[current]:
            raise InvalidStateError(
                f"Cannot change report submission status from {current.value} to {target.value}"
            )

    @staticmethod
    def _apply_status(
        submission: ReportSubmission, status: SubmissionStatus, comments: str | None = None
    ) -> None:
        now = utcnow()
        submission.status = status
        if status == SubmissionStatus.SUBMITTED:
            submission.submitted_at = now
        elif status == SubmissionStatus.APPROVED:
            submission.approved_at = now
            submission.approval_comments = comments
        elif status == SubmissionStatus.REJECTED:
            submission.rejected_at = now
            submission.rejection_comments = comments

    async def _notify(self, submission: ReportSubmission, comments: str | None = None) -> None:
        event = _STATUS_EVENTS.get(submission.status)
        if event is None:
            return
        payload = {
            "submission_id": str(submission.id),
            "project_id": str(submission.project_id),
            "report_template_id": str(submission.report_template_id),
            "status": submission.status.value,
            "comments": comments,
        }
        if self.background_tasks is not None:
            self.background_tasks.add_task(self.notifications.send, event, payload)
        else:
            await self.notifications.send(event, payload)

    async def _save(self, submission: ReportSubmission) -> ReportSubmission:
        await self.db_session.commit()
        result = await self.db_session.execute(
            _select_submissions().where(ReportSubmission.id == submission.id)
        )
        return result.scalar_one()

    async def create_submission(self, data: ReportSubmissionCreate) -> ReportSubmission:
        """Create a submission for an existing project and template.

        Raises:
            NotFoundError: If the project or template does not exist
            InvalidStateError: If the requested initial status is terminal
            ConflictError: If the template's submission cap is reached for the project
            ReportDataValidationError: If strict validation rejects the report data
        """
        status = data.status or SubmissionStatus.DRAFT
        if status not in INITIAL_STATUSES:
            raise InvalidStateError(
                f"Report submissions cannot be created with status {status.value}"
            )

        await self._ensure_project(data.project_id)
        template = await self._get_template(data.report_template_id, lock=True)

        if template.number_of_submissions is not None:
            existing = await self.count_submissions(data.project_id, template.id)
            if existing >= template.number_of_submissions:
                logger.warning(
                    "Submission cap reached: project_id=%s template_id=%s cap=%d",
                    data.project_id,
                    template.id,
                    template.number_of_submissions,
                )
                raise ConflictError(
                    "Maximum number of submissions reached for this project and template"
                )

        report_data = data.report_data or []
        self._validate(template, report_data, check_required=status == SubmissionStatus.SUBMITTED)

        submission = ReportSubmission(
            project_id=data.project_id,
            report_template_id=template.id,
            status=SubmissionStatus.DRAFT,
            report_data=_dump_report_data(report_data),
        )
        if status != SubmissionStatus.DRAFT:
            self._apply_status(submission, status)
        self.db_session.add(submission)
        await self._save(submission)

        logger.info(
            "Report submission created: id=%s project_id=%s template_id=%s status=%s",
            submission.id,
            submission.project_id,
            submission.report_template_id,
            submission.status.value,
        )
        await self._notify(submission)
        return submission

    async def get_submission(self, submission_id: UUID) -> ReportSubmission:
        result = await self.db_session.execute(
            _select_submissions().where(ReportSubmission.id == submission_id)
        )
        submission = result.scalar_one_or_none()
        if not submission:
            raise NotFoundError(f"Report submission with ID {submission_id} not found")
        return submission

    async def update_submission(
        self, submission_id: UUID, data: ReportSubmissionUpdate
    ) -> ReportSubmission:
        """Replace report data and/or move the status along a legal transition."""
        submission = await self.get_submission(submission_id)
        self._ensure_mutable(submission, "update")

        target_status = data.status or submission.status
        status_changed = target_status != submission.status
        if status_changed:
            self._ensure_transition(submission.status, target_status)

        if data.report_data is not None or (
            status_changed and target_status == SubmissionStatus.SUBMITTED
        ):
            template = await self._get_template(submission.report_template_id)
            report_data = (
                data.report_data
                if data.report_data is not None
                else [SubmissionSection.model_validate(s) for s in submission.report_data or []]
            )
            self._validate(
                template, report_data, check_required=target_status == SubmissionStatus.SUBMITTED
            )
            if data.report_data is not None:
                submission.report_data = _dump_report_data(data.report_data)

        if status_changed:
            self._apply_status(submission, target_status)

        await self._save(submission)
        logger.info(
            "Report submission updated: id=%s status=%s", submission.id, submission.status.value
        )
        if status_changed:
            await self._notify(submission)
        return submission

    async def submit_for_approval(self, submission_id: UUID) -> ReportSubmission:
        """Move a DRAFT submission to SUBMITTED."""
        submission = await self.get_submission(submission_id)
        if submission.status != SubmissionStatus.DRAFT:
            raise InvalidStateError(
                "Only draft reports can be submitted for approval "
                f"(current status: {submission.status.value})"
            )

        if self.strict_validation:
            template = await self._get_template(submission.report_template_id)
            report_data = [
                SubmissionSection.model_validate(s) for s in submission.report_data or []
            ]
            self._validate(template, report_data, check_required=True)

        self._apply_status(submission, SubmissionStatus.SUBMITTED)
        await self._save(submission)

        logger.info("Report submission %s submitted for approval", submission.id)
        await self._notify(submission)
        return submission

    async def approve_submission(
        self, submission_id: UUID, comments: str | None = None
    ) -> ReportSubmission:
        """Approve a SUBMITTED submission."""
        return await self._decide(submission_id, SubmissionStatus.APPROVED, comments)

    async def reject_submission(
        self, submission_id: UUID, comments: str | None = None
    ) -> ReportSubmission:
        """Reject a SUBMITTED submission."""
        return await self._decide(submission_id, SubmissionStatus.REJECTED, comments)

    async def _decide(
        self, submission_id: UUID, decision: SubmissionStatus, comments: str | None
    ) -> ReportSubmission:
        submission = await self.get_submission(submission_id)
        if submission.status != SubmissionStatus.SUBMITTED:
            verb = "approved" if decision == SubmissionStatus.APPROVED else "rejected"
            raise InvalidStateError(
                f"Only submitted reports can be {verb} "
                f"(current status: {submission.status.value})"
            )

        self._apply_status(submission, decision, comments)
        await self._save(submission)

        logger.info("Report submission %s %s", submission.id, decision.value.lower())
        await self._notify(submission, comments)
        return submission

    async def delete_submission(self, submission_id: UUID) -> None:
        submission = await self.get_submission(submission_id)
        self._ensure_mutable(submission, "delete")

        await self.db_session.delete(submission)
        await self.db_session.commit()
        logger.info("Report submission deleted: id=%s", submission_id)

    async def list_submissions(
        self,
        status: SubmissionStatus | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ReportSubmission]:
        """List submissions newest first, optionally filtered by status."""
        query = _select_submissions()
        if status is not None:
            query = query.where(ReportSubmission.status == status)
        query = query.order_by(ReportSubmission.created_at.desc())
        return await paginate(self.db_session, query, page, page_size)

    async def list_by_project(
        self,
        project_id: UUID,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ReportSubmission]:
        await self._ensure_project(project_id)
        query = (
            _select_submissions()
            .where(ReportSubmission.project_id == project_id)
            .order_by(ReportSubmission.created_at.desc())
        )
        return await paginate(self.db_session, query, page, page_size)

    async def list_by_project_and_status(
        self, project_id: UUID, status: SubmissionStatus
    ) -> list[ReportSubmission]:
        await self._ensure_project(project_id)
        result = await self.db_session.execute(
            _select_submissions()
            .where(
                ReportSubmission.project_id == project_id,
                ReportSubmission.status == status,
            )
            .order_by(ReportSubmission.created_at.desc())
        )
        return list(result.scalars().all())
