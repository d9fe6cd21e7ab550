"""Service for aggregating report submission statistics."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models.report_submission import ReportSubmission, SubmissionStatus
from src.schemas.report_submission import ReportStatistics

logger = logging.getLogger(__name__)


class StatisticsService:
    """Read-only projection over report submissions."""

    def __init__(self, db_session: AsyncSession):
        """Initialize statistics service with database session.

        Args:
            db_session: AsyncSession for database operations
        """
        self.db_session = db_session

    async def get_statistics(self, project_id: UUID | None = None) -> ReportStatistics:
        """Count submissions per status.

        Args:
            project_id: Restrict the counts to one project

        Returns:
            ReportStatistics where the per-status counts partition ``total`` and
            ``completion_rate`` is the percentage of approved or rejected submissions
        """
        statuses = list(SubmissionStatus)
        query = select(
            func.count(),
            *(func.count().filter(ReportSubmission.status == status) for status in statuses),
        ).select_from(ReportSubmission)
        if project_id is not None:
            query = query.where(ReportSubmission.project_id == project_id)

        total, *per_status = (await self.db_session.execute(query)).one()
        counts = dict(zip(statuses, per_status))

        decided = counts[SubmissionStatus.APPROVED] + counts[SubmissionStatus.REJECTED]
        completion_rate = decided / total * 100 if total > 0 else 0.0

        statistics = ReportStatistics(
            total=total,
            draft=counts[SubmissionStatus.DRAFT],
            submitted=counts[SubmissionStatus.SUBMITTED],
            approved=counts[SubmissionStatus.APPROVED],
            rejected=counts[SubmissionStatus.REJECTED],
            pending_review=counts[SubmissionStatus.SUBMITTED],
            completion_rate=round(completion_rate, 2),
        )
        logger.debug("Calculated report statistics (project_id=%s): %s", project_id, statistics)
        return statistics
