"""API endpoints for report submissions and their review workflow."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_current_caller_id
from src.core.rate_limit import authenticated_limit, limiter_authenticated
from src.db.models.report_submission import SubmissionStatus
from src.db.session import get_db
from src.schemas.report_submission import (
    ReportStatistics,
    ReportSubmissionCreate,
    ReportSubmissionList,
    ReportSubmissionRead,
    ReportSubmissionUpdate,
    ReviewDecision,
)
from src.services.exceptions import (
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ReportDataValidationError,
)
from src.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Page
from src.services.report_submission_service import ReportSubmissionService
from src.services.statistics_service import StatisticsService

router = APIRouter(prefix="/api/reports", tags=["reports"])

logger = logging.getLogger(__name__)

CallerId = Annotated[str, Depends(get_current_caller_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def _to_http_exception(error: Exception) -> HTTPException:
    """Map a submission service error onto its HTTP status."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ConflictError):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(error))
    if isinstance(error, ReportDataValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail={"message": str(error), "errors": error.errors},
        )
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def _to_list(page: Page) -> ReportSubmissionList:
    return ReportSubmissionList(
        items=[ReportSubmissionRead.model_validate(s) for s in page.items],
        total=page.total,
        page=page.page,
        page_size=page.page_size,
        total_pages=page.total_pages,
    )


@router.post("", response_model=ReportSubmissionRead, status_code=status.HTTP_201_CREATED)
@limiter_authenticated.limit(authenticated_limit)
async def create_report(
    request: Request,
    submission_data: ReportSubmissionCreate,
    caller_id: CallerId,
    db: DbSession,
    background_tasks: BackgroundTasks,
) -> ReportSubmissionRead:
    """
    Create a report submission for a project using a template.

    Errors:
    - 404: project or template not found
    - 409: the template's submission cap is reached for this project
    - 400: requested initial status is not DRAFT or SUBMITTED
    - 422: report data does not match the template (strict validation only)
    """
    service = ReportSubmissionService(db, background_tasks=background_tasks)
    try:
        submission = await service.create_submission(submission_data)
    except (NotFoundError, ConflictError, InvalidStateError, ReportDataValidationError) as e:
        raise _to_http_exception(e) from e

    logger.info("Report submission %s created by caller_id=%s", submission.id, caller_id)
    return ReportSubmissionRead.model_validate(submission)


@router.get("", response_model=ReportSubmissionList)
@limiter_authenticated.limit(authenticated_limit)
async def list_reports(
    request: Request,
    caller_id: CallerId,
    db: DbSession,
    status_filter: SubmissionStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> ReportSubmissionList:
    """List report submissions newest first, optionally filtered by status."""
    service = ReportSubmissionService(db)
    result = await service.list_submissions(status=status_filter, page=page, page_size=page_size)
    return _to_list(result)


@router.get("/statistics", response_model=ReportStatistics)
@limiter_authenticated.limit(authenticated_limit)
async def get_report_statistics(
    request: Request,
    caller_id: CallerId,
    db: DbSession,
    project_id: UUID | None = Query(None, description="Restrict counts to one project"),
) -> ReportStatistics:
    """Submission counts per status and the share of reviewed submissions."""
    return await StatisticsService(db).get_statistics(project_id=project_id)


@router.get("/project/{project_id}", response_model=ReportSubmissionList)
@limiter_authenticated.limit(authenticated_limit)
async def list_project_reports(
    request: Request,
    project_id: UUID,
    caller_id: CallerId,
    db: DbSession,
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> ReportSubmissionList:
    """List a project's report submissions."""
    service = ReportSubmissionService(db)
    try:
        result = await service.list_by_project(project_id, page=page, page_size=page_size)
    except NotFoundError as e:
        raise _to_http_exception(e) from e
    return _to_list(result)


@router.get(
    "/project/{project_id}/status/{submission_status}",
    response_model=list[ReportSubmissionRead],
)
@limiter_authenticated.limit(authenticated_limit)
async def list_project_reports_by_status(
    request: Request,
    project_id: UUID,
    submission_status: SubmissionStatus,
    caller_id: CallerId,
    db: DbSession,
) -> list[ReportSubmissionRead]:
    """List a project's report submissions in one status."""
    service = ReportSubmissionService(db)
    try:
        submissions = await service.list_by_project_and_status(project_id, submission_status)
    except NotFoundError as e:
        raise _to_http_exception(e) from e
    return [ReportSubmissionRead.model_validate(s) for s in submissions]


@router.get("/{submission_id}", response_model=ReportSubmissionRead)
@limiter_authenticated.limit(authenticated_limit)
async def get_report(
    request: Request,
    submission_id: UUID,
    caller_id: CallerId,
    db: DbSession,
) -> ReportSubmissionRead:
    service = ReportSubmissionService(db)
    try:
        submission = await service.get_submission(submission_id)
    except NotFoundError as e:
        raise _to_http_exception(e) from e
    return ReportSubmissionRead.model_validate(submission)


@router.patch("/{submission_id}", response_model=ReportSubmissionRead)
@limiter_authenticated.limit(authenticated_limit)
async def update_report(
    request: Request,
    submission_id: UUID,
    update_data: ReportSubmissionUpdate,
    caller_id: CallerId,
    db: DbSession,
    background_tasks: BackgroundTasks,
) -> ReportSubmissionRead:
    """
    Edit report data and/or move the status along a legal transition.

    Approved and rejected submissions cannot be edited (400).
    """
    service = ReportSubmissionService(db, background_tasks=background_tasks)
    try:
        submission = await service.update_submission(submission_id, update_data)
    except (NotFoundError, InvalidStateError, ReportDataValidationError) as e:
        raise _to_http_exception(e) from e
    return ReportSubmissionRead.model_validate(submission)


@router.delete("/{submission_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter_authenticated.limit(authenticated_limit)
async def delete_report(
    request: Request,
    submission_id: UUID,
    caller_id: CallerId,
    db: DbSession,
) -> None:
    """
    Delete a draft or submitted report.

    Returns 204 No Content. Reviewed reports are kept (400).
    """
    service = ReportSubmissionService(db)
    try:
        await service.delete_submission(submission_id)
    except (NotFoundError, InvalidStateError) as e:
        raise _to_http_exception(e) from e

    logger.info("Report submission %s deleted by caller_id=%s", submission_id, caller_id)


@router.post("/{submission_id}/submit", response_model=ReportSubmissionRead)
@limiter_authenticated.limit(authenticated_limit)
async def submit_report(
    request: Request,
    submission_id: UUID,
    caller_id: CallerId,
    db: DbSession,
    background_tasks: BackgroundTasks,
) -> ReportSubmissionRead:
    """Submit a draft report for approval."""
    service = ReportSubmissionService(db, background_tasks=background_tasks)
    try:
        submission = await service.submit_for_approval(submission_id)
    except (NotFoundError, InvalidStateError, ReportDataValidationError) as e:
        raise _to_http_exception(e) from e

    logger.info("Report submission %s submitted by caller_id=%s", submission_id, caller_id)
    return ReportSubmissionRead.model_validate(submission)


@router.post("/{submission_id}/approve", response_model=ReportSubmissionRead)
@limiter_authenticated.limit(authenticated_limit)
async def approve_report(
    request: Request,
    submission_id: UUID,
    caller_id: CallerId,
    db: DbSession,
    background_tasks: BackgroundTasks,
    decision: ReviewDecision | None = None,
) -> ReportSubmissionRead:
    """Approve a submitted report, with optional reviewer comments."""
    service = ReportSubmissionService(db, background_tasks=background_tasks)
    comments = decision.comments if decision else None
    try:
        submission = await service.approve_submission(submission_id, comments)
    except (NotFoundError, InvalidStateError) as e:
        raise _to_http_exception(e) from e

    logger.info("Report submission %s approved by caller_id=%s", submission_id, caller_id)
    return ReportSubmissionRead.model_validate(submission)


@router.post("/{submission_id}/reject", response_model=ReportSubmissionRead)
@limiter_authenticated.limit(authenticated_limit)
async def reject_report(
    request: Request,
    submission_id: UUID,
    caller_id: CallerId,
    db: DbSession,
    background_tasks: BackgroundTasks,
    decision: ReviewDecision | None = None,
) -> ReportSubmissionRead:
    """Reject a submitted report, with optional reviewer comments."""
    service = ReportSubmissionService(db, background_tasks=background_tasks)
    comments = decision.comments if decision else None
    try:
        submission = await service.reject_submission(submission_id, comments)
    except (NotFoundError, InvalidStateError) as e:
        raise _to_http_exception(e) from e

    logger.info("Report submission %s rejected by caller_id=%s", submission_id, caller_id)
    return ReportSubmissionRead.model_validate(submission)
