"""API endpoints for report template management."""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_current_caller_id
from src.core.rate_limit import authenticated_limit, limiter_authenticated
from src.db.session import get_db_session
from src.schemas.report_template import (
    ReportTemplateCreate,
    ReportTemplateList,
    ReportTemplateRead,
    ReportTemplateUpdate,
)
from src.services.exceptions import ConflictError, NotFoundError
from src.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.services.template_service import TemplateService

router = APIRouter(prefix="/api/report-templates", tags=["report-templates"])

logger = logging.getLogger(__name__)


@router.get("", response_model=ReportTemplateList)
@limiter_authenticated.limit(authenticated_limit)
async def list_templates(
    request: Request,
    project_type_id: UUID | None = Query(None, description="Filter by project type"),
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    db_session: AsyncSession = Depends(get_db_session),
    caller_id: str = Depends(get_current_caller_id),
) -> ReportTemplateList:
    """
    List report templates, newest first.

    When project_type_id is given only that project type's templates are returned.
    """
    service = TemplateService(db_session)
    result = await service.list_templates(
        project_type_id=project_type_id, page=page, page_size=page_size
    )

    return ReportTemplateList(
        items=[ReportTemplateRead.model_validate(t) for t in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", response_model=ReportTemplateRead, status_code=status.HTTP_201_CREATED)
@limiter_authenticated.limit(authenticated_limit)
async def create_template(
    request: Request,
    template_data: ReportTemplateCreate,
    db_session: AsyncSession = Depends(get_db_session),
    caller_id: str = Depends(get_current_caller_id),
) -> ReportTemplateRead:
    """
    Create a new report template.

    Returns 404 if the project type does not exist and 409 if the project type
    already has a template with the same name.
    """
    service = TemplateService(db_session)

    try:
        template = await service.create_template(template_data=template_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    logger.info("Report template %s created by caller_id=%s", template.id, caller_id)
    return ReportTemplateRead.model_validate(template)


@router.get("/{template_id}", response_model=ReportTemplateRead)
@limiter_authenticated.limit(authenticated_limit)
async def get_template(
    request: Request,
    template_id: UUID,
    db_session: AsyncSession = Depends(get_db_session),
    caller_id: str = Depends(get_current_caller_id),
) -> ReportTemplateRead:
    """Get template details by ID."""
    service = TemplateService(db_session)

    try:
        template = await service.get_template_by_id(template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return ReportTemplateRead.model_validate(template)


@router.patch("/{template_id}", response_model=ReportTemplateRead)
@limiter_authenticated.limit(authenticated_limit)
async def update_template(
    request: Request,
    template_id: UUID,
    update_data: ReportTemplateUpdate,
    db_session: AsyncSession = Depends(get_db_session),
    caller_id: str = Depends(get_current_caller_id),
) -> ReportTemplateRead:
    """
    Partially update a template.

    Renaming or moving a template to another project type is rejected with 409
    when the target project type already has a template with that name.
    """
    service = TemplateService(db_session)

    try:
        template = await service.update_template(template_id=template_id, update_data=update_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return ReportTemplateRead.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter_authenticated.limit(authenticated_limit)
async def delete_template(
    request: Request,
    template_id: UUID,
    db_session: AsyncSession = Depends(get_db_session),
    caller_id: str = Depends(get_current_caller_id),
) -> None:
    """
    Delete a template. Returns 204 No Content.

    Templates that already have submissions cannot be deleted (409).
    """
    service = TemplateService(db_session)

    try:
        await service.delete_template(template_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    logger.info("Report template %s deleted by caller_id=%s", template_id, caller_id)
