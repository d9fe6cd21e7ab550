"""API endpoints for project type management."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.dependencies import get_current_caller_id
from src.core.rate_limit import authenticated_limit, limiter_authenticated
from src.db.session import get_db
from src.schemas.project_type import (
    ProjectTypeCreate,
    ProjectTypeList,
    ProjectTypeRead,
    ProjectTypeUpdate,
)
from src.services.exceptions import ConflictError, NotFoundError
from src.services.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from src.services.project_type_service import ProjectTypeService

router = APIRouter(prefix="/api/project-types", tags=["project-types"])

logger = logging.getLogger(__name__)


@router.get("", response_model=ProjectTypeList)
@limiter_authenticated.limit(authenticated_limit)
async def list_project_types(
    request: Request,
    caller_id: Annotated[str, Depends(get_current_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
) -> ProjectTypeList:
    """List project types, newest first."""
    service = ProjectTypeService(db)
    result = await service.list_project_types(page=page, page_size=page_size)

    return ProjectTypeList(
        items=[ProjectTypeRead.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        total_pages=result.total_pages,
    )


@router.post("", response_model=ProjectTypeRead, status_code=status.HTTP_201_CREATED)
@limiter_authenticated.limit(authenticated_limit)
async def create_project_type(
    request: Request,
    project_type_data: ProjectTypeCreate,
    caller_id: Annotated[str, Depends(get_current_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProjectTypeRead:
    """Create a project type with a unique name."""
    service = ProjectTypeService(db)

    try:
        project_type = await service.create_project_type(project_type_data)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    logger.info("Project type %s created by caller_id=%s", project_type.id, caller_id)
    return ProjectTypeRead.model_validate(project_type)


@router.get("/{project_type_id}", response_model=ProjectTypeRead)
@limiter_authenticated.limit(authenticated_limit)
async def get_project_type(
    request: Request,
    project_type_id: UUID,
    caller_id: Annotated[str, Depends(get_current_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProjectTypeRead:
    """Get a project type by ID."""
    service = ProjectTypeService(db)

    try:
        project_type = await service.get_project_type(project_type_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return ProjectTypeRead.model_validate(project_type)


@router.patch("/{project_type_id}", response_model=ProjectTypeRead)
@limiter_authenticated.limit(authenticated_limit)
async def update_project_type(
    request: Request,
    project_type_id: UUID,
    update_data: ProjectTypeUpdate,
    caller_id: Annotated[str, Depends(get_current_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProjectTypeRead:
    """Rename or re-describe a project type."""
    service = ProjectTypeService(db)

    try:
        project_type = await service.update_project_type(project_type_id, update_data)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    return ProjectTypeRead.model_validate(project_type)


@router.delete("/{project_type_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter_authenticated.limit(authenticated_limit)
async def delete_project_type(
    request: Request,
    project_type_id: UUID,
    caller_id: Annotated[str, Depends(get_current_caller_id)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> None:
    """Delete a project type that has no report templates. Returns 204 No Content."""
    service = ProjectTypeService(db)

    try:
        await service.delete_project_type(project_type_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e

    logger.info("Project type %s deleted by caller_id=%s", project_type_id, caller_id)
