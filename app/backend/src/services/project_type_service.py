"""Service layer for project type management."""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models.project_type import ProjectType
from src.db.models.report_template import ReportTemplate
from src.schemas.project_type import ProjectTypeCreate, ProjectTypeUpdate
from src.services.exceptions import ConflictError, NotFoundError
from src.services.pagination import DEFAULT_PAGE_SIZE, Page, paginate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Project type with this name already exists"


class ProjectTypeService:
    """Service for managing project types."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def _get_by_name(self, name: str) -> ProjectType | None:
        result = await self.db_session.execute(select(ProjectType).where(ProjectType.name == name))
        return result.scalar_one_or_none()

    async def _commit(self) -> None:
        """Commit, mapping a lost race on the unique name to a conflict."""
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from e

    async def get_project_type(self, project_type_id: UUID) -> ProjectType:
        result = await self.db_session.execute(
            select(ProjectType).where(ProjectType.id == project_type_id)
        )
        project_type = result.scalar_one_or_none()
        if not project_type:
            raise NotFoundError(f"Project type with ID {project_type_id} not found")
        return project_type

    async def list_project_types(
        self, page: int = 1, page_size: int = DEFAULT_PAGE_SIZE
    ) -> Page[ProjectType]:
        query = select(ProjectType).order_by(ProjectType.created_at.desc())
        return await paginate(self.db_session, query, page, page_size)

    async def create_project_type(self, data: ProjectTypeCreate) -> ProjectType:
        if await self._get_by_name(data.name):
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

        project_type = ProjectType(name=data.name, description=data.description)
        self.db_session.add(project_type)
        await self._commit()
        await self.db_session.refresh(project_type)

        logger.info("Project type created: id=%s name=%s", project_type.id, project_type.name)
        return project_type

    async def update_project_type(
        self, project_type_id: UUID, data: ProjectTypeUpdate
    ) -> ProjectType:
        project_type = await self.get_project_type(project_type_id)

        if data.name is not None and data.name != project_type.name:
            if await self._get_by_name(data.name):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)
            project_type.name = data.name
        if "description" in data.model_fields_set:
            project_type.description = data.description

        await self._commit()
        await self.db_session.refresh(project_type)

        logger.info("Project type updated: id=%s name=%s", project_type.id, project_type.name)
        return project_type

    async def delete_project_type(self, project_type_id: UUID) -> None:
        """Delete a project type that no template references."""
        project_type = await self.get_project_type(project_type_id)

        template_count = (
            await self.db_session.execute(
                select(func.count())
                .select_from(ReportTemplate)
                .where(ReportTemplate.project_type_id == project_type_id)
            )
        ).scalar_one()
        if template_count:
            logger.warning(
                "Refusing to delete project type %s: %d templates reference it",
                project_type_id,
                template_count,
            )
            raise ConflictError(
                f"Project type has {template_count} report template(s); delete them first"
            )

        await self.db_session.delete(project_type)
        await self.db_session.commit()
        logger.info("Project type deleted: id=%s", project_type_id)
