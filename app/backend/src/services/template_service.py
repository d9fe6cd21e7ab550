"""Service layer for report template management."""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models.project_type import ProjectType
from src.db.models.report_submission import ReportSubmission
from src.db.models.report_template import ReportTemplate
from src.schemas.form_builder import FormSection
from src.schemas.report_template import ReportTemplateCreate, ReportTemplateUpdate
from src.services.exceptions import ConflictError, NotFoundError
from src.services.pagination import DEFAULT_PAGE_SIZE, Page, paginate

logger = logging.getLogger(__name__)

DUPLICATE_NAME_MESSAGE = "Report template with this name already exists for this project type"


def _dump_sections(sections: list[FormSection]) -> list[dict]:
    return [section.model_dump(mode="json") for section in sections]


class TemplateService:
    """Service for managing report templates."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def _get_project_type(self, project_type_id: UUID) -> ProjectType:
        result = await self.db_session.execute(
            select(ProjectType).where(ProjectType.id == project_type_id)
        )
        project_type = result.scalar_one_or_none()
        if not project_type:
            raise NotFoundError(f"Project type with ID {project_type_id} not found")
        return project_type

    async def _find_by_name(
        self, name: str, project_type_id: UUID, exclude_id: UUID | None = None
    ) -> ReportTemplate | None:
        query = select(ReportTemplate).where(
            ReportTemplate.name == name,
            ReportTemplate.project_type_id == project_type_id,
        )
        if exclude_id is not None:
            query = query.where(ReportTemplate.id != exclude_id)
        result = await self.db_session.execute(query)
        return result.scalar_one_or_none()

    async def _commit(self) -> None:
        """Commit, mapping a lost race on the unique constraint to a conflict."""
        try:
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            raise ConflictError(DUPLICATE_NAME_MESSAGE) from e

    async def list_templates(
        self,
        project_type_id: UUID | None = None,
        page: int = 1,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Page[ReportTemplate]:
        """List templates newest first, optionally restricted to one project type."""

        query = select(ReportTemplate)
        if project_type_id:
            query = query.where(ReportTemplate.project_type_id == project_type_id)
        query = query.order_by(ReportTemplate.created_at.desc())

        return await paginate(self.db_session, query, page, page_size)

    async def get_template_by_id(self, template_id: UUID) -> ReportTemplate:
        result = await self.db_session.execute(
            select(ReportTemplate).where(ReportTemplate.id == template_id)
        )
        template = result.scalar_one_or_none()
        if not template:
            raise NotFoundError(f"Report template with ID {template_id} not found")
        return template

    async def create_template(self, template_data: ReportTemplateCreate) -> ReportTemplate:
        """Create a template bound to an existing project type."""

        await self._get_project_type(template_data.project_type_id)

        if await self._find_by_name(template_data.name, template_data.project_type_id):
            raise ConflictError(DUPLICATE_NAME_MESSAGE)

        template = ReportTemplate(
            name=template_data.name,
            description=template_data.description,
            project_type_id=template_data.project_type_id,
            number_of_submissions=template_data.number_of_submissions,
            sections=_dump_sections(template_data.sections),
        )
        self.db_session.add(template)
        await self._commit()
        await self.db_session.refresh(template)

        logger.info(
            "Report template created: id=%s name=%s project_type_id=%s",
            template.id,
            template.name,
            template.project_type_id,
        )
        return template

    async def update_template(
        self,
        template_id: UUID,
        update_data: ReportTemplateUpdate,
    ) -> ReportTemplate:
        """Apply the fields present in ``update_data``.

        The name uniqueness check uses the project type the template will have
        after the update.
        """

        template = await self.get_template_by_id(template_id)
        fields_set = update_data.model_fields_set

        effective_project_type_id = template.project_type_id
        if update_data.project_type_id is not None:
            await self._get_project_type(update_data.project_type_id)
            effective_project_type_id = update_data.project_type_id

        effective_name = update_data.name if update_data.name is not None else template.name
        if (
            effective_name != template.name
            or effective_project_type_id != template.project_type_id
        ):
            if await self._find_by_name(
                effective_name, effective_project_type_id, exclude_id=template.id
            ):
                raise ConflictError(DUPLICATE_NAME_MESSAGE)

        template.name = effective_name
        template.project_type_id = effective_project_type_id
        if "description" in fields_set:
            template.description = update_data.description
        if "number_of_submissions" in fields_set:
            template.number_of_submissions = update_data.number_of_submissions
        if update_data.sections is not None:
            template.sections = _dump_sections(update_data.sections)

        await self._commit()
        await self.db_session.refresh(template)

        logger.info("Report template updated: id=%s fields=%s", template.id, sorted(fields_set))
        return template

    async def delete_template(self, template_id: UUID) -> None:
        """Delete a template that has no submissions."""

        template = await self.get_template_by_id(template_id)

        submission_count = (
            await self.db_session.execute(
                select(func.count())
                .select_from(ReportSubmission)
                .where(ReportSubmission.report_template_id == template_id)
            )
        ).scalar_one()
        if submission_count:
            logger.warning(
                "Refusing to delete report template %s: %d submissions reference it",
                template_id,
                submission_count,
            )
            raise ConflictError(
                f"Report template has {submission_count} submission(s) and cannot be deleted"
            )

        await self.db_session.delete(template)
        await self.db_session.commit()
        logger.info("Report template deleted: id=%s", template_id)
