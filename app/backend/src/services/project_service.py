"""Read-only access to projects owned by the project management service."""

from typing import Protocol
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models.project import Project


class ProjectDirectory(Protocol):
    """Existence check the submission engine needs for project references."""

    async def exists(self, project_id: UUID) -> bool: ...


class ProjectService:
    """Database-backed ``ProjectDirectory``."""

    def __init__(self, db_session: AsyncSession):
        self.db_session = db_session

    async def exists(self, project_id: UUID) -> bool:
        result = await self.db_session.execute(select(Project.id).where(Project.id == project_id))
        return result.scalar_one_or_none() is not None
