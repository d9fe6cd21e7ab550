"""Pydantic schemas for project types."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProjectTypeBase(BaseModel):
    """Base schema for project type."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=500)


class ProjectTypeCreate(ProjectTypeBase):
    """Schema for creating a project type."""

    pass


class ProjectTypeUpdate(BaseModel):
    """Schema for partially updating a project type."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("may not be null")
        return v


class ProjectTypeRead(ProjectTypeBase):
    """Schema for reading a project type."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProjectTypeList(BaseModel):
    """Paginated project types."""

    items: list[ProjectTypeRead]
    total: int
    page: int
    page_size: int
    total_pages: int
