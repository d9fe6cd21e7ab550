"""Pydantic schemas for report templates."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.schemas.form_builder import FormSection, normalize_sections


class ReportTemplateBase(BaseModel):
    """Base schema for report template."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    project_type_id: UUID
    number_of_submissions: int | None = Field(
        None, ge=1, description="Maximum submissions per project (unlimited when omitted)"
    )
    sections: list[FormSection] = Field(default_factory=list)

    @field_validator("sections")
    @classmethod
    def validate_sections(cls, v: list[FormSection]) -> list[FormSection]:
        return normalize_sections(v)


class ReportTemplateCreate(ReportTemplateBase):
    """Schema for creating a new template."""

    pass


class ReportTemplateUpdate(BaseModel):
    """Schema for partially updating a template.

    Only fields present in the request body are applied.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    project_type_id: UUID | None = None
    number_of_submissions: int | None = Field(None, ge=1)
    sections: list[FormSection] | None = None

    @field_validator("name", "project_type_id", "sections")
    @classmethod
    def reject_null(cls, v: object) -> object:
        # Omit a field to leave it unchanged; these columns cannot be cleared.
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("sections")
    @classmethod
    def validate_sections(cls, v: list[FormSection]) -> list[FormSection]:
        return normalize_sections(v)


class ReportTemplateRead(ReportTemplateBase):
    """Schema for reading a template."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReportTemplateList(BaseModel):
    """Paginated report templates."""

    items: list[ReportTemplateRead]
    total: int
    page: int
    page_size: int
    total_pages: int
