"""Pydantic schemas for report submissions and their statistics."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from src.db.models.report_submission import SubmissionStatus
from src.schemas.form_builder import FieldType
from src.schemas.report_template import ReportTemplateRead


class FieldValue(BaseModel):
    """Captured value for a single template field."""

    id: str = Field(..., min_length=1, description="Template field id")
    name: str = Field(..., min_length=1, description="Field label at capture time")
    value: JsonValue = None
    type: FieldType


class SubmissionSection(BaseModel):
    """Captured values for one template section."""

    id: str = Field(..., min_length=1, description="Template section id")
    name: str = Field(..., min_length=1)
    description: str | None = None
    data: list[FieldValue] = Field(default_factory=list)


class ReportSubmissionCreate(BaseModel):
    """Schema for creating a report submission."""

    project_id: UUID
    report_template_id: UUID
    report_data: list[SubmissionSection] | None = None
    status: SubmissionStatus | None = Field(
        None, description="Initial status (DRAFT when omitted)"
    )


class ReportSubmissionUpdate(BaseModel):
    """Schema for partially updating a report submission."""

    report_data: list[SubmissionSection] | None = None
    status: SubmissionStatus | None = None


class ReviewDecision(BaseModel):
    """Body for approve/reject requests."""

    comments: str | None = Field(None, max_length=2000)


class ProjectSummary(BaseModel):
    """Project a submission belongs to."""

    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class ReportSubmissionRead(BaseModel):
    """Schema for reading a report submission."""

    id: UUID
    project_id: UUID
    report_template_id: UUID
    status: SubmissionStatus
    report_data: list[SubmissionSection]
    approval_comments: str | None
    rejection_comments: str | None
    submitted_at: datetime | None
    approved_at: datetime | None
    rejected_at: datetime | None
    created_at: datetime
    updated_at: datetime
    project: ProjectSummary
    report_template: ReportTemplateRead = Field(
        ..., description="Template the report data answers, including its sections"
    )

    model_config = ConfigDict(from_attributes=True)


class ReportSubmissionList(BaseModel):
    """Paginated report submissions."""

    items: list[ReportSubmissionRead]
    total: int
    page: int
    page_size: int
    total_pages: int


class ReportStatistics(BaseModel):
    """Aggregate submission counts."""

    total: int
    draft: int
    submitted: int
    approved: int
    rejected: int
    pending_review: int
    completion_rate: float = Field(..., description="Percentage of decided submissions (0-100)")
