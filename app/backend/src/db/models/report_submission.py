"""ReportSubmission model holding captured report data and its review status."""

import enum
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index, Text, Uuid, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.session import Base, JSONDocument, utcnow

if TYPE_CHECKING:
    from src.db.models.project import Project
    from src.db.models.report_template import ReportTemplate


class SubmissionStatus(enum.Enum):
    """Report submission status enum."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self in (SubmissionStatus.APPROVED, SubmissionStatus.REJECTED)


class ReportSubmission(Base):
    """ReportSubmission model - data captured against a template for a project."""

    __tablename__ = "report_submissions"
    __table_args__ = (
        Index("ix_report_submissions_project_template", "project_id", "report_template_id"),
    )

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4, index=True)
    project_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("projects.id", ondelete="RESTRICT"), index=True, nullable=False
    )
    report_template_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("report_templates.id", ondelete="RESTRICT"), index=True, nullable=False
    )
    status: Mapped[SubmissionStatus] = mapped_column(
        SQLEnum(SubmissionStatus, native_enum=False, length=20),
        nullable=False,
        default=SubmissionStatus.DRAFT,
        index=True,
    )
    report_data: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)

    approval_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    rejected_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )

    # Relationships
    project: Mapped["Project"] = relationship("Project")
    report_template: Mapped["ReportTemplate"] = relationship("ReportTemplate")

    def __repr__(self) -> str:
        return (
            f"<ReportSubmission(id={self.id}, status={self.status.value}, "
            f"project_id={self.project_id})>"
        )
