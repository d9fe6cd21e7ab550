"""ReportTemplate model storing admin-defined form schemas."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text, UniqueConstraint, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.session import Base, JSONDocument, utcnow

if TYPE_CHECKING:
    from src.db.models.project_type import ProjectType


class ReportTemplate(Base):
    """ReportTemplate model - ordered sections of typed fields for a project type."""

    __tablename__ = "report_templates"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_type_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("project_types.id", ondelete="RESTRICT"), index=True, nullable=False
    )
    number_of_submissions: Mapped[int | None] = mapped_column(Integer, nullable=True)
    sections: Mapped[list] = mapped_column(JSONDocument, nullable=False, default=list)

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

    # Template names are unique per project type
    __table_args__ = (
        UniqueConstraint("name", "project_type_id", name="uq_report_template_name_project_type"),
    )

    project_type: Mapped["ProjectType"] = relationship("ProjectType", back_populates="templates")

    def __repr__(self) -> str:
        return f"<ReportTemplate(id={self.id}, name={self.name})>"
