"""Project type model grouping the report templates that apply to a kind of work."""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.db.session import Base, utcnow

if TYPE_CHECKING:
    from src.db.models.report_template import ReportTemplate


class ProjectType(Base):
    """Category of work (e.g. audit, inspection) that report templates are bound to."""

    __tablename__ = "project_types"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
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

    templates: Mapped[list["ReportTemplate"]] = relationship(
        "ReportTemplate", back_populates="project_type", passive_deletes=True
    )

    def __repr__(self) -> str:
        return f"<ProjectType(id={self.id}, name={self.name})>"
