"""Project model referenced by report submissions."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.db.session import Base, utcnow


class Project(Base):
    """Project assigned to an agent and a customer.

    Accounts live in the identity service; ``assigned_agent_id`` and
    ``customer_id`` are opaque references to them.
    """

    __tablename__ = "projects"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    project_type_id: Mapped[UUID | None] = mapped_column(
        Uuid, ForeignKey("project_types.id", ondelete="SET NULL"), index=True, nullable=True
    )
    assigned_agent_id: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
    customer_id: Mapped[str | None] = mapped_column(String(255), index=True, nullable=True)
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

    def __repr__(self) -> str:
        return f"<Project(id={self.id}, name={self.name})>"
