"""Task ORM model. Subtasks are embedded as an ordered JSON array."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import WorkdeskModel


class Task(WorkdeskModel, Base):
    """Task assigned to one staff member or manager. Table: task.

    User ids are plain indexed columns so a task outlives the accounts it
    references.
    """

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    assigned_to: Mapped[str] = mapped_column(String, nullable=False, index=True)
    assigned_by: Mapped[str] = mapped_column(String, nullable=False)
    manager_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    plan_id: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="pending", server_default="pending"
    )
    deadline: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    subtasks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    submission_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    rejection_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    payment_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    valuation_details: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'processing', 'in_progress', "
            "'waiting_approval', 'completed', 'overdue')",
            name="task_status_check",
        ),
        Index("ix_task_status_deadline", "status", "deadline"),
    )
