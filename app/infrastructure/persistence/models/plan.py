"""Plan ORM model: task template with default subtasks and named variants."""

from typing import Any

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import WorkdeskModel


class Plan(WorkdeskModel, Base):
    """Plan template. Table: plan. Subtasks and variants are JSON arrays."""

    __tablename__ = "plan"

    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    max_days: Mapped[int] = mapped_column(
        Integer, nullable=False, default=7, server_default="7"
    )
    subtasks: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    variants: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    created_by: Mapped[str] = mapped_column(String, nullable=False)
