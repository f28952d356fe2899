"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TimestampMixin,
    WorkdeskModel,
)
from app.infrastructure.persistence.models.plan import Plan
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "Plan",
    "Task",
    "TimestampMixin",
    "User",
    "WorkdeskModel",
]
