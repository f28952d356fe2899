"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.plan import PlanEntity, PlanSubtaskTemplate, PlanVariant
from app.domain.entities.task import SubtaskEntity, TaskEntity

__all__ = [
    "PlanEntity",
    "PlanSubtaskTemplate",
    "PlanVariant",
    "SubtaskEntity",
    "TaskEntity",
]
