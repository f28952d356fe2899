"""Application DTOs (no ORM dependency)."""

from app.application.dtos.plan import PlanData
from app.application.dtos.report import AssigneeStats, TaskReport
from app.application.dtos.task import (
    CreateTaskCommand,
    ProgressUpdate,
    SubtaskInput,
    SubtaskPatch,
)
from app.application.dtos.user import UserResult

__all__ = [
    "AssigneeStats",
    "CreateTaskCommand",
    "PlanData",
    "ProgressUpdate",
    "SubtaskInput",
    "SubtaskPatch",
    "TaskReport",
    "UserResult",
]
