"""DTOs for task use cases: creation command and progress patches (no ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import SubtaskStatus, TaskStatus


@dataclass(frozen=True)
class SubtaskInput:
    """Ad hoc subtask entered at assignment time."""

    title: str
    max_days: int | None = None
    is_mandatory: bool = True


@dataclass(frozen=True)
class CreateTaskCommand:
    """Input for TaskService.create_task.

    When subtasks is empty and plan_id is set, subtasks are seeded from the
    plan (or from variant_name when given).
    """

    title: str
    assigned_to: str
    deadline: datetime | None
    description: str | None = None
    manager_id: str | None = None
    plan_id: str | None = None
    variant_name: str | None = None
    subtasks: list[SubtaskInput] = field(default_factory=list)
    customer_details: dict[str, Any] | None = None
    payment_details: dict[str, Any] | None = None
    valuation_details: dict[str, Any] | None = None


@dataclass(frozen=True)
class SubtaskPatch:
    """Change to one subtask, addressed by id. None fields are left untouched."""

    id: str
    completed: bool | None = None
    status: SubtaskStatus | None = None
    reason: str | None = None
    manager_note: str | None = None


@dataclass(frozen=True)
class ProgressUpdate:
    """Input for TaskService.update_task_progress."""

    subtasks: list[SubtaskPatch] | None = None
    status: TaskStatus | None = None
    submission_note: str | None = None
