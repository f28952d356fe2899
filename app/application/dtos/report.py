"""DTOs for the admin task report (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class AssigneeStats:
    """Task counts for one assignee."""

    user_id: str
    name: str
    total: int = 0
    completed: int = 0
    overdue: int = 0
    waiting_approval: int = 0


@dataclass
class TaskReport:
    """Counts by status plus a per-assignee breakdown."""

    total_tasks: int
    by_status: dict[str, int]
    by_assignee: list[AssigneeStats] = field(default_factory=list)
    average_progress: int = 0
