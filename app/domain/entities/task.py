"""Task aggregate: a task owning an ordered collection of subtasks.

The task is the unit of persistence. Subtasks are value objects embedded in
the task and addressed by a stable id assigned at creation; their order is
fixed and only their status, reason and manager note change after creation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.domain.enums import SubtaskStatus, TaskStatus
from app.domain.exceptions import ResourceNotFoundException
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid


@dataclass
class SubtaskEntity:
    """One step of a task, independently completable and reviewable."""

    id: str
    title: str
    status: SubtaskStatus = SubtaskStatus.PENDING
    reason: str = ""
    manager_note: str = ""
    max_days: int | None = None
    is_mandatory: bool = True

    @classmethod
    def create(
        cls,
        title: str,
        *,
        max_days: int | None = None,
        is_mandatory: bool = True,
    ) -> SubtaskEntity:
        """Build a new pending subtask with a fresh id."""
        return cls(
            id=generate_cuid(),
            title=title.strip(),
            max_days=max_days,
            is_mandatory=is_mandatory,
        )

    @property
    def completed(self) -> bool:
        """Legacy flag: true iff the subtask has been approved."""
        return self.status is SubtaskStatus.COMPLETED

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the embedded JSON column."""
        return {
            "id": self.id,
            "title": self.title,
            "status": self.status.value,
            "completed": self.completed,
            "reason": self.reason,
            "manager_note": self.manager_note,
            "max_days": self.max_days,
            "is_mandatory": self.is_mandatory,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SubtaskEntity:
        """Deserialize from the embedded JSON column.

        A missing or unknown status reads as pending; the stored completed
        flag is ignored because it is derived from status.
        """
        return cls(
            id=data.get("id") or generate_cuid(),
            title=data.get("title") or "",
            status=SubtaskStatus.parse(data.get("status")),
            reason=data.get("reason") or "",
            manager_note=data.get("manager_note") or "",
            max_days=data.get("max_days"),
            is_mandatory=data.get("is_mandatory", True),
        )


@dataclass
class TaskEntity:
    """Task aggregate root (assignee, optional manager, subtasks, deadline)."""

    id: str
    title: str
    assigned_to: str
    assigned_by: str
    deadline: datetime
    description: str | None = None
    manager_id: str | None = None
    plan_id: str | None = None
    subtasks: list[SubtaskEntity] = field(default_factory=list)
    status: TaskStatus = TaskStatus.PENDING
    submission_note: str | None = None
    rejection_reason: str | None = None
    customer_details: dict[str, Any] | None = None
    payment_details: dict[str, Any] | None = None
    valuation_details: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def get_subtask(self, subtask_id: str) -> SubtaskEntity:
        """Return the subtask with the given id.

        Raises:
            ResourceNotFoundException: If the task has no such subtask.
        """
        for subtask in self.subtasks:
            if subtask.id == subtask_id:
                return subtask
        raise ResourceNotFoundException("subtask", subtask_id)

    @property
    def all_subtasks_completed(self) -> bool:
        """Return True when there is at least one subtask and all are completed.

        An empty subtask list never counts as complete, so such a task cannot
        reach waiting_approval through the all-complete rule.
        """
        return bool(self.subtasks) and all(s.completed for s in self.subtasks)

    @property
    def progress(self) -> int:
        """Completed subtasks as a whole percentage (0 when there are none)."""
        if not self.subtasks:
            return 0
        done = sum(1 for s in self.subtasks if s.completed)
        return round(done * 100 / len(self.subtasks))

    def is_assignee(self, user_id: str) -> bool:
        return self.assigned_to == user_id

    def is_manager(self, user_id: str) -> bool:
        return self.manager_id is not None and self.manager_id == user_id

    def is_past_deadline(self, now: datetime) -> bool:
        """Return whether the deadline lies strictly before now."""
        deadline = ensure_utc(self.deadline)
        current = ensure_utc(now)
        assert deadline is not None and current is not None
        return deadline < current
