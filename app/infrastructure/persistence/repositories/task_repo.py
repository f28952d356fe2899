"""Task repository: stores the task aggregate with its embedded subtask array."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.task import SubtaskEntity, TaskEntity
from app.domain.enums import TaskStatus
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

_NOT_SWEEPABLE = (TaskStatus.COMPLETED.value, TaskStatus.OVERDUE.value)


def _to_entity(t: Task) -> TaskEntity:
    """Map Task ORM to TaskEntity."""
    deadline = ensure_utc(t.deadline)
    assert deadline is not None
    return TaskEntity(
        id=t.id,
        title=t.title,
        description=t.description,
        assigned_to=t.assigned_to,
        assigned_by=t.assigned_by,
        manager_id=t.manager_id,
        plan_id=t.plan_id,
        subtasks=[SubtaskEntity.from_dict(s) for s in t.subtasks or []],
        status=TaskStatus(t.status),
        submission_note=t.submission_note,
        rejection_reason=t.rejection_reason,
        deadline=deadline,
        customer_details=t.customer_details,
        payment_details=t.payment_details,
        valuation_details=t.valuation_details,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def _apply(row: Task, task: TaskEntity) -> None:
    """Copy mutable aggregate state onto the row.

    The subtask list is always a new list so the JSON column is flagged dirty.
    """
    row.status = task.status.value
    row.subtasks = [s.to_dict() for s in task.subtasks]
    row.submission_note = task.submission_note
    row.rejection_reason = task.rejection_reason
    if task.updated_at is not None:
        row.updated_at = ensure_utc(task.updated_at)


class TaskRepository(BaseRepository[Task]):
    """Task repository. Implements ITaskRepository.

    save() overwrites status, notes and the whole subtask array from the
    entity. There is no version column: two concurrent writers both succeed
    and the later flush wins.
    """

    resource_type = "task"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_by_id(self, task_id: str) -> TaskEntity | None:  # type: ignore[override]
        row = await super().get_by_id(task_id)
        return _to_entity(row) if row else None

    async def create(self, task: TaskEntity) -> TaskEntity:
        """Insert the task together with its full subtask list."""
        row = Task(
            id=task.id,
            title=task.title,
            description=task.description,
            assigned_to=task.assigned_to,
            assigned_by=task.assigned_by,
            manager_id=task.manager_id,
            plan_id=task.plan_id,
            deadline=ensure_utc(task.deadline),
            customer_details=task.customer_details,
            payment_details=task.payment_details,
            valuation_details=task.valuation_details,
        )
        if task.created_at is not None:
            row.created_at = ensure_utc(task.created_at)
        _apply(row, task)
        created = await self.add(row)
        return _to_entity(created)

    async def save(self, task: TaskEntity) -> TaskEntity:
        """Replace the stored state of an existing task."""
        row = await self.get_existing(task.id)
        _apply(row, task)
        updated = await self.update(row)
        return _to_entity(updated)

    async def _list(self, *criteria) -> list[TaskEntity]:
        stmt = select(Task).where(*criteria).order_by(Task.created_at.desc(), Task.id)
        result = await self.db.execute(stmt)
        return [_to_entity(t) for t in result.scalars().all()]

    async def list_all(self) -> list[TaskEntity]:
        return await self._list()

    async def list_for_assignee(self, user_id: str) -> list[TaskEntity]:
        return await self._list(Task.assigned_to == user_id)

    async def list_for_manager(self, user_id: str) -> list[TaskEntity]:
        return await self._list(
            or_(Task.manager_id == user_id, Task.assigned_to == user_id)
        )

    async def list_sweep_candidates(self, now: datetime) -> list[TaskEntity]:
        return await self._list(
            Task.deadline < ensure_utc(now),
            Task.status.not_in(_NOT_SWEEPABLE),
        )
