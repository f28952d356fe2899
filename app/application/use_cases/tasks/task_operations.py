"""Task operations: create, list, get, progress saves and reviews.

Each mutating operation is one read-modify-write of a single task: load,
apply an engine transition in memory, save. Failures raise before the save,
so nothing is persisted for a denied or invalid request.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING, assert_never

from app.application.dtos.task import CreateTaskCommand, ProgressUpdate, SubtaskPatch
from app.application.services.access_control import AccessControlGate, Operation
from app.application.services.overdue_sweeper import OverdueSweeper
from app.application.services.subtask_approval import SubtaskApprovalEngine
from app.application.services.task_approval import (
    DEFAULT_REJECTION_REASON,
    TaskApprovalEngine,
)
from app.domain.entities.task import SubtaskEntity, TaskEntity
from app.domain.enums import SubtaskStatus, TaskStatus, UserRole
from app.domain.exceptions import (
    InvalidRoleException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.telemetry.tracing import add_span_attributes, traced
from app.shared.utils.datetime import days_after, ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.application.interfaces.repositories import (
        IPlanRepository,
        ITaskRepository,
        IUserRepository,
    )

logger = logging.getLogger(__name__)

_ASSIGNABLE_ROLES = [UserRole.STAFF.value, UserRole.MANAGER.value]


class TaskService:
    """Entry point for the task approval workflow (tasks and their subtasks)."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
        plan_repo: IPlanRepository | None = None,
        gate: AccessControlGate | None = None,
        default_rejection_reason: str = DEFAULT_REJECTION_REASON,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.plan_repo = plan_repo
        self.gate = gate or AccessControlGate()
        self.subtask_engine = SubtaskApprovalEngine(self.gate)
        self.task_engine = TaskApprovalEngine(
            self.gate, self.subtask_engine, default_rejection_reason
        )
        self.sweeper = OverdueSweeper(task_repo)

    @traced("tasks.create")
    async def create_task(
        self,
        actor: UserResult,
        command: CreateTaskCommand,
        now: datetime | None = None,
    ) -> TaskEntity:
        """Create a task with its full subtask list (admin only).

        Subtasks come from the command, or from the plan (or plan variant)
        when the command has none. Without an explicit deadline the plan
        duration in days from now is used.

        Raises:
            AuthorizationException: If actor is not an admin.
            ValidationException: If title, assignee, deadline or subtasks are missing.
            ResourceNotFoundException: If the assignee, manager or plan does not exist.
            InvalidRoleException: If the assignee is not staff/manager or the manager is not a manager.
        """
        self.gate.require(actor, None, Operation.CREATE_TASK)
        current = now or utc_now()

        title = (command.title or "").strip()
        if not title:
            raise ValidationException("Title is required", field="title")
        assigned_to = (command.assigned_to or "").strip()
        if not assigned_to:
            raise ValidationException("assigned_to is required", field="assigned_to")
        if command.deadline is None and not command.plan_id:
            raise ValidationException("Deadline is required", field="deadline")
        if command.variant_name and not command.plan_id:
            raise ValidationException(
                "variant_name requires plan_id", field="variant_name"
            )

        assignee = await self.user_repo.get_by_id(assigned_to)
        if assignee is None:
            raise ResourceNotFoundException("user", assigned_to)
        if not assignee.role.can_be_assigned:
            raise InvalidRoleException(
                "assigned_to", assignee.id, assignee.role.value, _ASSIGNABLE_ROLES
            )
        if command.manager_id:
            manager = await self.user_repo.get_by_id(command.manager_id)
            if manager is None:
                raise ResourceNotFoundException("user", command.manager_id)
            if manager.role is not UserRole.MANAGER:
                raise InvalidRoleException(
                    "manager_id",
                    manager.id,
                    manager.role.value,
                    [UserRole.MANAGER.value],
                )

        subtasks = [
            SubtaskEntity.create(
                s.title, max_days=s.max_days, is_mandatory=s.is_mandatory
            )
            for s in command.subtasks
            if s.title and s.title.strip()
        ]
        deadline = ensure_utc(command.deadline)
        if command.plan_id:
            if self.plan_repo is None:
                raise ResourceNotFoundException("plan", command.plan_id)
            plan = await self.plan_repo.get_by_id(command.plan_id)
            if plan is None:
                raise ResourceNotFoundException("plan", command.plan_id)
            templates, duration = plan.template_for(command.variant_name)
            if not subtasks:
                subtasks = [
                    SubtaskEntity.create(
                        t.title, max_days=t.max_days, is_mandatory=t.is_mandatory
                    )
                    for t in templates
                ]
            if deadline is None:
                deadline = days_after(current, duration)
        if not subtasks:
            raise ValidationException(
                "At least one subtask is required", field="subtasks"
            )
        assert deadline is not None

        task = TaskEntity(
            id=generate_cuid(),
            title=title,
            description=command.description,
            assigned_to=assignee.id,
            assigned_by=actor.id,
            manager_id=command.manager_id or None,
            plan_id=command.plan_id or None,
            subtasks=subtasks,
            status=TaskStatus.PENDING,
            deadline=deadline,
            customer_details=command.customer_details,
            payment_details=command.payment_details,
            valuation_details=command.valuation_details,
            created_at=current,
            updated_at=current,
        )
        created = await self.task_repo.create(task)
        logger.info(
            "Task %s created by %s for %s with %d subtask(s)",
            created.id,
            actor.id,
            assignee.id,
            len(subtasks),
        )
        return created

    @traced("tasks.list")
    async def list_tasks(
        self, actor: UserResult, now: datetime | None = None
    ) -> list[TaskEntity]:
        """Sweep overdue tasks, then return the tasks visible to actor."""
        await self.sweeper.sweep(now)
        match actor.role:
            case UserRole.ADMIN:
                return await self.task_repo.list_all()
            case UserRole.MANAGER:
                return await self.task_repo.list_for_manager(actor.id)
            case UserRole.STAFF:
                return await self.task_repo.list_for_assignee(actor.id)
            case _:
                assert_never(actor.role)

    async def get_task(self, task_id: str) -> TaskEntity:
        """Return task by id; raise ResourceNotFoundException if missing."""
        task = await self.task_repo.get_by_id(task_id)
        if task is None:
            raise ResourceNotFoundException("task", task_id)
        return task

    @traced("tasks.update_progress")
    async def update_task_progress(
        self,
        actor: UserResult,
        task_id: str,
        subtasks: list[SubtaskPatch] | None = None,
        status: TaskStatus | None = None,
        submission_note: str | None = None,
    ) -> TaskEntity:
        """Save subtask progress and an optional requested status."""
        task = await self.get_task(task_id)
        self.task_engine.save_progress(
            actor,
            task,
            ProgressUpdate(
                subtasks=subtasks, status=status, submission_note=submission_note
            ),
        )
        return await self._save(task)

    @traced("tasks.review")
    async def review_task(
        self,
        actor: UserResult,
        task_id: str,
        status: TaskStatus,
        rejection_reason: str | None = None,
    ) -> TaskEntity:
        """Admin approves (completed) or rejects (in_progress / pending) a task."""
        task = await self.get_task(task_id)
        self.task_engine.review(actor, task, status, rejection_reason)
        return await self._save(task)

    @traced("tasks.review_subtask")
    async def review_subtask(
        self,
        actor: UserResult,
        task_id: str,
        subtask_id: str,
        status: SubtaskStatus,
        manager_note: str | None = None,
    ) -> TaskEntity:
        """Task manager (or admin) approves or rejects a waiting subtask."""
        task = await self.get_task(task_id)
        self.subtask_engine.review(actor, task, subtask_id, status, manager_note)
        return await self._save(task)

    @traced("tasks.mark_subtask_done")
    async def mark_subtask_done(
        self,
        actor: UserResult,
        task_id: str,
        subtask_id: str,
        reason: str | None = None,
    ) -> TaskEntity:
        """Submit one subtask for review. Resubmitting is a no-op and saves nothing."""
        task = await self.get_task(task_id)
        changed = self.subtask_engine.mark_done(actor, task, subtask_id, reason)
        if not changed and reason is None:
            return task
        return await self._save(task)

    async def _save(self, task: TaskEntity) -> TaskEntity:
        task.updated_at = utc_now()
        add_span_attributes(**{"task.id": task.id, "task.status": task.status.value})
        return await self.task_repo.save(task)
