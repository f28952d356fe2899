"""Subtask approval engine: the manager review layer over individual steps.

pending/rejected --mark done--> waiting_approval --approve--> completed
                                                 --reject---> rejected

Only the task's manager (or an admin) resolves a waiting subtask; staff can
never self-approve. Marking done a subtask that is already waiting or
completed is a no-op.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from app.application.services.access_control import AccessControlGate, Operation
from app.domain.enums import SubtaskStatus, TaskStatus
from app.domain.exceptions import InvalidTransitionException, ValidationException

if TYPE_CHECKING:
    from app.application.dtos.task import SubtaskPatch
    from app.application.dtos.user import UserResult
    from app.domain.entities.task import SubtaskEntity, TaskEntity

logger = logging.getLogger(__name__)

REVIEW_DECISIONS = frozenset({SubtaskStatus.COMPLETED, SubtaskStatus.REJECTED})
_DONE_REQUESTS = frozenset({SubtaskStatus.COMPLETED, SubtaskStatus.WAITING_APPROVAL})
_WORKING = frozenset(
    {TaskStatus.PENDING, TaskStatus.PROCESSING, TaskStatus.IN_PROGRESS}
)


def next_on_mark_done(current: SubtaskStatus) -> SubtaskStatus:
    """Status after the assignee marks a subtask done."""
    match current:
        case SubtaskStatus.PENDING | SubtaskStatus.REJECTED:
            return SubtaskStatus.WAITING_APPROVAL
        case SubtaskStatus.WAITING_APPROVAL | SubtaskStatus.COMPLETED:
            return current
        case _:
            assert_never(current)


def next_on_review(
    current: SubtaskStatus, decision: SubtaskStatus
) -> SubtaskStatus | None:
    """Status after a reviewer decides; None when the subtask is not awaiting review."""
    match current:
        case SubtaskStatus.WAITING_APPROVAL:
            return decision
        case SubtaskStatus.PENDING | SubtaskStatus.COMPLETED | SubtaskStatus.REJECTED:
            return None
        case _:
            assert_never(current)


def _ensure_task_open(task: TaskEntity) -> None:
    if task.status.is_terminal:
        raise InvalidTransitionException("task", task.id, task.status.value)


class SubtaskApprovalEngine:
    """Per-subtask transitions, authorized through the access control gate."""

    def __init__(self, gate: AccessControlGate) -> None:
        self.gate = gate

    def mark_done(
        self,
        actor: UserResult,
        task: TaskEntity,
        subtask_id: str,
        reason: str | None = None,
    ) -> bool:
        """Submit a subtask for review. Returns False when it was already submitted."""
        self.gate.require(actor, task, Operation.MARK_SUBTASK_DONE)
        _ensure_task_open(task)
        subtask = task.get_subtask(subtask_id)
        if reason is not None:
            subtask.reason = reason
        return self._advance_done(task, subtask)

    def review(
        self,
        actor: UserResult,
        task: TaskEntity,
        subtask_id: str,
        decision: SubtaskStatus,
        manager_note: str | None = None,
    ) -> None:
        """Approve or reject a waiting subtask.

        Rejecting a subtask of a task that is waiting for final approval
        sends the task back to in_progress. When the task manager approves
        the last outstanding subtask of a task still being worked on, the
        task moves to waiting_approval for the admin.

        Raises:
            ValidationException: If decision is not completed or rejected.
            AuthorizationException: If actor is neither the task manager nor an admin.
            ResourceNotFoundException: If the subtask does not exist.
            InvalidTransitionException: If the subtask is not waiting for approval.
        """
        if decision not in REVIEW_DECISIONS:
            raise ValidationException(
                "Subtask review status must be 'completed' or 'rejected'",
                field="status",
            )
        self.gate.require(actor, task, Operation.REVIEW_SUBTASK)
        _ensure_task_open(task)
        subtask = task.get_subtask(subtask_id)
        target = next_on_review(subtask.status, decision)
        if target is None:
            raise InvalidTransitionException(
                "subtask", subtask.id, subtask.status.value, decision.value
            )
        subtask.status = target
        subtask.manager_note = manager_note or ""
        logger.info(
            "Subtask %s of task %s reviewed by %s: %s",
            subtask.id,
            task.id,
            actor.id,
            target.value,
        )
        if target is SubtaskStatus.REJECTED and task.status is TaskStatus.WAITING_APPROVAL:
            task.status = TaskStatus.IN_PROGRESS
            logger.info(
                "Task %s returned to in_progress after subtask rejection", task.id
            )
        elif (
            target is SubtaskStatus.COMPLETED
            and not actor.is_admin
            and task.status in _WORKING
            and task.all_subtasks_completed
        ):
            task.status = TaskStatus.WAITING_APPROVAL
            logger.info(
                "Task %s submitted for approval: every subtask approved by %s",
                task.id,
                actor.id,
            )

    def apply_patch(
        self, actor: UserResult, task: TaskEntity, patch: SubtaskPatch
    ) -> None:
        """Apply one subtask patch from a progress save.

        Admins set fields directly. For everyone else completed=True (or a
        completed/waiting_approval status) means "mark done", reason is
        writable, and every other field is ignored.
        """
        subtask = task.get_subtask(patch.id)
        if patch.reason is not None:
            subtask.reason = patch.reason
        if actor.is_admin:
            if patch.status is not None:
                subtask.status = patch.status
            elif patch.completed is not None:
                subtask.status = (
                    SubtaskStatus.COMPLETED if patch.completed else SubtaskStatus.PENDING
                )
            if patch.manager_note is not None:
                subtask.manager_note = patch.manager_note
            return
        if patch.completed is True or patch.status in _DONE_REQUESTS:
            self._advance_done(task, subtask)

    def _advance_done(self, task: TaskEntity, subtask: SubtaskEntity) -> bool:
        target = next_on_mark_done(subtask.status)
        if target is subtask.status:
            return False
        logger.info(
            "Subtask %s of task %s: %s -> %s",
            subtask.id,
            task.id,
            subtask.status.value,
            target.value,
        )
        subtask.status = target
        return True
