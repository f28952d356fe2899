"""Task approval engine: the admin review layer over the whole task.

Staff and managers work a task through pending, processing and in_progress
and then submit it for approval; only an admin can complete it. A non-admin
request for completed is downgraded to waiting_approval, and a save that
leaves every subtask completed promotes the task to waiting_approval
automatically. Once submitted, the task belongs to the admin until it is
approved or rejected. An overdue task only accepts the submission itself.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, assert_never

from app.application.services.access_control import AccessControlGate, Operation
from app.application.services.subtask_approval import SubtaskApprovalEngine
from app.domain.enums import TaskStatus
from app.domain.exceptions import InvalidTransitionException, ValidationException

if TYPE_CHECKING:
    from app.application.dtos.task import ProgressUpdate
    from app.application.dtos.user import UserResult
    from app.domain.entities.task import TaskEntity

logger = logging.getLogger(__name__)

DEFAULT_REJECTION_REASON = "Rejected by Admin"

REVIEW_DECISIONS = frozenset(
    {TaskStatus.COMPLETED, TaskStatus.IN_PROGRESS, TaskStatus.PENDING}
)
_REJECTABLE = frozenset(
    {TaskStatus.WAITING_APPROVAL, TaskStatus.IN_PROGRESS, TaskStatus.PENDING}
)


def next_status_on_save(
    *,
    is_admin: bool,
    current: TaskStatus,
    requested: TaskStatus | None,
    all_subtasks_completed: bool,
) -> TaskStatus | None:
    """Resulting task status for a progress save; None when not allowed.

    Raises:
        ValidationException: If a non-admin requests overdue.
    """
    if current.is_terminal:
        return None
    if is_admin:
        return requested if requested is not None else current
    if requested is TaskStatus.OVERDUE:
        raise ValidationException(
            "Status 'overdue' is set by the deadline sweep only", field="status"
        )
    submitting = requested is TaskStatus.COMPLETED or all_subtasks_completed
    match current:
        case TaskStatus.PENDING | TaskStatus.PROCESSING | TaskStatus.IN_PROGRESS:
            if submitting:
                return TaskStatus.WAITING_APPROVAL
            return requested if requested is not None else current
        case TaskStatus.OVERDUE:
            return TaskStatus.WAITING_APPROVAL if submitting else None
        case TaskStatus.WAITING_APPROVAL | TaskStatus.COMPLETED:
            return None
        case _:
            assert_never(current)


def next_status_on_review(
    current: TaskStatus, decision: TaskStatus
) -> TaskStatus | None:
    """Resulting task status for an admin review; None when not allowed."""
    if decision is TaskStatus.COMPLETED:
        return decision if current is TaskStatus.WAITING_APPROVAL else None
    return decision if current in _REJECTABLE else None


class TaskApprovalEngine:
    """Applies progress saves and admin reviews to a loaded task."""

    def __init__(
        self,
        gate: AccessControlGate,
        subtask_engine: SubtaskApprovalEngine,
        default_rejection_reason: str = DEFAULT_REJECTION_REASON,
    ) -> None:
        self.gate = gate
        self.subtask_engine = subtask_engine
        self.default_rejection_reason = default_rejection_reason

    def save_progress(
        self, actor: UserResult, task: TaskEntity, update: ProgressUpdate
    ) -> None:
        """Apply subtask patches and a requested status to the task.

        Everything is checked before the first field changes, so a rejected
        save leaves the task as it was.

        Raises:
            AuthorizationException: If actor is not assignee, manager or admin.
            InvalidTransitionException: If the task is completed, or a non-admin
                saves a task that is waiting for approval, or saves an overdue
                task without submitting it.
            ResourceNotFoundException: If a patch names an unknown subtask.
            ValidationException: If a non-admin requests overdue.
        """
        self.gate.require(actor, task, Operation.SAVE_PROGRESS)
        requested = update.status.value if update.status else None
        if task.status.is_terminal:
            raise InvalidTransitionException("task", task.id, task.status.value, requested)
        patches = update.subtasks or []
        for patch in patches:
            task.get_subtask(patch.id)
        # Non-admin patches never complete a subtask, so the aggregate is
        # the same before and after they are applied.
        target = next_status_on_save(
            is_admin=actor.is_admin,
            current=task.status,
            requested=update.status,
            all_subtasks_completed=task.all_subtasks_completed,
        )
        if target is None:
            raise InvalidTransitionException("task", task.id, task.status.value, requested)

        for patch in patches:
            self.subtask_engine.apply_patch(actor, task, patch)

        previous = task.status
        task.status = target
        if update.submission_note is not None and (
            actor.is_admin or task.status is TaskStatus.WAITING_APPROVAL
        ):
            task.submission_note = update.submission_note
        if task.status is TaskStatus.COMPLETED:
            task.rejection_reason = None

        if task.status is not previous:
            logger.info(
                "Task %s: %s -> %s by %s (%s)",
                task.id,
                previous.value,
                task.status.value,
                actor.id,
                actor.role.value,
            )
        if update.status is TaskStatus.COMPLETED and not actor.is_admin:
            logger.info(
                "Completion request for task %s by %s downgraded to waiting_approval",
                task.id,
                actor.id,
            )

    def review(
        self,
        actor: UserResult,
        task: TaskEntity,
        decision: TaskStatus,
        rejection_reason: str | None = None,
    ) -> None:
        """Admin approval (completed) or rejection (in_progress / pending).

        Approval is only possible from waiting_approval and clears any
        previous rejection reason. Rejection works from waiting_approval,
        in_progress or pending and stores the given reason or the default
        one. The submission note is kept.

        Raises:
            ValidationException: If decision is not completed, in_progress or pending.
            AuthorizationException: If actor is not an admin.
            InvalidTransitionException: If the task cannot take the decision.
        """
        if decision not in REVIEW_DECISIONS:
            raise ValidationException(
                "Review status must be 'completed', 'in_progress' or 'pending'",
                field="status",
            )
        self.gate.require(actor, task, Operation.REVIEW_TASK)
        target = next_status_on_review(task.status, decision)
        if target is None:
            raise InvalidTransitionException(
                "task", task.id, task.status.value, decision.value
            )
        previous = task.status
        task.status = target
        if target is TaskStatus.COMPLETED:
            task.rejection_reason = None
        else:
            reason = (rejection_reason or "").strip()
            task.rejection_reason = reason or self.default_rejection_reason
        logger.info(
            "Task %s reviewed by %s: %s -> %s",
            task.id,
            actor.id,
            previous.value,
            target.value,
        )
