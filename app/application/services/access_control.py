"""Access control gate: one decision function consulted by both approval engines.

Rules, evaluated in order:
1. Admins are allowed every operation.
2. Subtask review is allowed only for the task's manager.
3. Marking a subtask done and saving task progress are allowed for the
   task's assignee or its manager.
4. Everything else is denied.

A task with no manager therefore has admin-only subtask review.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, assert_never

from app.domain.exceptions import AuthorizationException

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.domain.entities.task import TaskEntity

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized"


class Operation(str, Enum):
    """Operations guarded by the gate."""

    SAVE_PROGRESS = "save_progress"
    MARK_SUBTASK_DONE = "mark_subtask_done"
    REVIEW_SUBTASK = "review_subtask"
    REVIEW_TASK = "review_task"
    CREATE_TASK = "create_task"
    MANAGE_PLANS = "manage_plans"
    MANAGE_USERS = "manage_users"
    VIEW_REPORTS = "view_reports"


@dataclass(frozen=True)
class AccessDecision:
    """Tagged result of an authorization check."""

    allowed: bool
    reason: str | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: str = NOT_AUTHORIZED) -> AccessDecision:
        return cls(allowed=False, reason=reason)


class AccessControlGate:
    """Resolves the actor's relationship to a task and authorizes operations."""

    def authorize(
        self,
        actor: UserResult,
        task: TaskEntity | None,
        operation: Operation,
    ) -> AccessDecision:
        """Return allow or deny(reason) for actor performing operation on task."""
        if actor.is_admin:
            return AccessDecision.allow()
        if task is None:
            return AccessDecision.deny()
        match operation:
            case Operation.REVIEW_SUBTASK:
                if task.is_manager(actor.id):
                    return AccessDecision.allow()
                return AccessDecision.deny()
            case Operation.MARK_SUBTASK_DONE | Operation.SAVE_PROGRESS:
                if task.is_assignee(actor.id) or task.is_manager(actor.id):
                    return AccessDecision.allow()
                return AccessDecision.deny()
            case (
                Operation.REVIEW_TASK
                | Operation.CREATE_TASK
                | Operation.MANAGE_PLANS
                | Operation.MANAGE_USERS
                | Operation.VIEW_REPORTS
            ):
                return AccessDecision.deny()
            case _:
                assert_never(operation)

    def require(
        self,
        actor: UserResult,
        task: TaskEntity | None,
        operation: Operation,
    ) -> None:
        """Raise AuthorizationException unless the gate allows the operation."""
        decision = self.authorize(actor, task, operation)
        if decision.allowed:
            return
        logger.warning(
            "Denied %s for user %s (role=%s) on task %s",
            operation.value,
            actor.id,
            actor.role.value,
            task.id if task is not None else "-",
        )
        raise AuthorizationException(
            resource="task",
            action=operation.value,
            message=decision.reason or NOT_AUTHORIZED,
        )
