"""Report use case: task counts by status and per assignee (admin dashboard)."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.application.dtos.report import AssigneeStats, TaskReport
from app.application.services.access_control import AccessControlGate, Operation
from app.application.services.overdue_sweeper import OverdueSweeper
from app.domain.enums import TaskStatus

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.application.interfaces.repositories import (
        ITaskRepository,
        IUserRepository,
    )


class GetTaskReportUseCase:
    """Aggregate every task into status counts and per-assignee stats."""

    def __init__(
        self,
        task_repo: "ITaskRepository",
        user_repo: "IUserRepository",
        gate: AccessControlGate | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.user_repo = user_repo
        self.gate = gate or AccessControlGate()
        self.sweeper = OverdueSweeper(task_repo)

    async def get_report(
        self, actor: "UserResult", now: datetime | None = None
    ) -> TaskReport:
        """Sweep overdue tasks first so the counts match what listings show."""
        self.gate.require(actor, None, Operation.VIEW_REPORTS)
        await self.sweeper.sweep(now)
        tasks = await self.task_repo.list_all()
        names = {u.id: u.name for u in await self.user_repo.list_users()}

        by_status = {status: 0 for status in TaskStatus.values()}
        by_assignee: dict[str, AssigneeStats] = {}
        for task in tasks:
            by_status[task.status.value] += 1
            stats = by_assignee.get(task.assigned_to)
            if stats is None:
                stats = AssigneeStats(
                    user_id=task.assigned_to,
                    name=names.get(task.assigned_to, task.assigned_to),
                )
                by_assignee[task.assigned_to] = stats
            stats.total += 1
            if task.status is TaskStatus.COMPLETED:
                stats.completed += 1
            elif task.status is TaskStatus.OVERDUE:
                stats.overdue += 1
            elif task.status is TaskStatus.WAITING_APPROVAL:
                stats.waiting_approval += 1

        average = round(sum(t.progress for t in tasks) / len(tasks)) if tasks else 0
        return TaskReport(
            total_tasks=len(tasks),
            by_status=by_status,
            by_assignee=sorted(by_assignee.values(), key=lambda s: s.name.lower()),
            average_progress=average,
        )
