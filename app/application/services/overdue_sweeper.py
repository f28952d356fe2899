"""Overdue sweeper: reclassify tasks whose deadline has passed.

Runs synchronously before every task listing (not as a background job), so
no listing ever returns a pre-sweep state. Completed tasks are never touched
and an overdue task is never moved back.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from app.domain.enums import TaskStatus
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.interfaces.repositories import ITaskRepository
    from app.domain.entities.task import TaskEntity

logger = logging.getLogger(__name__)

_EXEMPT = frozenset({TaskStatus.COMPLETED, TaskStatus.OVERDUE})


def sweep_overdue(tasks: Iterable[TaskEntity], now: datetime) -> list[TaskEntity]:
    """Mark past-deadline tasks overdue in place; return the ones that changed.

    Idempotent: a second call with the same now changes nothing.
    """
    changed: list[TaskEntity] = []
    for task in tasks:
        if task.status in _EXEMPT:
            continue
        if task.is_past_deadline(now):
            task.status = TaskStatus.OVERDUE
            changed.append(task)
    return changed


class OverdueSweeper:
    """Applies sweep_overdue to the store's candidates and persists the changes."""

    def __init__(self, task_repo: ITaskRepository) -> None:
        self.task_repo = task_repo

    async def sweep(self, now: datetime | None = None) -> list[TaskEntity]:
        """Reclassify and save every overdue candidate; return the changed tasks."""
        current = now or utc_now()
        candidates = await self.task_repo.list_sweep_candidates(current)
        changed = sweep_overdue(candidates, current)
        for task in changed:
            await self.task_repo.save(task)
        if changed:
            logger.info("Marked %d task(s) overdue", len(changed))
        return changed
