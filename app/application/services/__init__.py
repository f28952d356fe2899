"""Application services: access control, approval engines, overdue sweep."""

from app.application.services.access_control import (
    AccessControlGate,
    AccessDecision,
    Operation,
)
from app.application.services.overdue_sweeper import OverdueSweeper, sweep_overdue
from app.application.services.subtask_approval import SubtaskApprovalEngine
from app.application.services.task_approval import TaskApprovalEngine

__all__ = [
    "AccessControlGate",
    "AccessDecision",
    "Operation",
    "OverdueSweeper",
    "SubtaskApprovalEngine",
    "TaskApprovalEngine",
    "sweep_overdue",
]
