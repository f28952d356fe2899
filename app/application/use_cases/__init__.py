"""Application use cases: one entry point per workflow."""

from app.application.use_cases.plans import PlanService
from app.application.use_cases.reports import GetTaskReportUseCase
from app.application.use_cases.tasks import TaskService
from app.application.use_cases.users import UserService

__all__ = [
    "GetTaskReportUseCase",
    "PlanService",
    "TaskService",
    "UserService",
]
