"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the repository interfaces.
"""

from app.application.interfaces import (
    IPlanRepository,
    ITaskRepository,
    IUserRepository,
)
from app.application.services.access_control import AccessControlGate
from app.application.use_cases import (
    GetTaskReportUseCase,
    PlanService,
    TaskService,
    UserService,
)

__all__ = [
    "AccessControlGate",
    "GetTaskReportUseCase",
    "IPlanRepository",
    "ITaskRepository",
    "IUserRepository",
    "PlanService",
    "TaskService",
    "UserService",
]
