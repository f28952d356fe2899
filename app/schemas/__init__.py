"""Pydantic request/response schemas for the API."""

from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.health import HealthResponse, ReadinessResponse
from app.schemas.plan import PlanCreateRequest, PlanResponse, PlanUpdateRequest
from app.schemas.report import TaskReportResponse
from app.schemas.task import (
    SubtaskDoneRequest,
    SubtaskReviewRequest,
    TaskCreateRequest,
    TaskProgressUpdate,
    TaskResponse,
    TaskReviewRequest,
)
from app.schemas.user import PasswordResetRequest, UserCreateRequest, UserResponse

__all__ = [
    "HealthResponse",
    "LoginRequest",
    "PasswordResetRequest",
    "PlanCreateRequest",
    "PlanResponse",
    "PlanUpdateRequest",
    "ReadinessResponse",
    "SubtaskDoneRequest",
    "SubtaskReviewRequest",
    "TaskCreateRequest",
    "TaskProgressUpdate",
    "TaskReportResponse",
    "TaskResponse",
    "TaskReviewRequest",
    "TokenResponse",
    "UserCreateRequest",
    "UserResponse",
]
