"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, repositories and application
services. Routes depend only on these dependencies, not on infra directly.

Read routes use get_db; write routes (and task listing, which persists the
overdue sweep) use get_db_transactional so the whole request commits or
rolls back as one unit.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import UserResult
from app.application.use_cases.plans import PlanService
from app.application.use_cases.reports import GetTaskReportUseCase
from app.application.use_cases.tasks import TaskService
from app.application.use_cases.users import UserService
from app.core.config import get_settings
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    PlanRepository,
    TaskRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import verify_token
from app.shared.context import set_current_user

_http_bearer = HTTPBearer(auto_error=False)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


# ---- Repositories ----


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository (read session)."""
    return UserRepository(db)


# ---- Services ----


def _task_service(db: AsyncSession) -> TaskService:
    return TaskService(
        task_repo=TaskRepository(db),
        user_repo=UserRepository(db),
        plan_repo=PlanRepository(db),
        default_rejection_reason=get_settings().default_rejection_reason,
    )


async def get_task_service(db: ReadSession) -> TaskService:
    """TaskService for read-only routes."""
    return _task_service(db)


async def get_task_service_for_write(db: WriteSession) -> TaskService:
    """TaskService for mutating routes and listings (same transaction)."""
    return _task_service(db)


async def get_plan_service(db: ReadSession) -> PlanService:
    return PlanService(PlanRepository(db))


async def get_plan_service_for_write(db: WriteSession) -> PlanService:
    return PlanService(PlanRepository(db))


def _user_service(db: AsyncSession) -> UserService:
    return UserService(
        UserRepository(db), min_password_length=get_settings().min_password_length
    )


async def get_user_service(db: ReadSession) -> UserService:
    return _user_service(db)


async def get_user_service_for_write(db: WriteSession) -> UserService:
    return _user_service(db)


async def get_report_use_case(db: WriteSession) -> GetTaskReportUseCase:
    """Report use case (transactional: it persists the overdue sweep)."""
    return GetTaskReportUseCase(TaskRepository(db), UserRepository(db))


# ---- Authentication ----


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present; else None. Use for optional auth routes."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await user_repo.get_by_id(payload["sub"])
    if not user or not user.is_active:
        return None
    set_current_user(user.id)
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
