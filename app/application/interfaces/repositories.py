"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from app.domain.enums import UserRole

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.domain.entities.plan import PlanEntity
    from app.domain.entities.task import TaskEntity


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for the task store (aggregate with embedded subtasks).

    save() replaces the whole stored document, including the subtask array;
    there is no version check, so concurrent writers resolve last-write-wins.
    """

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        """Return task by ID."""

    async def create(self, task: TaskEntity) -> TaskEntity:
        """Persist a new task with its full subtask list."""

    async def save(self, task: TaskEntity) -> TaskEntity:
        """Replace the stored task with the given state."""

    async def list_all(self) -> list[TaskEntity]:
        """Return every task (newest first)."""

    async def list_for_assignee(self, user_id: str) -> list[TaskEntity]:
        """Return tasks assigned to the user."""

    async def list_for_manager(self, user_id: str) -> list[TaskEntity]:
        """Return tasks the user manages or is assigned to."""

    async def list_sweep_candidates(self, now: datetime) -> list[TaskEntity]:
        """Return tasks whose deadline is before now and that are not completed or overdue."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_by_username(self, username: str) -> UserResult | None:
        """Return user by username (case-insensitive)."""

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        """Return the active user when the password matches, else None."""

    async def create_user(
        self,
        username: str,
        password: str,
        name: str,
        role: UserRole,
    ) -> UserResult:
        """Create a user with a hashed password."""

    async def list_users(self, role: UserRole | None = None) -> list[UserResult]:
        """Return users, optionally filtered by role."""

    async def update_password(self, user_id: str, new_password: str) -> bool:
        """Set a new password; return False when the user does not exist."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete a user; return False when the user does not exist."""


# Plan repository interface
class IPlanRepository(Protocol):
    """Protocol for plan template repository (DIP)."""

    async def get_by_id(self, plan_id: str) -> PlanEntity | None:
        """Return plan by ID."""

    async def list_plans(self) -> list[PlanEntity]:
        """Return all plans ordered by name."""

    async def create(self, plan: PlanEntity) -> PlanEntity:
        """Persist a new plan."""

    async def save(self, plan: PlanEntity) -> PlanEntity:
        """Replace the stored plan with the given state."""

    async def delete(self, plan_id: str) -> bool:
        """Delete a plan; return False when it does not exist."""
