"""In-memory repositories and builders for application-layer unit tests.

FakeTaskRepository copies tasks on the way in and out, like a real store, so
two services that load the same task hold independent copies.
"""

import copy
from datetime import datetime, timedelta, timezone

from app.application.dtos.user import UserResult
from app.domain.entities.plan import PlanEntity
from app.domain.entities.task import SubtaskEntity, TaskEntity
from app.domain.enums import TaskStatus, UserRole
from app.domain.exceptions import UserAlreadyExistsException

NOW = datetime(2025, 3, 10, 9, 0, 0, tzinfo=timezone.utc)


class FakeTaskRepository:
    def __init__(self) -> None:
        self.tasks: dict[str, TaskEntity] = {}
        self.save_count = 0

    async def get_by_id(self, task_id: str) -> TaskEntity | None:
        task = self.tasks.get(task_id)
        return copy.deepcopy(task) if task else None

    async def create(self, task: TaskEntity) -> TaskEntity:
        self.tasks[task.id] = copy.deepcopy(task)
        return copy.deepcopy(task)

    async def save(self, task: TaskEntity) -> TaskEntity:
        self.save_count += 1
        self.tasks[task.id] = copy.deepcopy(task)
        return copy.deepcopy(task)

    async def list_all(self) -> list[TaskEntity]:
        return [copy.deepcopy(t) for t in self.tasks.values()]

    async def list_for_assignee(self, user_id: str) -> list[TaskEntity]:
        return [copy.deepcopy(t) for t in self.tasks.values() if t.assigned_to == user_id]

    async def list_for_manager(self, user_id: str) -> list[TaskEntity]:
        return [
            copy.deepcopy(t)
            for t in self.tasks.values()
            if t.manager_id == user_id or t.assigned_to == user_id
        ]

    async def list_sweep_candidates(self, now: datetime) -> list[TaskEntity]:
        return [
            copy.deepcopy(t)
            for t in self.tasks.values()
            if t.deadline < now
            and t.status not in (TaskStatus.COMPLETED, TaskStatus.OVERDUE)
        ]


class FakeUserRepository:
    def __init__(self, users: list[UserResult] | None = None) -> None:
        self.users: dict[str, UserResult] = {u.id: u for u in users or []}
        self.passwords: dict[str, str] = {}

    async def get_by_id(self, user_id: str) -> UserResult | None:
        return self.users.get(user_id)

    async def get_by_username(self, username: str) -> UserResult | None:
        for user in self.users.values():
            if user.username == username.lower():
                return user
        return None

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        user = await self.get_by_username(username)
        if user is None or not user.is_active:
            return None
        return user if self.passwords.get(user.id) == password else None

    async def create_user(
        self, username: str, password: str, name: str, role: UserRole
    ) -> UserResult:
        if await self.get_by_username(username):
            raise UserAlreadyExistsException(username)
        user = UserResult(
            id=f"u-{len(self.users) + 1}", username=username, name=name, role=role
        )
        self.users[user.id] = user
        self.passwords[user.id] = password
        return user

    async def list_users(self, role: UserRole | None = None) -> list[UserResult]:
        users = sorted(self.users.values(), key=lambda u: u.username)
        return [u for u in users if role is None or u.role is role]

    async def update_password(self, user_id: str, new_password: str) -> bool:
        if user_id not in self.users:
            return False
        self.passwords[user_id] = new_password
        return True

    async def delete_user(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None


class FakePlanRepository:
    def __init__(self, plans: list[PlanEntity] | None = None) -> None:
        self.plans: dict[str, PlanEntity] = {p.id: p for p in plans or []}

    async def get_by_id(self, plan_id: str) -> PlanEntity | None:
        plan = self.plans.get(plan_id)
        return copy.deepcopy(plan) if plan else None

    async def list_plans(self) -> list[PlanEntity]:
        return sorted(
            (copy.deepcopy(p) for p in self.plans.values()), key=lambda p: p.name
        )

    async def create(self, plan: PlanEntity) -> PlanEntity:
        self.plans[plan.id] = copy.deepcopy(plan)
        return plan

    async def save(self, plan: PlanEntity) -> PlanEntity:
        self.plans[plan.id] = copy.deepcopy(plan)
        return plan

    async def delete(self, plan_id: str) -> bool:
        return self.plans.pop(plan_id, None) is not None


def make_task(
    *,
    task_id: str = "t1",
    assigned_to: str = "staff-1",
    manager_id: str | None = "manager-1",
    status: TaskStatus = TaskStatus.PENDING,
    subtask_count: int = 2,
    deadline: datetime | None = None,
) -> TaskEntity:
    """Task with subtasks s1..sN, all pending, deadline a week after NOW."""
    return TaskEntity(
        id=task_id,
        title="Valuation report",
        assigned_to=assigned_to,
        assigned_by="admin-1",
        manager_id=manager_id,
        deadline=deadline or NOW + timedelta(days=7),
        status=status,
        subtasks=[
            SubtaskEntity(id=f"s{i}", title=f"Step {i}")
            for i in range(1, subtask_count + 1)
        ],
        created_at=NOW,
        updated_at=NOW,
    )


