"""Seed a development database with demo users, a plan and a task.

Creates admin/manager/staff accounts (password "password"), a valuation plan
with an Express variant, and one task seeded from the plan and assigned to
staff under manager review. Skips everything when the admin already exists.

Usage:
    python -m scripts.seed_dev_data
Requires: DATABASE_URL and SECRET_KEY, and `alembic upgrade head` beforehand.
"""

from __future__ import annotations

import asyncio

from app.application.dtos.plan import PlanData
from app.application.dtos.task import CreateTaskCommand
from app.application.use_cases.plans import PlanService
from app.application.use_cases.tasks import TaskService
from app.core.config import get_settings
from app.domain.entities.plan import PlanSubtaskTemplate, PlanVariant
from app.domain.enums import UserRole
from app.infrastructure.persistence.database import dispose_engine, get_sessionmaker
from app.infrastructure.persistence.repositories import (
    PlanRepository,
    TaskRepository,
    UserRepository,
)
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)

DEV_PASSWORD = "password"

USERS = [
    ("admin", "Demo Admin", UserRole.ADMIN),
    ("manager", "Demo Manager", UserRole.MANAGER),
    ("staff", "Demo Staff", UserRole.STAFF),
]


async def run() -> None:
    settings = get_settings()
    async with get_sessionmaker()() as session, session.begin():
        user_repo = UserRepository(session)
        if await user_repo.get_by_username("admin"):
            print("Seed data already present (user 'admin' exists), skip")
            return

        users = {}
        for username, name, role in USERS:
            users[role] = await user_repo.create_user(
                username=username, password=DEV_PASSWORD, name=name, role=role
            )
            print(f"  User {username} ({role.value}) -> {users[role].id}")
        admin = users[UserRole.ADMIN]

        plan_repo = PlanRepository(session)
        plan = await PlanService(plan_repo).create_plan(
            admin,
            PlanData(
                name="Property valuation",
                description="Residential valuation with site visit",
                max_days=5,
                subtasks=[
                    PlanSubtaskTemplate("Site inspection", 2),
                    PlanSubtaskTemplate("Comparable sales research", 1),
                    PlanSubtaskTemplate("Write valuation report", 2),
                ],
                variants=[
                    PlanVariant(
                        "Express",
                        2,
                        (
                            PlanSubtaskTemplate("Desktop review"),
                            PlanSubtaskTemplate("Short-form report"),
                        ),
                    )
                ],
            ),
        )
        print(f"  Plan {plan.name} -> {plan.id}")

        task_service = TaskService(
            TaskRepository(session),
            user_repo,
            plan_repo,
            default_rejection_reason=settings.default_rejection_reason,
        )
        task = await task_service.create_task(
            admin,
            CreateTaskCommand(
                title="12 Elm Street valuation",
                assigned_to=users[UserRole.STAFF].id,
                manager_id=users[UserRole.MANAGER].id,
                plan_id=plan.id,
                deadline=None,
                customer_details={"name": "J. Client", "phone": "555-0100"},
            ),
        )
        print(f"  Task {task.title} -> {task.id} ({len(task.subtasks)} subtasks)")
    logger.info("Development seed complete")


async def main() -> None:
    setup_logging()
    try:
        await run()
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
