"""Plan repository: plan templates with JSON subtask and variant lists."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.plan import PlanEntity, PlanSubtaskTemplate, PlanVariant
from app.infrastructure.persistence.models.plan import Plan
from app.infrastructure.persistence.repositories.base import BaseRepository


def _to_entity(p: Plan) -> PlanEntity:
    """Map Plan ORM to PlanEntity."""
    return PlanEntity(
        id=p.id,
        name=p.name,
        description=p.description,
        max_days=p.max_days,
        subtasks=[PlanSubtaskTemplate.from_dict(s) for s in p.subtasks or []],
        variants=[PlanVariant.from_dict(v) for v in p.variants or []],
        created_by=p.created_by,
    )


def _apply(row: Plan, plan: PlanEntity) -> None:
    row.name = plan.name
    row.description = plan.description
    row.max_days = plan.max_days
    row.subtasks = [s.to_dict() for s in plan.subtasks]
    row.variants = [v.to_dict() for v in plan.variants]


class PlanRepository(BaseRepository[Plan]):
    """Plan repository. Implements IPlanRepository."""

    resource_type = "plan"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Plan)

    async def get_by_id(self, plan_id: str) -> PlanEntity | None:  # type: ignore[override]
        row = await super().get_by_id(plan_id)
        return _to_entity(row) if row else None

    async def list_plans(self) -> list[PlanEntity]:
        result = await self.db.execute(select(Plan).order_by(Plan.name, Plan.id))
        return [_to_entity(p) for p in result.scalars().all()]

    async def create(self, plan: PlanEntity) -> PlanEntity:
        row = Plan(id=plan.id, created_by=plan.created_by)
        _apply(row, plan)
        return _to_entity(await self.add(row))

    async def save(self, plan: PlanEntity) -> PlanEntity:
        row = await self.get_existing(plan.id)
        _apply(row, plan)
        return _to_entity(await self.update(row))

    async def delete(self, plan_id: str) -> bool:
        return await self.remove(plan_id)
