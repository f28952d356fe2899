"""Plan operations: CRUD for task templates (admin writes, everyone reads)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.application.dtos.plan import PlanData
from app.application.services.access_control import AccessControlGate, Operation
from app.domain.entities.plan import PlanEntity, PlanSubtaskTemplate, PlanVariant
from app.domain.exceptions import ResourceNotFoundException, ValidationException
from app.shared.utils.generators import generate_cuid

if TYPE_CHECKING:
    from app.application.dtos.user import UserResult
    from app.application.interfaces.repositories import IPlanRepository

logger = logging.getLogger(__name__)


def _validate_subtasks(subtasks: list[PlanSubtaskTemplate], field: str) -> None:
    for template in subtasks:
        if not template.title or not template.title.strip():
            raise ValidationException("Subtask title is required", field=field)
        if template.max_days < 1:
            raise ValidationException("Subtask max_days must be at least 1", field=field)


def _validate_variants(variants: list[PlanVariant]) -> None:
    seen: set[str] = set()
    for variant in variants:
        name = variant.name.strip().lower() if variant.name else ""
        if not name:
            raise ValidationException("Variant name is required", field="variants")
        if name in seen:
            raise ValidationException(
                f"Duplicate variant name '{variant.name}'", field="variants"
            )
        seen.add(name)
        if variant.duration < 1:
            raise ValidationException(
                "Variant duration must be at least 1", field="variants"
            )
        _validate_subtasks(list(variant.subtasks), "variants")


class PlanService:
    """Create, query, update and delete plan templates."""

    def __init__(
        self, plan_repo: IPlanRepository, gate: AccessControlGate | None = None
    ) -> None:
        self.plan_repo = plan_repo
        self.gate = gate or AccessControlGate()

    async def create_plan(self, actor: UserResult, data: PlanData) -> PlanEntity:
        """Create a plan; name is required, durations must be positive."""
        self.gate.require(actor, None, Operation.MANAGE_PLANS)
        name = (data.name or "").strip()
        if not name:
            raise ValidationException("Plan name is required", field="name")
        max_days = data.max_days if data.max_days is not None else 7
        if max_days < 1:
            raise ValidationException("max_days must be at least 1", field="max_days")
        subtasks = list(data.subtasks or [])
        variants = list(data.variants or [])
        _validate_subtasks(subtasks, "subtasks")
        _validate_variants(variants)

        plan = PlanEntity(
            id=generate_cuid(),
            name=name,
            description=data.description,
            max_days=max_days,
            subtasks=subtasks,
            variants=variants,
            created_by=actor.id,
        )
        created = await self.plan_repo.create(plan)
        logger.info("Plan %s (%s) created by %s", created.id, created.name, actor.id)
        return created

    async def list_plans(self) -> list[PlanEntity]:
        return await self.plan_repo.list_plans()

    async def get_plan(self, plan_id: str) -> PlanEntity:
        """Return plan by id; raise ResourceNotFoundException if missing."""
        plan = await self.plan_repo.get_by_id(plan_id)
        if plan is None:
            raise ResourceNotFoundException("plan", plan_id)
        return plan

    async def update_plan(
        self, actor: UserResult, plan_id: str, data: PlanData
    ) -> PlanEntity:
        """Apply the non-None fields of data. Existing tasks are not affected."""
        self.gate.require(actor, None, Operation.MANAGE_PLANS)
        plan = await self.get_plan(plan_id)
        if data.name is not None:
            name = data.name.strip()
            if not name:
                raise ValidationException("Plan name is required", field="name")
            plan.name = name
        if data.description is not None:
            plan.description = data.description
        if data.max_days is not None:
            if data.max_days < 1:
                raise ValidationException(
                    "max_days must be at least 1", field="max_days"
                )
            plan.max_days = data.max_days
        if data.subtasks is not None:
            _validate_subtasks(data.subtasks, "subtasks")
            plan.subtasks = list(data.subtasks)
        if data.variants is not None:
            _validate_variants(data.variants)
            plan.variants = list(data.variants)
        return await self.plan_repo.save(plan)

    async def delete_plan(self, actor: UserResult, plan_id: str) -> None:
        """Delete a plan; raise ResourceNotFoundException if missing."""
        self.gate.require(actor, None, Operation.MANAGE_PLANS)
        if not await self.plan_repo.delete(plan_id):
            raise ResourceNotFoundException("plan", plan_id)
        logger.info("Plan %s deleted by %s", plan_id, actor.id)
