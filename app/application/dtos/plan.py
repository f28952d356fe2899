"""DTOs for plan template use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.entities.plan import PlanSubtaskTemplate, PlanVariant


@dataclass(frozen=True)
class PlanData:
    """Fields for creating a plan, or a partial update when fields are None."""

    name: str | None = None
    description: str | None = None
    max_days: int | None = None
    subtasks: list[PlanSubtaskTemplate] | None = None
    variants: list[PlanVariant] | None = field(default=None)
