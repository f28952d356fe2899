"""Plan domain entity.

A plan is a reusable template: default subtasks and a duration in days.
Variants are named sub-templates with their own duration and subtasks.
Plans only seed a task at creation time; tasks never read them afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from app.domain.exceptions import ResourceNotFoundException


@dataclass(frozen=True)
class PlanSubtaskTemplate:
    """Template for one subtask (title, expected days, mandatory flag)."""

    title: str
    max_days: int = 1
    is_mandatory: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "max_days": self.max_days,
            "is_mandatory": self.is_mandatory,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlanSubtaskTemplate:
        return cls(
            title=data["title"],
            max_days=data.get("max_days") or 1,
            is_mandatory=data.get("is_mandatory", True),
        )


@dataclass(frozen=True)
class PlanVariant:
    """Named sub-template with its own duration and subtask list."""

    name: str
    duration: int
    subtasks: tuple[PlanSubtaskTemplate, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "duration": self.duration,
            "subtasks": [s.to_dict() for s in self.subtasks],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlanVariant:
        return cls(
            name=data["name"],
            duration=data["duration"],
            subtasks=tuple(
                PlanSubtaskTemplate.from_dict(s) for s in data.get("subtasks") or []
            ),
        )


@dataclass
class PlanEntity:
    """Domain entity for a plan template."""

    id: str
    name: str
    created_by: str
    description: str | None = None
    max_days: int = 7
    subtasks: list[PlanSubtaskTemplate] = field(default_factory=list)
    variants: list[PlanVariant] = field(default_factory=list)

    def get_variant(self, name: str) -> PlanVariant:
        """Return the variant with the given name (case-insensitive).

        Raises:
            ResourceNotFoundException: If the plan has no such variant.
        """
        wanted = name.strip().lower()
        for variant in self.variants:
            if variant.name.lower() == wanted:
                return variant
        raise ResourceNotFoundException("plan_variant", name)

    def template_for(
        self, variant_name: str | None = None
    ) -> tuple[list[PlanSubtaskTemplate], int]:
        """Return (subtask templates, duration in days) for the plan or a variant."""
        if variant_name:
            variant = self.get_variant(variant_name)
            return list(variant.subtasks), variant.duration
        return list(self.subtasks), self.max_days
