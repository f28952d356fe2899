"""Plan template API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.plan import PlanData
from app.domain.entities.plan import PlanSubtaskTemplate, PlanVariant


class PlanSubtaskSchema(BaseModel):
    """One subtask template."""

    model_config = ConfigDict(from_attributes=True)

    title: str = Field(..., min_length=1, max_length=500)
    max_days: int = Field(default=1, ge=1)
    is_mandatory: bool = True

    def to_template(self) -> PlanSubtaskTemplate:
        return PlanSubtaskTemplate(
            title=self.title.strip(),
            max_days=self.max_days,
            is_mandatory=self.is_mandatory,
        )


class PlanVariantSchema(BaseModel):
    """Named variant with its own duration and subtasks."""

    model_config = ConfigDict(from_attributes=True)

    name: str = Field(..., min_length=1, max_length=200)
    duration: int = Field(..., ge=1, description="Duration in days")
    subtasks: list[PlanSubtaskSchema] = Field(default_factory=list)

    def to_variant(self) -> PlanVariant:
        return PlanVariant(
            name=self.name.strip(),
            duration=self.duration,
            subtasks=tuple(s.to_template() for s in self.subtasks),
        )


class PlanCreateRequest(BaseModel):
    """Request body for POST /plans."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    max_days: int = Field(default=7, ge=1, description="Default duration in days")
    subtasks: list[PlanSubtaskSchema] = Field(default_factory=list)
    variants: list[PlanVariantSchema] = Field(default_factory=list)

    def to_data(self) -> PlanData:
        return PlanData(
            name=self.name,
            description=self.description,
            max_days=self.max_days,
            subtasks=[s.to_template() for s in self.subtasks],
            variants=[v.to_variant() for v in self.variants],
        )


class PlanUpdateRequest(BaseModel):
    """Request body for PUT /plans/{id}; omitted fields are unchanged."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = None
    max_days: int | None = Field(default=None, ge=1)
    subtasks: list[PlanSubtaskSchema] | None = None
    variants: list[PlanVariantSchema] | None = None

    def to_data(self) -> PlanData:
        return PlanData(
            name=self.name,
            description=self.description,
            max_days=self.max_days,
            subtasks=(
                [s.to_template() for s in self.subtasks]
                if self.subtasks is not None
                else None
            ),
            variants=(
                [v.to_variant() for v in self.variants]
                if self.variants is not None
                else None
            ),
        )


class PlanResponse(BaseModel):
    """Plan template response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None
    max_days: int
    subtasks: list[PlanSubtaskSchema]
    variants: list[PlanVariantSchema]
    created_by: str
