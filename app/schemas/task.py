"""Task API schemas: creation, progress saves, reviews and responses."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.application.dtos.task import CreateTaskCommand, SubtaskInput, SubtaskPatch
from app.domain.enums import SubtaskStatus, TaskStatus


class SubtaskCreate(BaseModel):
    """Ad hoc subtask given at creation."""

    title: str = Field(..., max_length=500)
    max_days: int | None = Field(default=None, ge=1)
    is_mandatory: bool = True


class TaskCreateRequest(BaseModel):
    """Request body for POST /tasks (admin only).

    With plan_id and no subtasks, subtasks are copied from the plan (or from
    variant_name). deadline may be omitted only when a plan is given.
    """

    title: str = Field(..., max_length=500)
    description: str | None = None
    assigned_to: str
    manager_id: str | None = None
    plan_id: str | None = None
    variant_name: str | None = None
    subtasks: list[SubtaskCreate] = Field(default_factory=list)
    deadline: datetime | None = None
    customer_details: dict[str, Any] | None = None
    payment_details: dict[str, Any] | None = None
    valuation_details: dict[str, Any] | None = None

    def to_command(self) -> CreateTaskCommand:
        return CreateTaskCommand(
            title=self.title,
            description=self.description,
            assigned_to=self.assigned_to,
            manager_id=self.manager_id,
            plan_id=self.plan_id,
            variant_name=self.variant_name,
            subtasks=[
                SubtaskInput(
                    title=s.title, max_days=s.max_days, is_mandatory=s.is_mandatory
                )
                for s in self.subtasks
            ],
            deadline=self.deadline,
            customer_details=self.customer_details,
            payment_details=self.payment_details,
            valuation_details=self.valuation_details,
        )


class SubtaskPatchRequest(BaseModel):
    """Change to one subtask, addressed by id. Omitted fields are unchanged."""

    id: str
    completed: bool | None = None
    status: SubtaskStatus | None = None
    reason: str | None = None
    manager_note: str | None = None

    def to_patch(self) -> SubtaskPatch:
        return SubtaskPatch(
            id=self.id,
            completed=self.completed,
            status=self.status,
            reason=self.reason,
            manager_note=self.manager_note,
        )


class TaskProgressUpdate(BaseModel):
    """Request body for PATCH /tasks/{id}."""

    subtasks: list[SubtaskPatchRequest] | None = None
    status: TaskStatus | None = None
    submission_note: str | None = None


class TaskReviewRequest(BaseModel):
    """Request body for PUT /tasks/{id}/review (admin only)."""

    status: TaskStatus = Field(
        ..., description="completed to approve; in_progress or pending to reject"
    )
    rejection_reason: str | None = None


class SubtaskReviewRequest(BaseModel):
    """Request body for PUT /tasks/{id}/subtasks/{sid}/review."""

    status: SubtaskStatus = Field(..., description="completed or rejected")
    manager_note: str | None = None


class SubtaskDoneRequest(BaseModel):
    """Optional body for POST /tasks/{id}/subtasks/{sid}/done."""

    reason: str | None = None


class SubtaskResponse(BaseModel):
    """Embedded subtask."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status: SubtaskStatus
    completed: bool
    reason: str
    manager_note: str
    max_days: int | None
    is_mandatory: bool


class TaskResponse(BaseModel):
    """Task with its subtasks and completion percentage."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    assigned_to: str
    assigned_by: str
    manager_id: str | None
    plan_id: str | None
    status: TaskStatus
    progress: int
    subtasks: list[SubtaskResponse]
    submission_note: str | None
    rejection_reason: str | None
    deadline: datetime
    customer_details: dict[str, Any] | None
    payment_details: dict[str, Any] | None
    valuation_details: dict[str, Any] | None
    created_at: datetime | None
    updated_at: datetime | None
