"""Report API schemas."""

from pydantic import BaseModel, ConfigDict


class AssigneeStatsResponse(BaseModel):
    """Task counts for one assignee."""

    model_config = ConfigDict(from_attributes=True)

    user_id: str
    name: str
    total: int
    completed: int
    overdue: int
    waiting_approval: int


class TaskReportResponse(BaseModel):
    """Response for GET /reports/summary."""

    model_config = ConfigDict(from_attributes=True)

    total_tasks: int
    by_status: dict[str, int]
    by_assignee: list[AssigneeStatsResponse]
    average_progress: int
