"""Report API: admin summary of task counts."""

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import CurrentUser, get_report_use_case
from app.application.use_cases.reports import GetTaskReportUseCase
from app.schemas.report import TaskReportResponse

router = APIRouter()


@router.get("/summary", response_model=TaskReportResponse)
async def get_summary(
    current_user: CurrentUser,
    use_case: GetTaskReportUseCase = Depends(get_report_use_case),
):
    """Counts by status, per-assignee stats and average progress (admin only)."""
    report = await use_case.get_report(current_user)
    return TaskReportResponse.model_validate(report)
