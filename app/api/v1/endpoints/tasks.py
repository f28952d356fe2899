"""Task API: creation, listing, progress saves and the two review layers.

Thin routes delegating to TaskService; every rule lives in the approval
engines behind it.
"""

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    CurrentUser,
    get_task_service,
    get_task_service_for_write,
)
from app.application.use_cases.tasks import TaskService
from app.core.limiter import limit_writes
from app.schemas.task import (
    SubtaskDoneRequest,
    SubtaskReviewRequest,
    TaskCreateRequest,
    TaskProgressUpdate,
    TaskResponse,
    TaskReviewRequest,
)

router = APIRouter()


@router.post("", response_model=TaskResponse, status_code=201)
@limit_writes
async def create_task(
    request: Request,
    body: TaskCreateRequest,
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Assign a new task with its subtasks (admin only)."""
    task = await task_service.create_task(current_user, body.to_command())
    return TaskResponse.model_validate(task)


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """List tasks visible to the caller after marking past-deadline tasks overdue.

    Admins see every task, managers the tasks they manage or are assigned,
    staff their own tasks.
    """
    tasks = await task_service.list_tasks(current_user)
    return [TaskResponse.model_validate(t) for t in tasks]


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: str,
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service),
):
    return TaskResponse.model_validate(await task_service.get_task(task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
@limit_writes
async def update_task_progress(
    request: Request,
    task_id: str,
    body: TaskProgressUpdate,
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Save subtask progress and optionally request a status.

    Only admins complete tasks; a completion request from anyone else is
    recorded as waiting_approval.
    """
    task = await task_service.update_task_progress(
        current_user,
        task_id=task_id,
        subtasks=[s.to_patch() for s in body.subtasks] if body.subtasks is not None else None,
        status=body.status,
        submission_note=body.submission_note,
    )
    return TaskResponse.model_validate(task)


@router.put("/{task_id}/review", response_model=TaskResponse)
@limit_writes
async def review_task(
    request: Request,
    task_id: str,
    body: TaskReviewRequest,
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Approve (completed) or reject (in_progress / pending) a task (admin only)."""
    task = await task_service.review_task(
        current_user,
        task_id=task_id,
        status=body.status,
        rejection_reason=body.rejection_reason,
    )
    return TaskResponse.model_validate(task)


@router.post("/{task_id}/subtasks/{subtask_id}/done", response_model=TaskResponse)
@limit_writes
async def mark_subtask_done(
    request: Request,
    task_id: str,
    subtask_id: str,
    current_user: CurrentUser,
    body: SubtaskDoneRequest | None = None,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Submit one subtask for manager review."""
    task = await task_service.mark_subtask_done(
        current_user,
        task_id=task_id,
        subtask_id=subtask_id,
        reason=body.reason if body else None,
    )
    return TaskResponse.model_validate(task)


@router.put("/{task_id}/subtasks/{subtask_id}/review", response_model=TaskResponse)
@limit_writes
async def review_subtask(
    request: Request,
    task_id: str,
    subtask_id: str,
    body: SubtaskReviewRequest,
    current_user: CurrentUser,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Approve or reject a waiting subtask (task manager or admin)."""
    task = await task_service.review_subtask(
        current_user,
        task_id=task_id,
        subtask_id=subtask_id,
        status=body.status,
        manager_note=body.manager_note,
    )
    return TaskResponse.model_validate(task)
