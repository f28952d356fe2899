"""Plan API: template CRUD. Everyone authenticated may read; admins write."""

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import (
    CurrentUser,
    get_plan_service,
    get_plan_service_for_write,
)
from app.application.use_cases.plans import PlanService
from app.core.limiter import limit_writes
from app.schemas.plan import PlanCreateRequest, PlanResponse, PlanUpdateRequest

router = APIRouter()


@router.post("", response_model=PlanResponse, status_code=201)
@limit_writes
async def create_plan(
    request: Request,
    body: PlanCreateRequest,
    current_user: CurrentUser,
    plan_service: PlanService = Depends(get_plan_service_for_write),
):
    """Create a plan template (admin only)."""
    plan = await plan_service.create_plan(current_user, body.to_data())
    return PlanResponse.model_validate(plan)


@router.get("", response_model=list[PlanResponse])
async def list_plans(
    current_user: CurrentUser,
    plan_service: PlanService = Depends(get_plan_service),
):
    """List plan templates ordered by name."""
    return [PlanResponse.model_validate(p) for p in await plan_service.list_plans()]


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: str,
    current_user: CurrentUser,
    plan_service: PlanService = Depends(get_plan_service),
):
    return PlanResponse.model_validate(await plan_service.get_plan(plan_id))


@router.put("/{plan_id}", response_model=PlanResponse)
@limit_writes
async def update_plan(
    request: Request,
    plan_id: str,
    body: PlanUpdateRequest,
    current_user: CurrentUser,
    plan_service: PlanService = Depends(get_plan_service_for_write),
):
    """Update a plan template (admin only). Existing tasks keep their subtasks."""
    plan = await plan_service.update_plan(current_user, plan_id, body.to_data())
    return PlanResponse.model_validate(plan)


@router.delete("/{plan_id}", status_code=204)
@limit_writes
async def delete_plan(
    request: Request,
    plan_id: str,
    current_user: CurrentUser,
    plan_service: PlanService = Depends(get_plan_service_for_write),
):
    """Delete a plan template (admin only)."""
    await plan_service.delete_plan(current_user, plan_id)
    return Response(status_code=204)
