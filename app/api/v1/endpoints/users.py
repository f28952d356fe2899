"""User API: admin-managed accounts, thin routes delegating to UserService."""

from fastapi import APIRouter, Depends, Request, Response

from app.api.v1.dependencies import (
    CurrentUser,
    get_user_service,
    get_user_service_for_write,
)
from app.application.use_cases.users import UserService
from app.core.limiter import limit_writes
from app.domain.enums import UserRole
from app.schemas.user import PasswordResetRequest, UserCreateRequest, UserResponse

router = APIRouter()


@router.post("", response_model=UserResponse, status_code=201)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreateRequest,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Create a staff, manager or admin account (admin only)."""
    user = await user_service.create_user(
        current_user,
        username=body.username,
        password=body.password,
        name=body.name,
        role=body.role,
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: CurrentUser,
    role: UserRole | None = None,
    user_service: UserService = Depends(get_user_service),
):
    """List users, optionally filtered by role (admin only)."""
    users = await user_service.list_users(current_user, role=role)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service),
):
    """Get user by id (admin, or the user themself)."""
    user = await user_service.get_user(current_user, user_id)
    return UserResponse.model_validate(user)


@router.put("/{user_id}/reset-password", status_code=204)
@limit_writes
async def reset_password(
    request: Request,
    user_id: str,
    body: PasswordResetRequest,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Set a new password for a user (admin only)."""
    await user_service.reset_password(current_user, user_id, body.new_password)
    return Response(status_code=204)


@router.delete("/{user_id}", status_code=204)
@limit_writes
async def delete_user(
    request: Request,
    user_id: str,
    current_user: CurrentUser,
    user_service: UserService = Depends(get_user_service_for_write),
):
    """Delete a user (admin only; not the caller's own account)."""
    await user_service.delete_user(current_user, user_id)
    return Response(status_code=204)
