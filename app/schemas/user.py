"""User API schemas."""

from pydantic import BaseModel, ConfigDict, Field

from app.domain.enums import UserRole


class UserCreateRequest(BaseModel):
    """Request body for creating a user (admin only)."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    role: UserRole = UserRole.STAFF


class PasswordResetRequest(BaseModel):
    """Request body for PUT /users/{id}/reset-password."""

    new_password: str = Field(..., min_length=1)


class UserResponse(BaseModel):
    """User response (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    name: str
    role: UserRole
    is_active: bool
