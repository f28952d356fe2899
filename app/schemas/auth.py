"""Auth API schemas."""

from pydantic import BaseModel, Field

from app.schemas.user import UserResponse


class LoginRequest(BaseModel):
    """Request body for login. Username is case-insensitive."""

    username: str = Field(..., min_length=1, max_length=150)
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """JWT token response with the authenticated user."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
