"""Auth API: login and current user.

JWT created via infrastructure security; credentials checked by UserService.
"""

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import CurrentUser, get_user_service
from app.application.use_cases.users import UserService
from app.core.limiter import check_login_rate_per_username, limit_auth
from app.infrastructure.security.jwt import create_access_token
from app.schemas.auth import LoginRequest, TokenResponse
from app.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_service: UserService = Depends(get_user_service),
):
    """Authenticate with username (case-insensitive) and password; return JWT."""
    check_login_rate_per_username(body.username)
    user = await user_service.authenticate(body.username, body.password)
    token = create_access_token(user.id, user.role.value)
    return TokenResponse(access_token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Return the currently authenticated user from JWT.

    Requires Authorization: Bearer <token>.
    """
    return UserResponse.model_validate(current_user)
