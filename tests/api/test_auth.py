"""Tests for auth endpoints (login, current user, bearer token handling)."""

from httpx import AsyncClient

from app.application.dtos.user import UserResult
from app.infrastructure.security.jwt import create_access_token
from tests.conftest import TEST_PASSWORD, bearer


async def test_login_missing_body_returns_422(client: AsyncClient) -> None:
    """POST /api/v1/auth/login with no body returns 422."""
    response = await client.post("/api/v1/auth/login", json={})
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_login_returns_token_and_user(
    client: AsyncClient, staff: UserResult
) -> None:
    """Username is matched case-insensitively; the token authenticates /me."""
    response = await client.post(
        "/api/v1/auth/login", json={"username": "STAFF", "password": TEST_PASSWORD}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["user"]["id"] == staff.id
    assert data["user"]["role"] == "staff"

    me = await client.get(
        "/api/v1/auth/me",
        headers={"Authorization": f"Bearer {data['access_token']}"},
    )
    assert me.status_code == 200
    assert me.json()["username"] == "staff"


async def test_login_wrong_password_returns_401(
    client: AsyncClient, staff: UserResult
) -> None:
    response = await client.post(
        "/api/v1/auth/login", json={"username": "staff", "password": "nope-nope"}
    )
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_login_unknown_user_returns_same_401(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/login", json={"username": "ghost", "password": TEST_PASSWORD}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid username or password"


async def test_me_without_token_returns_401(client: AsyncClient) -> None:
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.headers.get("WWW-Authenticate") == "Bearer"


async def test_me_with_invalid_token_returns_401(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401


async def test_token_for_unknown_user_returns_401(client: AsyncClient) -> None:
    token = create_access_token("no-such-user", "admin")
    response = await client.get(
        "/api/v1/auth/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


async def test_role_comes_from_store_not_token(
    client: AsyncClient, staff: UserResult
) -> None:
    """A token claiming admin for a staff user does not grant admin access."""
    token = create_access_token(staff.id, "admin")
    response = await client.get(
        "/api/v1/users", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 403


async def test_me_returns_current_user(client: AsyncClient, manager: UserResult) -> None:
    response = await client.get("/api/v1/auth/me", headers=bearer(manager))
    assert response.status_code == 200
    assert response.json()["role"] == "manager"
