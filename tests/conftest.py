"""Pytest configuration and fixtures for workdesk.

Uses app.main:app for HTTP tests against a throwaway SQLite file. Env is set
before the app is imported so the cached settings pick it up. All imports
use app.*.
"""

import os
import tempfile
from collections.abc import AsyncIterator

_TEST_DB_DIR = tempfile.mkdtemp(prefix="workdesk-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["TELEMETRY_ENABLED"] = "false"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.application.dtos.user import UserResult  # noqa: E402
from app.core.config import get_settings  # noqa: E402

get_settings.cache_clear()

from app.core.limiter import limiter, reset_login_attempts  # noqa: E402
from app.domain.enums import UserRole  # noqa: E402
from app.infrastructure.persistence.database import (  # noqa: E402
    Base,
    dispose_engine,
    get_engine,
    get_sessionmaker,
)
from app.infrastructure.persistence.repositories import UserRepository  # noqa: E402
from app.infrastructure.security.jwt import create_access_token  # noqa: E402
from app.main import app  # noqa: E402

TEST_PASSWORD = "correct-horse"


async def create_test_user(
    username: str,
    name: str,
    role: UserRole,
    password: str = TEST_PASSWORD,
) -> UserResult:
    """Insert a user directly through the repository (committed)."""
    async with get_sessionmaker()() as session, session.begin():
        return await UserRepository(session).create_user(
            username=username, password=password, name=name, role=role
        )


def bearer(user: UserResult) -> dict[str, str]:
    """Authorization header for user."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role.value)}"}


@pytest.fixture
async def database() -> AsyncIterator[None]:
    """Fresh schema per test; engine disposed afterwards so no connection outlives its loop."""
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    limiter.enabled = False
    reset_login_attempts()
    yield
    await dispose_engine()


@pytest.fixture
async def client(database: None) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def admin(database: None) -> UserResult:
    return await create_test_user("admin", "Ada Admin", UserRole.ADMIN)


@pytest.fixture
async def manager(database: None) -> UserResult:
    return await create_test_user("manager", "Mona Manager", UserRole.MANAGER)


@pytest.fixture
async def staff(database: None) -> UserResult:
    return await create_test_user("staff", "Sam Staff", UserRole.STAFF)


@pytest.fixture
async def other_staff(database: None) -> UserResult:
    return await create_test_user("other", "Olly Other", UserRole.STAFF)
