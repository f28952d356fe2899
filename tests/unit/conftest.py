"""Fixtures for application-layer unit tests: actors and in-memory repositories."""

import pytest

from app.application.dtos.user import UserResult
from app.domain.enums import UserRole
from tests.unit.fakes import FakePlanRepository, FakeTaskRepository, FakeUserRepository


@pytest.fixture
def admin() -> UserResult:
    return UserResult(id="admin-1", username="admin", name="Ada Admin", role=UserRole.ADMIN)


@pytest.fixture
def manager() -> UserResult:
    return UserResult(
        id="manager-1", username="manager", name="Mona Manager", role=UserRole.MANAGER
    )


@pytest.fixture
def staff() -> UserResult:
    return UserResult(id="staff-1", username="staff", name="Sam Staff", role=UserRole.STAFF)


@pytest.fixture
def outsider() -> UserResult:
    return UserResult(id="staff-2", username="other", name="Olly Other", role=UserRole.STAFF)


@pytest.fixture
def task_repo() -> FakeTaskRepository:
    return FakeTaskRepository()


@pytest.fixture
def user_repo(
    admin: UserResult, manager: UserResult, staff: UserResult, outsider: UserResult
) -> FakeUserRepository:
    return FakeUserRepository([admin, manager, staff, outsider])


@pytest.fixture
def plan_repo() -> FakePlanRepository:
    return FakePlanRepository()
