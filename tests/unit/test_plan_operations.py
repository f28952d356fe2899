"""PlanService: admin-managed task templates."""

import pytest

from app.application.dtos.plan import PlanData
from app.application.dtos.user import UserResult
from app.application.use_cases.plans import PlanService
from app.domain.entities.plan import PlanSubtaskTemplate, PlanVariant
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from tests.unit.fakes import FakePlanRepository


@pytest.fixture
def service(plan_repo: FakePlanRepository) -> PlanService:
    return PlanService(plan_repo)


async def test_create_plan_defaults(service: PlanService, admin: UserResult) -> None:
    plan = await service.create_plan(
        admin, PlanData(name="  Valuation ", subtasks=[PlanSubtaskTemplate("Inspect")])
    )
    assert plan.name == "Valuation"
    assert plan.max_days == 7
    assert plan.created_by == "admin-1"
    assert plan.variants == []
    assert (await service.get_plan(plan.id)).name == "Valuation"


async def test_only_admin_manages_plans(
    service: PlanService, manager: UserResult
) -> None:
    with pytest.raises(AuthorizationException):
        await service.create_plan(manager, PlanData(name="x"))
    with pytest.raises(AuthorizationException):
        await service.delete_plan(manager, "p1")


@pytest.mark.parametrize(
    "data",
    [
        PlanData(name=""),
        PlanData(name="x", max_days=0),
        PlanData(name="x", subtasks=[PlanSubtaskTemplate(" ")]),
        PlanData(name="x", subtasks=[PlanSubtaskTemplate("a", max_days=0)]),
        PlanData(name="x", variants=[PlanVariant("Fast", 0)]),
        PlanData(name="x", variants=[PlanVariant("Fast", 1), PlanVariant("fast", 2)]),
        PlanData(name="x", variants=[PlanVariant("", 1)]),
    ],
)
async def test_create_plan_validation(
    service: PlanService, admin: UserResult, data: PlanData
) -> None:
    with pytest.raises(ValidationException):
        await service.create_plan(admin, data)


async def test_update_plan_partial(service: PlanService, admin: UserResult) -> None:
    plan = await service.create_plan(
        admin, PlanData(name="Valuation", description="desc", max_days=4)
    )
    updated = await service.update_plan(
        admin, plan.id, PlanData(variants=[PlanVariant("Express", 2)])
    )
    assert updated.name == "Valuation"
    assert updated.description == "desc"
    assert updated.max_days == 4
    assert [v.name for v in updated.variants] == ["Express"]


async def test_update_plan_rejects_blank_name(
    service: PlanService, admin: UserResult
) -> None:
    plan = await service.create_plan(admin, PlanData(name="Valuation"))
    with pytest.raises(ValidationException):
        await service.update_plan(admin, plan.id, PlanData(name="  "))


async def test_list_plans_sorted(service: PlanService, admin: UserResult) -> None:
    await service.create_plan(admin, PlanData(name="Survey"))
    await service.create_plan(admin, PlanData(name="Audit"))
    assert [p.name for p in await service.list_plans()] == ["Audit", "Survey"]


async def test_delete_plan(service: PlanService, admin: UserResult) -> None:
    plan = await service.create_plan(admin, PlanData(name="Valuation"))
    await service.delete_plan(admin, plan.id)
    with pytest.raises(ResourceNotFoundException):
        await service.get_plan(plan.id)
    with pytest.raises(ResourceNotFoundException):
        await service.delete_plan(admin, plan.id)
