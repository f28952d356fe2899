"""Plan template use cases."""

from app.application.use_cases.plans.plan_operations import PlanService

__all__ = ["PlanService"]
