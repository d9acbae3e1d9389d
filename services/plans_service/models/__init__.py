"""Plans Service models package."""

from services.plans_service.models.core import Plan, StudentPlan
from services.plans_service.models.enums import StudentPlanStatus

__all__ = [
    "Plan",
    "StudentPlan",
    "StudentPlanStatus",
]
