"""Plans Service schemas package."""

from services.plans_service.schemas.main import (  # noqa: F401
    BulkStatusResult,
    BulkStatusUpdate,
    EndDatePreview,
    MembershipResponse,
    Money,
    PlanBase,
    PlanCreate,
    PlanResponse,
    PlanUpdate,
    StudentPlanCreate,
    StudentPlanResponse,
    StudentPlanUpdate,
)
