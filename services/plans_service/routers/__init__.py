"""Plans service routers package."""

from services.plans_service.routers.me import router as me_router
from services.plans_service.routers.plans import router as plans_router
from services.plans_service.routers.student_plans import router as student_plans_router

__all__ = [
    "me_router",
    "plans_router",
    "student_plans_router",
]
