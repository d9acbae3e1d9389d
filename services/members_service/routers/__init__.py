"""Members service routers package."""

from services.members_service.routers.auth import router as auth_router
from services.members_service.routers.profile import router as profile_router
from services.members_service.routers.students import router as students_router

__all__ = [
    "auth_router",
    "profile_router",
    "students_router",
]
