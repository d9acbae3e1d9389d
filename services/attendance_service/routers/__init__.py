"""Attendance service routers package."""

from services.attendance_service.routers.checkins import router as checkins_router
from services.attendance_service.routers.me import router as me_router

__all__ = [
    "checkins_router",
    "me_router",
]
