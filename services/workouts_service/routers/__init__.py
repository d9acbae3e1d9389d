"""Workouts service routers package."""

from services.workouts_service.routers.me import router as me_router
from services.workouts_service.routers.sheets import router as sheets_router

__all__ = [
    "me_router",
    "sheets_router",
]
