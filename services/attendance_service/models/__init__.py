"""Attendance Service models package."""

from services.attendance_service.models.core import CheckIn

__all__ = [
    "CheckIn",
]
