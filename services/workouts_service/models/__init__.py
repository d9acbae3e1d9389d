"""Workouts Service models package."""

from services.workouts_service.models.core import Exercise, WorkoutSheet

__all__ = [
    "Exercise",
    "WorkoutSheet",
]
