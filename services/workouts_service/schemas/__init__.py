"""Workouts Service schemas package."""

from services.workouts_service.schemas.main import (
    ExerciseIn,
    ExerciseListReplace,
    ExerciseResponse,
    WorkoutSheetCreate,
    WorkoutSheetResponse,
    WorkoutSheetUpdate,
)

__all__ = [
    "ExerciseIn",
    "ExerciseListReplace",
    "ExerciseResponse",
    "WorkoutSheetCreate",
    "WorkoutSheetResponse",
    "WorkoutSheetUpdate",
]
