import uuid
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Exercises
# ---------------------------------------------------------------------------


class ExerciseIn(BaseModel):
    name: str
    muscle_group: Optional[str] = None
    sets: Optional[int] = Field(None, ge=1)
    reps: Optional[str] = None
    weight: Optional[str] = None
    rest_time: Optional[str] = None
    instructions: Optional[str] = None


class ExerciseResponse(ExerciseIn):
    id: uuid.UUID
    workout_sheet_id: uuid.UUID
    order_index: int

    model_config = ConfigDict(from_attributes=True)


class ExerciseListReplace(BaseModel):
    """Full, ordered exercise list; replaces whatever the sheet had."""

    exercises: List[ExerciseIn] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Workout sheets
# ---------------------------------------------------------------------------


class WorkoutSheetCreate(BaseModel):
    student_id: uuid.UUID
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_active: bool = True
    exercises: List[ExerciseIn] = Field(default_factory=list)


class WorkoutSheetUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class WorkoutSheetResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    created_by: uuid.UUID
    name: str
    description: Optional[str] = None
    is_active: bool
    created_at: datetime
    updated_at: datetime
    exercises: List[ExerciseResponse] = []

    model_config = ConfigDict(from_attributes=True)
