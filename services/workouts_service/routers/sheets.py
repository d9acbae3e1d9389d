"""Workout sheets router (admin)."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_admin
from services.members_service.services.student_ops import get_student
from services.workouts_service.schemas import (
    ExerciseListReplace,
    WorkoutSheetCreate,
    WorkoutSheetResponse,
    WorkoutSheetUpdate,
)
from services.workouts_service.services import workout_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["workout-sheets"])


@router.get(
    "/students/{student_id}/workout-sheets",
    response_model=List[WorkoutSheetResponse],
)
async def list_student_workout_sheets(
    student_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await get_student(db, student_id)
    return await workout_ops.list_workout_sheets(db, student_id)


@router.post(
    "/workout-sheets",
    response_model=WorkoutSheetResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_workout_sheet(
    payload: WorkoutSheetCreate,
    context: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await get_student(db, payload.student_id)
    return await workout_ops.create_workout_sheet(
        db,
        student_id=payload.student_id,
        created_by=context.profile.id,
        name=payload.name,
        description=payload.description,
        is_active=payload.is_active,
        exercises=payload.exercises,
    )


@router.get("/workout-sheets/{sheet_id}", response_model=WorkoutSheetResponse)
async def get_workout_sheet(
    sheet_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await workout_ops.get_workout_sheet(db, sheet_id)


@router.patch("/workout-sheets/{sheet_id}", response_model=WorkoutSheetResponse)
async def update_workout_sheet(
    sheet_id: uuid.UUID,
    payload: WorkoutSheetUpdate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Edit name/description, or toggle ``is_active``."""
    sheet = await workout_ops.get_workout_sheet(db, sheet_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(sheet, field, value)

    db.add(sheet)
    await db.commit()
    return await workout_ops.get_workout_sheet(db, sheet_id)


@router.put(
    "/workout-sheets/{sheet_id}/exercises", response_model=WorkoutSheetResponse
)
async def replace_workout_exercises(
    sheet_id: uuid.UUID,
    payload: ExerciseListReplace,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    sheet = await workout_ops.get_workout_sheet(db, sheet_id)
    return await workout_ops.replace_exercises(db, sheet, payload.exercises)


@router.delete("/workout-sheets/{sheet_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workout_sheet(
    sheet_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    sheet = await workout_ops.get_workout_sheet(db, sheet_id)
    await db.delete(sheet)
    await db.commit()
    return None
