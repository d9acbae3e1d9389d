"""Workout sheet operations."""

import uuid
from typing import Iterable, Optional

from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from services.workouts_service.models import Exercise, WorkoutSheet
from services.workouts_service.schemas import ExerciseIn
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

DEFAULT_SETS = 1


class WorkoutSheetNotFound(NotFoundError):
    code = "workout_sheet_not_found"
    default_message = "workout sheet not found"


async def get_workout_sheet(db: AsyncSession, sheet_id: uuid.UUID) -> WorkoutSheet:
    result = await db.execute(
        select(WorkoutSheet)
        .where(WorkoutSheet.id == sheet_id)
        .execution_options(populate_existing=True)
    )
    sheet = result.scalar_one_or_none()
    if sheet is None:
        raise WorkoutSheetNotFound()
    return sheet


async def list_workout_sheets(
    db: AsyncSession, student_id: uuid.UUID, active_only: bool = False
) -> list[WorkoutSheet]:
    query = select(WorkoutSheet).where(WorkoutSheet.student_id == student_id)
    if active_only:
        query = query.where(WorkoutSheet.is_active.is_(True))
    result = await db.execute(
        query.order_by(WorkoutSheet.created_at.desc()).execution_options(
            populate_existing=True
        )
    )
    return list(result.scalars().all())


def build_exercises(items: Iterable[ExerciseIn]) -> list[Exercise]:
    """Turn the submitted rows into exercises numbered by position.

    Rows without a name are dropped before numbering.
    """
    kept = [item for item in items if item.name and item.name.strip()]
    return [
        Exercise(
            name=item.name.strip(),
            muscle_group=item.muscle_group or None,
            sets=item.sets or DEFAULT_SETS,
            reps=item.reps or None,
            weight=item.weight or None,
            rest_time=item.rest_time or None,
            instructions=item.instructions or None,
            order_index=index,
        )
        for index, item in enumerate(kept)
    ]


async def create_workout_sheet(
    db: AsyncSession,
    student_id: uuid.UUID,
    created_by: uuid.UUID,
    name: str,
    description: Optional[str] = None,
    is_active: bool = True,
    exercises: Iterable[ExerciseIn] = (),
) -> WorkoutSheet:
    sheet = WorkoutSheet(
        student_id=student_id,
        created_by=created_by,
        name=name,
        description=description,
        is_active=is_active,
        exercises=build_exercises(exercises),
    )
    db.add(sheet)
    await db.commit()
    logger.info("Created workout sheet %s for student %s", sheet.id, student_id)
    return await get_workout_sheet(db, sheet.id)


async def replace_exercises(
    db: AsyncSession, sheet: WorkoutSheet, items: Iterable[ExerciseIn]
) -> WorkoutSheet:
    sheet.exercises = build_exercises(items)
    db.add(sheet)
    await db.commit()
    logger.info(
        "Replaced exercises of workout sheet %s (%d)", sheet.id, len(sheet.exercises)
    )
    return await get_workout_sheet(db, sheet.id)
