"""Student self-service workouts."""

from typing import List

from fastapi import APIRouter, Depends
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_student
from services.workouts_service.schemas import WorkoutSheetResponse
from services.workouts_service.services import workout_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/workout-sheets", response_model=List[WorkoutSheetResponse])
async def list_my_workout_sheets(
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    """Active sheets only, exercises in order."""
    return await workout_ops.list_workout_sheets(
        db, context.profile.id, active_only=True
    )
