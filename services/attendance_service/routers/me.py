"""Student self-service check-in router."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from libs.db.session import get_async_db
from services.attendance_service.checkin_code import encode_checkin_id
from services.attendance_service.routers._helpers import (
    check_in_response,
    checkin_result_response,
)
from services.attendance_service.schemas import (
    CheckinCodeResponse,
    CheckInResponse,
    CheckinResultResponse,
)
from services.attendance_service.services import checkin_ops
from services.members_service.dependencies import AuthContext, require_student
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/check-in-code", response_model=CheckinCodeResponse)
async def get_my_checkin_code(context: AuthContext = Depends(require_student)):
    """Code to render as a QR for the reception scanner."""
    return CheckinCodeResponse(
        student_id=context.profile.id, code=encode_checkin_id(context.profile.id)
    )


@router.post(
    "/check-in",
    response_model=CheckinResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def check_myself_in(
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    result = await checkin_ops.attempt_checkin(db, context.profile.id)
    return checkin_result_response(result)


@router.get("/check-ins", response_model=List[CheckInResponse])
async def list_my_recent_checkins(
    days: int = Query(checkin_ops.RECENT_CHECKINS_DAYS, ge=1, le=365),
    limit: int = Query(checkin_ops.RECENT_CHECKINS_LIMIT, ge=1, le=100),
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    check_ins = await checkin_ops.recent_checkins(
        db, context.profile.id, days=days, limit=limit
    )
    return [check_in_response(c) for c in check_ins]
