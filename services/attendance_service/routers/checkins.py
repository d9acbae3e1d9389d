"""Admin check-in router - reception scanning and history."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.common.config import get_settings
from libs.common.errors import NotFoundError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.attendance_service.checkin_code import encode_checkin_id
from services.attendance_service.face import FaceMatcher, get_face_matcher
from services.attendance_service.models import CheckIn
from services.attendance_service.routers._helpers import (
    check_in_response,
    checkin_result_response,
)
from services.attendance_service.schemas import (
    CheckinCodeResponse,
    CheckInResponse,
    CheckinResultResponse,
    FaceCheckinRequest,
    ScanRequest,
)
from services.attendance_service.services import checkin_ops
from services.members_service.dependencies import AuthContext, require_admin
from services.members_service.models import Profile
from services.members_service.services.student_ops import get_student
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)
router = APIRouter(tags=["check-ins"])


@router.post("/check-ins/scan", response_model=CheckinResultResponse)
async def scan_checkin_code(
    payload: ScanRequest,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Check a student in from a scanned QR code."""
    result = await checkin_ops.checkin_with_code(db, payload.code)
    return checkin_result_response(result)


@router.post("/check-ins/face", response_model=CheckinResultResponse)
async def face_checkin(
    payload: FaceCheckinRequest,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
    matcher: FaceMatcher = Depends(get_face_matcher),
):
    student_id = await matcher.identify(payload.face_encoding)
    if student_id is None:
        raise NotFoundError("no enrolled student matches this face")
    result = await checkin_ops.attempt_checkin(db, student_id)
    return checkin_result_response(result)


@router.get("/check-ins", response_model=List[CheckInResponse])
async def list_checkins(
    search: Optional[str] = Query(None, description="Student name or phone"),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Latest check-ins, newest first."""
    limit = limit or get_settings().CHECKIN_HISTORY_LIMIT
    query = select(CheckIn).join(Profile, CheckIn.student_id == Profile.id)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(Profile.full_name.ilike(pattern), Profile.phone.ilike(pattern))
        )
    result = await db.execute(
        query.order_by(CheckIn.check_in_time.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return [check_in_response(c) for c in result.scalars().all()]


@router.delete("/check-ins/{check_in_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_checkin(
    check_in_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    result = await db.execute(select(CheckIn).where(CheckIn.id == check_in_id))
    check_in = result.scalar_one_or_none()
    if check_in is None:
        raise NotFoundError("check-in not found")

    await db.delete(check_in)
    await db.commit()
    logger.info("Deleted check-in %s", check_in_id)
    return None


@router.get("/students/{student_id}/check-in-code", response_model=CheckinCodeResponse)
async def get_student_checkin_code(
    student_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student = await get_student(db, student_id)
    return CheckinCodeResponse(student_id=student.id, code=encode_checkin_id(student.id))
