"""Check-in eligibility gate.

Every check-in path (scanned code, self check-in, face match) ends in
``attempt_checkin``. A check-in is admitted when the student has a plan row
flagged ``active`` whose end date is not before today; plan rows are only
read, never updated.
"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from libs.common.datetime_utils import local_today, start_of_local_day, utc_now
from libs.common.errors import GymError
from libs.common.logging import get_logger
from services.attendance_service.checkin_code import decode_checkin_code
from services.attendance_service.models import CheckIn
from services.members_service.models import Profile
from services.members_service.services.student_ops import (  # noqa: F401
    StudentNotFound,
    get_student,
)
from services.plans_service.membership import days_remaining, find_active_plan
from services.plans_service.models import StudentPlan
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

RECENT_CHECKINS_DAYS = 7
RECENT_CHECKINS_LIMIT = 5


class NoActivePlan(GymError):
    status_code = 422
    code = "no_active_plan"
    default_message = "no active plan"


class PlanExpired(GymError):
    status_code = 422
    code = "plan_expired"
    default_message = "plan expired"


@dataclass
class CheckinResult:
    check_in: CheckIn
    student: Profile
    student_plan: StudentPlan
    days_remaining: int


async def attempt_checkin(
    db: AsyncSession, student_id: uuid.UUID, today: Optional[date] = None
) -> CheckinResult:
    """Admit the student and record one check-in, or raise.

    Raises ``StudentNotFound``, ``NoActivePlan`` or ``PlanExpired``; nothing
    is written in those cases.
    """
    today = today or local_today()
    student = await get_student(db, student_id)

    result = await db.execute(
        select(StudentPlan)
        .where(StudentPlan.student_id == student.id)
        .execution_options(populate_existing=True)
    )
    active = find_active_plan(result.scalars().all())
    if active is None:
        logger.info("Check-in refused for %s: no active plan", student.id)
        raise NoActivePlan()
    if active.end_date < today:
        logger.info(
            "Check-in refused for %s: plan ended %s", student.id, active.end_date
        )
        raise PlanExpired()

    check_in = CheckIn(student_id=student.id, check_in_time=utc_now())
    db.add(check_in)
    await db.commit()
    logger.info(
        "Checked in student %s",
        student.id,
        extra={"extra_fields": {"check_in_id": str(check_in.id)}},
    )
    return CheckinResult(
        check_in=check_in,
        student=student,
        student_plan=active,
        days_remaining=days_remaining(active.end_date, today),
    )


async def checkin_with_code(
    db: AsyncSession, code: str, today: Optional[date] = None
) -> CheckinResult:
    student_id = decode_checkin_code(code)
    return await attempt_checkin(db, student_id, today)


async def recent_checkins(
    db: AsyncSession,
    student_id: uuid.UUID,
    days: int = RECENT_CHECKINS_DAYS,
    limit: int = RECENT_CHECKINS_LIMIT,
    now: Optional[datetime] = None,
) -> list[CheckIn]:
    """The student's latest check-ins within the last ``days`` days."""
    now = now or utc_now()
    since = now - timedelta(days=days)
    result = await db.execute(
        select(CheckIn)
        .where(CheckIn.student_id == student_id, CheckIn.check_in_time >= since)
        .order_by(CheckIn.check_in_time.desc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def count_checkins_since(
    db: AsyncSession, since: datetime, student_id: Optional[uuid.UUID] = None
) -> int:
    query = select(func.count(CheckIn.id)).where(CheckIn.check_in_time >= since)
    if student_id is not None:
        query = query.where(CheckIn.student_id == student_id)
    result = await db.execute(query)
    return result.scalar_one() or 0


async def count_checkins_today(
    db: AsyncSession, today: Optional[date] = None, student_id: Optional[uuid.UUID] = None
) -> int:
    today = today or local_today()
    return await count_checkins_since(db, start_of_local_day(today), student_id)
