"""Aggregate queries behind the dashboards and reports.

Each metric is computed on its own; ``safe_metric`` logs a failing one and
substitutes its zero value so one broken query does not blank the page.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Awaitable, Callable, Optional, TypeVar

from libs.common.datetime_utils import start_of_local_day
from libs.common.logging import get_logger
from services.attendance_service.models import CheckIn
from services.members_service.models import Profile, ProfileRole
from services.plans_service.membership import (
    MembershipStatus,
    days_remaining,
    find_active_plan,
    resolve_plan_status,
)
from services.plans_service.models import Plan, StudentPlan, StudentPlanStatus
from sqlalchemy import distinct, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)

T = TypeVar("T")


async def safe_metric(
    db: AsyncSession, name: str, compute: Callable[[], Awaitable[T]], default: T
) -> T:
    try:
        return await compute()
    except SQLAlchemyError:
        logger.exception("Metric %s failed; reporting %r", name, default)
        await db.rollback()
        return default


def next_month_start(day: date) -> date:
    first = day.replace(day=1)
    return (first + timedelta(days=32)).replace(day=1)


# ---------------------------------------------------------------------------
# Counts
# ---------------------------------------------------------------------------


async def count_students(
    db: AsyncSession, since: Optional[date] = None, until: Optional[date] = None
) -> int:
    query = select(func.count(Profile.id)).where(Profile.role == ProfileRole.STUDENT)
    if since is not None:
        query = query.where(Profile.created_at >= start_of_local_day(since))
    if until is not None:
        query = query.where(Profile.created_at < start_of_local_day(until))
    result = await db.execute(query)
    return result.scalar_one() or 0


async def count_students_with_active_plan(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count(distinct(StudentPlan.student_id))).where(
            StudentPlan.status == StudentPlanStatus.ACTIVE
        )
    )
    return result.scalar_one() or 0


async def count_active_plans(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count(Plan.id)).where(Plan.is_active.is_(True))
    )
    return result.scalar_one() or 0


async def count_checkins_between(
    db: AsyncSession, start: date, end: Optional[date] = None
) -> int:
    query = select(func.count(CheckIn.id)).where(
        CheckIn.check_in_time >= start_of_local_day(start)
    )
    if end is not None:
        query = query.where(CheckIn.check_in_time < start_of_local_day(end))
    result = await db.execute(query)
    return result.scalar_one() or 0


# ---------------------------------------------------------------------------
# Membership lists
# ---------------------------------------------------------------------------


async def expiring_students(db: AsyncSession, today: date) -> list[dict]:
    """Students whose active plan resolves to ``expiring``, soonest first."""
    result = await db.execute(
        select(StudentPlan, Profile)
        .join(Profile, StudentPlan.student_id == Profile.id)
        .where(
            StudentPlan.status == StudentPlanStatus.ACTIVE,
            Profile.role == ProfileRole.STUDENT,
        )
        .execution_options(populate_existing=True)
    )
    plans_by_student = defaultdict(list)
    students = {}
    for student_plan, profile in result.all():
        plans_by_student[profile.id].append(student_plan)
        students[profile.id] = profile

    rows = []
    for student_id, plans in plans_by_student.items():
        active = find_active_plan(plans)
        if resolve_plan_status(active, today) != MembershipStatus.EXPIRING:
            continue
        profile = students[student_id]
        rows.append(
            {
                "student_id": student_id,
                "full_name": profile.full_name,
                "phone": profile.phone,
                "plan_name": active.plan.name if active.plan else None,
                "end_date": active.end_date,
                "days_remaining": days_remaining(active.end_date, today),
            }
        )
    rows.sort(key=lambda row: (row["end_date"], row["full_name"]))
    return rows


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


async def monthly_revenue(
    db: AsyncSession, month_start: date, month_end: Optional[date] = None
) -> Decimal:
    """Sum of plan prices for active student plans started in the month."""
    conditions = [
        StudentPlan.status == StudentPlanStatus.ACTIVE,
        StudentPlan.start_date >= month_start,
    ]
    if month_end is not None:
        conditions.append(StudentPlan.start_date < month_end)
    result = await db.execute(
        select(func.coalesce(func.sum(Plan.price), 0))
        .select_from(StudentPlan)
        .join(Plan, StudentPlan.plan_id == Plan.id)
        .where(*conditions)
    )
    return Decimal(str(result.scalar_one() or 0)).quantize(Decimal("0.01"))


async def plan_distribution(db: AsyncSession) -> list[dict]:
    """Active student plans counted per plan, largest first."""
    result = await db.execute(
        select(Plan.id, Plan.name, func.count(StudentPlan.id))
        .select_from(StudentPlan)
        .join(Plan, StudentPlan.plan_id == Plan.id)
        .where(StudentPlan.status == StudentPlanStatus.ACTIVE)
        .group_by(Plan.id, Plan.name)
        .order_by(func.count(StudentPlan.id).desc(), Plan.name)
    )
    return [
        {"plan_id": plan_id, "plan_name": name, "count": count}
        for plan_id, name, count in result.all()
    ]
