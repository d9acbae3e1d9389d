"""Plan catalog and student plan operations."""

import uuid
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from libs.common.datetime_utils import local_today
from libs.common.errors import ConflictError, NotFoundError
from libs.common.logging import get_logger
from services.plans_service.membership import (
    badge_for,
    compute_end_date,
    days_remaining,
    find_active_plan,
    resolve_plan_status,
    resolve_student_status,
)
from services.plans_service.models import Plan, StudentPlan, StudentPlanStatus
from services.plans_service.schemas import (
    MembershipResponse,
    StudentPlanCreate,
    StudentPlanResponse,
    StudentPlanUpdate,
)
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class PlanNotFound(NotFoundError):
    code = "plan_not_found"
    default_message = "plan not found"


class StudentPlanNotFound(NotFoundError):
    code = "student_plan_not_found"
    default_message = "student plan not found"


class PlanInUse(ConflictError):
    code = "plan_in_use"
    default_message = "plan has students with an active membership"


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------


async def get_plan(db: AsyncSession, plan_id: uuid.UUID) -> Plan:
    result = await db.execute(select(Plan).where(Plan.id == plan_id))
    plan = result.scalar_one_or_none()
    if plan is None:
        raise PlanNotFound()
    return plan


async def count_active_references(db: AsyncSession, plan_id: uuid.UUID) -> int:
    result = await db.execute(
        select(func.count(StudentPlan.id)).where(
            StudentPlan.plan_id == plan_id,
            StudentPlan.status == StudentPlanStatus.ACTIVE,
        )
    )
    return result.scalar_one() or 0


async def delete_plan(db: AsyncSession, plan_id: uuid.UUID) -> None:
    """Delete a plan unless an active student plan still points at it.

    Inactive and expired history rows go with the plan (storage cascade).
    """
    plan = await get_plan(db, plan_id)

    active_refs = await count_active_references(db, plan_id)
    if active_refs:
        logger.info(
            "Refused to delete plan %s: %d active student plan(s)",
            plan_id,
            active_refs,
        )
        raise PlanInUse(
            "plan has students with an active membership; "
            "deactivate the plan or move the students first"
        )

    await db.delete(plan)
    await db.commit()
    logger.info("Deleted plan %s (%s)", plan_id, plan.name)


# ---------------------------------------------------------------------------
# Student plans
# ---------------------------------------------------------------------------


async def get_student_plan(db: AsyncSession, student_plan_id: uuid.UUID) -> StudentPlan:
    result = await db.execute(
        select(StudentPlan)
        .where(StudentPlan.id == student_plan_id)
        .execution_options(populate_existing=True)
    )
    student_plan = result.scalar_one_or_none()
    if student_plan is None:
        raise StudentPlanNotFound()
    return student_plan


async def list_student_plans(
    db: AsyncSession, student_id: uuid.UUID
) -> list[StudentPlan]:
    result = await db.execute(
        select(StudentPlan)
        .where(StudentPlan.student_id == student_id)
        .order_by(StudentPlan.created_at.desc())
        .execution_options(populate_existing=True)
    )
    return list(result.scalars().all())


async def load_plans_by_student(
    db: AsyncSession, student_ids: Iterable[uuid.UUID]
) -> dict[uuid.UUID, list[StudentPlan]]:
    """Batch-load plan rows for many students (one query)."""
    ids = list(student_ids)
    grouped: dict[uuid.UUID, list[StudentPlan]] = defaultdict(list)
    if not ids:
        return grouped
    result = await db.execute(
        select(StudentPlan)
        .where(StudentPlan.student_id.in_(ids))
        .execution_options(populate_existing=True)
    )
    for student_plan in result.scalars().all():
        grouped[student_plan.student_id].append(student_plan)
    return grouped


async def assign_plan(
    db: AsyncSession,
    student_id: uuid.UUID,
    data: StudentPlanCreate,
    today: Optional[date] = None,
) -> StudentPlan:
    plan = await get_plan(db, data.plan_id)
    start_date = data.start_date or today or local_today()
    end_date = data.end_date or compute_end_date(start_date, plan.duration_months)

    student_plan = StudentPlan(
        student_id=student_id,
        plan_id=plan.id,
        start_date=start_date,
        end_date=end_date,
        status=data.status,
    )
    db.add(student_plan)
    await db.commit()
    logger.info(
        "Assigned plan %s to student %s (%s..%s)",
        plan.name,
        student_id,
        start_date,
        end_date,
    )
    return await get_student_plan(db, student_plan.id)


async def update_student_plan(
    db: AsyncSession, student_plan: StudentPlan, data: StudentPlanUpdate
) -> StudentPlan:
    """Apply an admin edit.

    When the plan or the start date changes and no explicit end date is
    sent, the end date is recomputed; an explicit end date is stored as-is.
    """
    update_data = data.model_dump(exclude_unset=True)
    schedule_changed = "plan_id" in update_data or "start_date" in update_data

    for field, value in update_data.items():
        if value is not None:
            setattr(student_plan, field, value)

    if schedule_changed and update_data.get("end_date") is None:
        plan = await get_plan(db, student_plan.plan_id)
        student_plan.end_date = compute_end_date(
            student_plan.start_date, plan.duration_months
        )

    db.add(student_plan)
    await db.commit()
    return await get_student_plan(db, student_plan.id)


async def bulk_update_status(
    db: AsyncSession, ids: list[uuid.UUID], status: StudentPlanStatus
) -> int:
    result = await db.execute(
        update(StudentPlan)
        .where(StudentPlan.id.in_(ids))
        .values(status=status)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    logger.info("Bulk set %d student plan(s) to %s", result.rowcount, status.value)
    return result.rowcount


# ---------------------------------------------------------------------------
# Read models
# ---------------------------------------------------------------------------


def student_plan_response(
    student_plan: StudentPlan, today: Optional[date] = None
) -> StudentPlanResponse:
    today = today or local_today()
    response = StudentPlanResponse.model_validate(student_plan)
    response.membership_status = resolve_plan_status(student_plan, today)
    response.days_remaining = days_remaining(student_plan.end_date, today)
    return response


def membership_response(
    plans: Iterable[StudentPlan], today: Optional[date] = None
) -> MembershipResponse:
    today = today or local_today()
    plans = list(plans)
    status = resolve_student_status(plans, today)
    badge = badge_for(status)
    active = find_active_plan(plans)
    return MembershipResponse(
        status=badge.status,
        label=badge.label,
        severity=badge.severity,
        days_remaining=days_remaining(active.end_date, today) if active else None,
        active_plan=student_plan_response(active, today) if active else None,
    )
