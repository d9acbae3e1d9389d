import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends
from libs.common.datetime_utils import local_today, start_of_local_month
from libs.db.session import get_async_db
from pydantic import BaseModel
from services.attendance_service.routers._helpers import check_in_response
from services.attendance_service.schemas import CheckInResponse
from services.attendance_service.services import checkin_ops
from services.gateway_service.app import metrics
from services.members_service.dependencies import (
    AuthContext,
    require_admin,
    require_student,
)
from services.members_service.schemas import ProfileResponse
from services.plans_service.schemas import MembershipResponse
from services.plans_service.services import plan_ops
from services.workouts_service.services import workout_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["dashboard"])


class ExpiringStudent(BaseModel):
    student_id: uuid.UUID
    full_name: str
    phone: Optional[str] = None
    plan_name: Optional[str] = None
    end_date: date
    days_remaining: int


class AdminDashboardStats(BaseModel):
    total_students: int
    students_with_active_plan: int
    active_plans: int
    checkins_today: int
    expiring_students: List[ExpiringStudent]


class StudentDashboardResponse(BaseModel):
    profile: ProfileResponse
    membership: MembershipResponse
    checkins_this_month: int
    recent_checkins: List[CheckInResponse]
    active_workout_sheets: int


@router.get("/admin/dashboard-stats", response_model=AdminDashboardStats)
async def get_admin_dashboard_stats(
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Get statistics for the admin dashboard.
    """
    today = local_today()
    return AdminDashboardStats(
        total_students=await metrics.safe_metric(
            db, "total_students", lambda: metrics.count_students(db), 0
        ),
        students_with_active_plan=await metrics.safe_metric(
            db,
            "students_with_active_plan",
            lambda: metrics.count_students_with_active_plan(db),
            0,
        ),
        active_plans=await metrics.safe_metric(
            db, "active_plans", lambda: metrics.count_active_plans(db), 0
        ),
        checkins_today=await metrics.safe_metric(
            db,
            "checkins_today",
            lambda: metrics.count_checkins_between(db, today),
            0,
        ),
        expiring_students=await metrics.safe_metric(
            db,
            "expiring_students",
            lambda: metrics.expiring_students(db, today),
            [],
        ),
    )


@router.get("/me/dashboard", response_model=StudentDashboardResponse)
async def get_student_dashboard(
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    """
    Get the dashboard for the signed-in student.
    Aggregates profile, membership badge, recent check-ins and workouts.
    """
    today = local_today()
    student_id = context.profile.id

    plans = await plan_ops.list_student_plans(db, student_id)
    recent = await checkin_ops.recent_checkins(db, student_id)
    sheets = await workout_ops.list_workout_sheets(db, student_id, active_only=True)
    month_checkins = await checkin_ops.count_checkins_since(
        db, start_of_local_month(today), student_id
    )

    profile = ProfileResponse.model_validate(context.profile)
    profile.email = context.user.email
    return StudentDashboardResponse(
        profile=profile,
        membership=plan_ops.membership_response(plans, today),
        checkins_this_month=month_checkins,
        recent_checkins=[check_in_response(c) for c in recent],
        active_workout_sheets=len(sheets),
    )
