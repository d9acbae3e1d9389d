"""Student self-service plan views."""

from typing import List

from fastapi import APIRouter, Depends
from libs.common.datetime_utils import local_today
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_student
from services.plans_service.schemas import MembershipResponse, StudentPlanResponse
from services.plans_service.services import plan_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/me", tags=["me"])


@router.get("/membership", response_model=MembershipResponse)
async def get_my_membership(
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    """Derived status badge and the active plan it comes from."""
    plans = await plan_ops.list_student_plans(db, context.profile.id)
    return plan_ops.membership_response(plans)


@router.get("/plans", response_model=List[StudentPlanResponse])
async def list_my_plans(
    context: AuthContext = Depends(require_student),
    db: AsyncSession = Depends(get_async_db),
):
    today = local_today()
    plans = await plan_ops.list_student_plans(db, context.profile.id)
    return [plan_ops.student_plan_response(p, today) for p in plans]
