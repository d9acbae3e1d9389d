"""Plan catalog router (admin)."""

import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.common.datetime_utils import local_today
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_admin
from services.plans_service.membership import compute_end_date
from services.plans_service.models import Plan
from services.plans_service.schemas import (
    EndDatePreview,
    PlanCreate,
    PlanResponse,
    PlanUpdate,
)
from services.plans_service.services import plan_ops
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)
router = APIRouter(prefix="/plans", tags=["plans"])


@router.get("/", response_model=List[PlanResponse])
async def list_plans(
    search: Optional[str] = Query(None),
    active_only: bool = Query(False),
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    query = select(Plan)
    if search:
        query = query.where(Plan.name.ilike(f"%{search.strip()}%"))
    if active_only:
        query = query.where(Plan.is_active.is_(True))
    result = await db.execute(query.order_by(Plan.name))
    return result.scalars().all()


@router.post("/", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
async def create_plan(
    payload: PlanCreate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    plan = Plan(**payload.model_dump())
    db.add(plan)
    await db.commit()
    logger.info("Created plan %s (%s)", plan.id, plan.name)
    return plan


@router.get("/{plan_id}", response_model=PlanResponse)
async def get_plan(
    plan_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    return await plan_ops.get_plan(db, plan_id)


@router.patch("/{plan_id}", response_model=PlanResponse)
async def update_plan(
    plan_id: uuid.UUID,
    payload: PlanUpdate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Edit a plan. Sending only ``is_active`` toggles it."""
    plan = await plan_ops.get_plan(db, plan_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(plan, field, value)

    db.add(plan)
    await db.commit()
    return plan


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_plan(
    plan_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """Delete a plan; refused with 409 while students hold it actively."""
    await plan_ops.delete_plan(db, plan_id)
    return None


@router.get("/{plan_id}/end-date", response_model=EndDatePreview)
async def preview_end_date(
    plan_id: uuid.UUID,
    start_date: Optional[date] = Query(None),
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """End date a new assignment of this plan would get."""
    plan = await plan_ops.get_plan(db, plan_id)
    start = start_date or local_today()
    return EndDatePreview(
        plan_id=plan.id,
        start_date=start,
        end_date=compute_end_date(start, plan.duration_months),
    )
