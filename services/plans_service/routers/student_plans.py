"""Student plan assignment router (admin)."""

import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from libs.common.datetime_utils import local_today
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_admin
from services.members_service.services.student_ops import get_student
from services.plans_service.schemas import (
    BulkStatusResult,
    BulkStatusUpdate,
    StudentPlanCreate,
    StudentPlanResponse,
    StudentPlanUpdate,
)
from services.plans_service.services import plan_ops
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(tags=["student-plans"])


@router.get("/students/{student_id}/plans", response_model=List[StudentPlanResponse])
async def list_student_plans(
    student_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    """A student's plan history, newest first."""
    await get_student(db, student_id)
    today = local_today()
    plans = await plan_ops.list_student_plans(db, student_id)
    return [plan_ops.student_plan_response(p, today) for p in plans]


@router.post(
    "/students/{student_id}/plans",
    response_model=StudentPlanResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_student_plan(
    student_id: uuid.UUID,
    payload: StudentPlanCreate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    await get_student(db, student_id)
    today = local_today()
    student_plan = await plan_ops.assign_plan(db, student_id, payload, today)
    return plan_ops.student_plan_response(student_plan, today)


@router.post("/student-plans/bulk-status", response_model=BulkStatusResult)
async def bulk_update_student_plan_status(
    payload: BulkStatusUpdate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    updated = await plan_ops.bulk_update_status(db, payload.ids, payload.status)
    return BulkStatusResult(updated=updated)


@router.patch("/student-plans/{student_plan_id}", response_model=StudentPlanResponse)
async def update_student_plan(
    student_plan_id: uuid.UUID,
    payload: StudentPlanUpdate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student_plan = await plan_ops.get_student_plan(db, student_plan_id)
    student_plan = await plan_ops.update_student_plan(db, student_plan, payload)
    return plan_ops.student_plan_response(student_plan)


@router.delete(
    "/student-plans/{student_plan_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_student_plan(
    student_plan_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student_plan = await plan_ops.get_student_plan(db, student_plan_id)
    await db.delete(student_plan)
    await db.commit()
    return None
