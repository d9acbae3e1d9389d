"""Admin reports - revenue, check-in volume and plan mix for one month."""

import uuid
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from libs.common.datetime_utils import local_today
from libs.db.session import get_async_db
from pydantic import BaseModel
from services.gateway_service.app import metrics
from services.members_service.dependencies import AuthContext, require_admin
from services.plans_service.schemas import Money
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(prefix="/reports", tags=["reports"])


class PlanShare(BaseModel):
    plan_id: uuid.UUID
    plan_name: str
    count: int


class MonthlyReport(BaseModel):
    month: date
    revenue: Money
    checkins: int
    new_students: int
    plan_distribution: List[PlanShare]
    # Per active student plan (denominator is at least 1)
    average_revenue: Money
    average_checkins: int


def _month_start(month: Optional[str]) -> date:
    if not month:
        return local_today().replace(day=1)
    year, _, mon = month.partition("-")
    return date(int(year), int(mon), 1)


@router.get("/monthly", response_model=MonthlyReport)
async def get_monthly_report(
    month: Optional[str] = Query(
        None, pattern=r"^\d{4}-(0[1-9]|1[0-2])$", description="YYYY-MM"
    ),
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    start = _month_start(month)
    end = metrics.next_month_start(start)

    revenue = await metrics.safe_metric(
        db, "revenue", lambda: metrics.monthly_revenue(db, start, end), Decimal("0")
    )
    checkins = await metrics.safe_metric(
        db, "checkins", lambda: metrics.count_checkins_between(db, start, end), 0
    )
    new_students = await metrics.safe_metric(
        db,
        "new_students",
        lambda: metrics.count_students(db, since=start, until=end),
        0,
    )
    distribution = await metrics.safe_metric(
        db, "plan_distribution", lambda: metrics.plan_distribution(db), []
    )

    holders = max(sum(share["count"] for share in distribution), 1)
    return MonthlyReport(
        month=start,
        revenue=revenue,
        checkins=checkins,
        new_students=new_students,
        plan_distribution=distribution,
        average_revenue=(revenue / holders).quantize(Decimal("0.01")),
        average_checkins=round(checkins / holders),
    )
