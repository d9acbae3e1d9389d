import uuid
from datetime import date, datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, condecimal
from services.plans_service.membership import BadgeSeverity, MembershipStatus
from services.plans_service.models.enums import StudentPlanStatus

# Stored as NUMERIC(10,2); sent to clients as a JSON number
Money = Annotated[
    condecimal(ge=0, max_digits=10, decimal_places=2),
    PlainSerializer(float, return_type=float, when_used="json"),
]


# ---------------------------------------------------------------------------
# Plans
# ---------------------------------------------------------------------------


class PlanBase(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Money
    duration_months: int = Field(..., ge=1)
    is_active: bool = True


class PlanCreate(PlanBase):
    pass


class PlanUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    price: Optional[Money] = None
    duration_months: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class PlanResponse(PlanBase):
    id: uuid.UUID
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class EndDatePreview(BaseModel):
    plan_id: uuid.UUID
    start_date: date
    end_date: date


# ---------------------------------------------------------------------------
# Student plans
# ---------------------------------------------------------------------------


class StudentPlanCreate(BaseModel):
    plan_id: uuid.UUID
    # Defaults to today; end_date defaults to start_date + plan duration
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: StudentPlanStatus = StudentPlanStatus.ACTIVE


class StudentPlanUpdate(BaseModel):
    plan_id: Optional[uuid.UUID] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[StudentPlanStatus] = None


class StudentPlanResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    plan_id: uuid.UUID
    start_date: date
    end_date: date
    status: StudentPlanStatus
    created_at: datetime
    updated_at: datetime
    plan: Optional[PlanResponse] = None

    # Derived at read time for this term
    membership_status: Optional[MembershipStatus] = None
    days_remaining: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class BulkStatusUpdate(BaseModel):
    ids: List[uuid.UUID] = Field(..., min_length=1)
    status: StudentPlanStatus


class BulkStatusResult(BaseModel):
    updated: int


class MembershipResponse(BaseModel):
    """Derived membership badge plus the term it was derived from."""

    status: MembershipStatus
    label: str
    severity: BadgeSeverity
    days_remaining: Optional[int] = None
    active_plan: Optional[StudentPlanResponse] = None
