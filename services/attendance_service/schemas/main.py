import uuid
from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckinCodeResponse(BaseModel):
    student_id: uuid.UUID
    code: str


class ScanRequest(BaseModel):
    code: str = Field(..., min_length=1)


class FaceCheckinRequest(BaseModel):
    face_encoding: str = Field(..., min_length=1)


class CheckInResponse(BaseModel):
    id: uuid.UUID
    student_id: uuid.UUID
    check_in_time: datetime
    created_at: datetime

    # Populated from the joined profile
    student_name: Optional[str] = None
    student_phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CheckinResultResponse(BaseModel):
    """Outcome of an admitted check-in, shown on the scan screen."""

    check_in: CheckInResponse
    student_name: str
    plan_name: Optional[str] = None
    end_date: Optional[date] = None
    days_remaining: int
