"""Attendance Service schemas package."""

from services.attendance_service.schemas.main import (
    CheckinCodeResponse,
    CheckInResponse,
    CheckinResultResponse,
    FaceCheckinRequest,
    ScanRequest,
)

__all__ = [
    "CheckinCodeResponse",
    "CheckInResponse",
    "CheckinResultResponse",
    "FaceCheckinRequest",
    "ScanRequest",
]
