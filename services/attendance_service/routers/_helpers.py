"""Shared response builders for attendance routers."""

from services.attendance_service.models import CheckIn
from services.attendance_service.schemas import CheckInResponse, CheckinResultResponse
from services.attendance_service.services.checkin_ops import CheckinResult


def check_in_response(check_in: CheckIn) -> CheckInResponse:
    response = CheckInResponse.model_validate(check_in)
    if check_in.student is not None:
        response.student_name = check_in.student.full_name
        response.student_phone = check_in.student.phone
    return response


def checkin_result_response(result: CheckinResult) -> CheckinResultResponse:
    plan = result.student_plan.plan
    return CheckinResultResponse(
        check_in=CheckInResponse(
            id=result.check_in.id,
            student_id=result.check_in.student_id,
            check_in_time=result.check_in.check_in_time,
            created_at=result.check_in.created_at,
            student_name=result.student.full_name,
            student_phone=result.student.phone,
        ),
        student_name=result.student.full_name,
        plan_name=plan.name if plan else None,
        end_date=result.student_plan.end_date,
        days_remaining=result.days_remaining,
    )
