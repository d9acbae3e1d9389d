"""
Model factories for creating valid test data.

Every factory produces a valid, insertable SQLAlchemy model instance.
Override any field via kwargs.

Usage:
    student = ProfileFactory.create(full_name="Ana Souza")
    db_session.add(student)
    await db_session.commit()
"""

import random
import uuid
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _uuid() -> uuid.UUID:
    return uuid.uuid4()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _unique_cpf() -> str:
    return "".join(str(random.randint(0, 9)) for _ in range(11))


# ---------------------------------------------------------------------------
# Members Service
# ---------------------------------------------------------------------------


class ProfileFactory:
    @staticmethod
    def create(**overrides):
        from services.members_service.models import Profile, ProfileRole

        defaults = {
            "id": _uuid(),
            "user_id": _uuid(),
            "full_name": "Test Student",
            "phone": "11999990000",
            "cpf": _unique_cpf(),
            "role": ProfileRole.STUDENT,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Profile(**defaults)

    @staticmethod
    def admin(**overrides):
        from services.members_service.models import ProfileRole

        defaults = {"full_name": "Test Admin", "role": ProfileRole.ADMIN}
        defaults.update(overrides)
        return ProfileFactory.create(**defaults)


# ---------------------------------------------------------------------------
# Plans Service
# ---------------------------------------------------------------------------


class PlanFactory:
    @staticmethod
    def create(**overrides):
        from services.plans_service.models import Plan

        defaults = {
            "id": _uuid(),
            "name": "Mensal",
            "description": "Monthly membership",
            "price": Decimal("89.90"),
            "duration_months": 1,
            "is_active": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Plan(**defaults)


class StudentPlanFactory:
    @staticmethod
    def create(student_id=None, plan_id=None, **overrides):
        from services.plans_service.models import StudentPlan, StudentPlanStatus

        start = overrides.pop("start_date", date.today())
        defaults = {
            "id": _uuid(),
            "student_id": student_id or _uuid(),
            "plan_id": plan_id or _uuid(),
            "start_date": start,
            "end_date": start + timedelta(days=30),
            "status": StudentPlanStatus.ACTIVE,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return StudentPlan(**defaults)


# ---------------------------------------------------------------------------
# Attendance Service
# ---------------------------------------------------------------------------


class CheckInFactory:
    @staticmethod
    def create(student_id=None, **overrides):
        from services.attendance_service.models import CheckIn

        defaults = {
            "id": _uuid(),
            "student_id": student_id or _uuid(),
            "check_in_time": _now(),
            "created_at": _now(),
        }
        defaults.update(overrides)
        return CheckIn(**defaults)


# ---------------------------------------------------------------------------
# Workouts Service
# ---------------------------------------------------------------------------


class WorkoutSheetFactory:
    @staticmethod
    def create(student_id=None, created_by=None, **overrides):
        from services.workouts_service.models import WorkoutSheet

        defaults = {
            "id": _uuid(),
            "student_id": student_id or _uuid(),
            "created_by": created_by or _uuid(),
            "name": "Treino A",
            "description": "Upper body",
            "is_active": True,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return WorkoutSheet(**defaults)


class ExerciseFactory:
    @staticmethod
    def create(workout_sheet_id=None, **overrides):
        from services.workouts_service.models import Exercise

        defaults = {
            "id": _uuid(),
            "workout_sheet_id": workout_sheet_id or _uuid(),
            "name": "Supino reto",
            "muscle_group": "Chest",
            "sets": 3,
            "reps": "10-12",
            "order_index": 0,
            "created_at": _now(),
            "updated_at": _now(),
        }
        defaults.update(overrides)
        return Exercise(**defaults)
