"""Admin operations on student profiles.

Accounts live in two places: the auth provider (credentials) and the
``profiles`` table. Creation writes the auth user first; deletion removes the
auth user first and then the profile, whose plans, check-ins and workout
sheets are removed by the database's ON DELETE CASCADE.
"""

import uuid
from datetime import date
from typing import Optional

from libs.auth.provider import SupabaseAuthProvider
from libs.common.config import get_settings
from libs.common.datetime_utils import local_today
from libs.common.errors import ConflictError, NotFoundError
from libs.common.logging import get_logger
from services.members_service.credentials import generate_student_password
from services.members_service.models import Profile, ProfileRole
from services.members_service.schemas import (
    FaceEnrollment,
    StudentCreate,
    StudentResponse,
    StudentUpdate,
)
from services.plans_service.membership import find_active_plan
from services.plans_service.services.plan_ops import (
    load_plans_by_student,
    membership_response,
)
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class StudentNotFound(NotFoundError):
    code = "student_not_found"
    default_message = "student not found"


class CpfAlreadyRegistered(ConflictError):
    code = "cpf_already_registered"
    default_message = "CPF already registered"


async def get_student(db: AsyncSession, student_id: uuid.UUID) -> Profile:
    """Load a profile that exists *and* has the student role."""
    result = await db.execute(
        select(Profile).where(
            Profile.id == student_id, Profile.role == ProfileRole.STUDENT
        )
    )
    student = result.scalar_one_or_none()
    if student is None:
        raise StudentNotFound()
    return student


async def search_students(
    db: AsyncSession, search: Optional[str] = None
) -> list[Profile]:
    query = select(Profile).where(Profile.role == ProfileRole.STUDENT)
    if search:
        pattern = f"%{search.strip()}%"
        query = query.where(
            or_(
                Profile.full_name.ilike(pattern),
                Profile.phone.ilike(pattern),
                Profile.cpf.ilike(pattern),
            )
        )
    result = await db.execute(query.order_by(Profile.full_name))
    return list(result.scalars().all())


async def _ensure_cpf_free(
    db: AsyncSession, cpf: str, exclude_id: Optional[uuid.UUID] = None
) -> None:
    query = select(Profile.id).where(Profile.cpf == cpf)
    if exclude_id is not None:
        query = query.where(Profile.id != exclude_id)
    result = await db.execute(query)
    if result.first() is not None:
        raise CpfAlreadyRegistered()


async def build_student_responses(
    db: AsyncSession, students: list[Profile], today: Optional[date] = None
) -> list[StudentResponse]:
    """Attach derived membership status and current plan to each student."""
    today = today or local_today()
    plans_by_student = await load_plans_by_student(db, [s.id for s in students])

    responses = []
    for student in students:
        plans = plans_by_student.get(student.id, [])
        active = find_active_plan(plans)
        response = StudentResponse.model_validate(student)
        response.has_face_enrollment = bool(student.face_encoding)
        response.membership = membership_response(plans, today)
        if active is not None:
            response.stored_plan_status = active.status
            response.current_plan_name = active.plan.name if active.plan else None
        responses.append(response)
    return responses


async def build_student_response(
    db: AsyncSession, student: Profile, today: Optional[date] = None
) -> StudentResponse:
    responses = await build_student_responses(db, [student], today)
    return responses[0]


async def create_student(
    db: AsyncSession, provider: SupabaseAuthProvider, data: StudentCreate
) -> tuple[Profile, bool]:
    """Create the auth account and the student profile.

    Returns the profile and whether a password-reset e-mail was sent.
    """
    settings = get_settings()
    await _ensure_cpf_free(db, data.cpf)

    password = generate_student_password(data.cpf, settings.STUDENT_PASSWORD_SCHEME)
    user_id = await provider.create_user(
        data.email,
        password,
        {"full_name": data.full_name, "role": ProfileRole.STUDENT.value},
    )

    student = Profile(
        user_id=uuid.UUID(user_id),
        full_name=data.full_name,
        phone=data.phone,
        cpf=data.cpf,
        role=ProfileRole.STUDENT,
    )
    db.add(student)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # Don't leave an auth account without a profile behind
        await provider.delete_user(user_id)
        raise ConflictError("student already registered")

    reset_sent = False
    if settings.STUDENT_PASSWORD_SCHEME == "random":
        await provider.send_password_reset(data.email)
        reset_sent = True

    logger.info(
        "Created student %s",
        student.id,
        extra={"extra_fields": {"scheme": settings.STUDENT_PASSWORD_SCHEME}},
    )
    return student, reset_sent


async def update_student(
    db: AsyncSession, student: Profile, data: StudentUpdate
) -> Profile:
    update_data = data.model_dump(exclude_unset=True)
    if update_data.get("cpf"):
        await _ensure_cpf_free(db, update_data["cpf"], exclude_id=student.id)

    for field, value in update_data.items():
        setattr(student, field, value)

    db.add(student)
    await db.commit()
    return student


async def delete_student(
    db: AsyncSession, provider: SupabaseAuthProvider, student: Profile
) -> None:
    await provider.delete_user(str(student.user_id))
    await db.delete(student)
    await db.commit()
    logger.info("Deleted student %s and their auth account", student.id)


async def enroll_face(
    db: AsyncSession, student: Profile, data: FaceEnrollment
) -> Profile:
    """Store the client-computed descriptor as-is; nothing is derived here."""
    student.face_encoding = data.face_encoding
    if data.photo_url is not None:
        student.photo_url = data.photo_url
    db.add(student)
    await db.commit()
    logger.info("Stored face enrollment for student %s", student.id)
    return student
