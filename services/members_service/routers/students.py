"""Admin students router - CRUD on student profiles."""

import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from libs.auth.provider import SupabaseAuthProvider, get_auth_provider
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, require_admin
from services.members_service.schemas import (
    FaceEnrollment,
    StudentCreate,
    StudentCreated,
    StudentResponse,
    StudentUpdate,
)
from services.members_service.services import student_ops
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)
router = APIRouter(prefix="/students", tags=["students"])


@router.get("/", response_model=List[StudentResponse])
async def list_students(
    search: Optional[str] = Query(None, description="Name, phone or CPF"),
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    students = await student_ops.search_students(db, search)
    return await student_ops.build_student_responses(db, students)


@router.post("/", response_model=StudentCreated, status_code=status.HTTP_201_CREATED)
async def create_student(
    payload: StudentCreate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Create the student's auth account and profile.

    The initial password follows ``STUDENT_PASSWORD_SCHEME``.
    """
    student, reset_sent = await student_ops.create_student(db, provider, payload)
    base = await student_ops.build_student_response(db, student)
    return StudentCreated(**base.model_dump(), password_reset_sent=reset_sent)


@router.get("/{student_id}", response_model=StudentResponse)
async def get_student(
    student_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student = await student_ops.get_student(db, student_id)
    return await student_ops.build_student_response(db, student)


@router.patch("/{student_id}", response_model=StudentResponse)
async def update_student(
    student_id: uuid.UUID,
    payload: StudentUpdate,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student = await student_ops.get_student(db, student_id)
    student = await student_ops.update_student(db, student, payload)
    return await student_ops.build_student_response(db, student)


@router.delete("/{student_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_student(
    student_id: uuid.UUID,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Hard-delete the auth user, then the profile and everything it owns."""
    student = await student_ops.get_student(db, student_id)
    await student_ops.delete_student(db, provider, student)
    return None


@router.put("/{student_id}/face", response_model=StudentResponse)
async def enroll_student_face(
    student_id: uuid.UUID,
    payload: FaceEnrollment,
    _: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_async_db),
):
    student = await student_ops.get_student(db, student_id)
    student = await student_ops.enroll_face(db, student, payload)
    return await student_ops.build_student_response(db, student)
