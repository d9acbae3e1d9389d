"""Auth router - admin sign-up, sign-in and sign-out."""

import uuid

from fastapi import APIRouter, Depends, Request, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.auth.provider import SupabaseAuthProvider, get_auth_provider
from libs.common.config import get_settings
from libs.common.errors import ConflictError, PermissionDenied
from libs.common.logging import get_logger
from libs.common.rate_limit import limiter, login_limit
from libs.db.session import get_async_db
from services.members_service.credentials import student_password_from_cpf
from services.members_service.dependencies import get_profile_by_user_id
from services.members_service.models import Profile, ProfileRole
from services.members_service.schemas import (
    AdminSignUp,
    ProfileResponse,
    SignInRequest,
    SignInResponse,
    StudentSignInRequest,
)
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)
router = APIRouter(prefix="/auth", tags=["auth"])


async def _open_session(
    db: AsyncSession, provider: SupabaseAuthProvider, email: str, password: str
) -> SignInResponse:
    session = await provider.sign_in(email, password)
    profile = await get_profile_by_user_id(db, uuid.UUID(session.user_id))

    profile_out = ProfileResponse.model_validate(profile)
    profile_out.email = email
    return SignInResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        token_type=session.token_type,
        profile=profile_out,
    )


@router.post(
    "/admin/sign-up",
    response_model=ProfileResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(login_limit)
async def admin_sign_up(
    request: Request,
    payload: AdminSignUp,
    db: AsyncSession = Depends(get_async_db),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Register a gym administrator (auth account + admin profile)."""
    if payload.cpf:
        existing = await db.execute(select(Profile.id).where(Profile.cpf == payload.cpf))
        if existing.first() is not None:
            raise ConflictError("CPF already registered")

    user_id = await provider.sign_up(
        payload.email,
        payload.password,
        {"full_name": payload.full_name, "role": ProfileRole.ADMIN.value},
    )
    profile = Profile(
        user_id=uuid.UUID(user_id),
        full_name=payload.full_name,
        phone=payload.phone,
        cpf=payload.cpf,
        role=ProfileRole.ADMIN,
    )
    db.add(profile)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        # Remove the auth account created above
        await provider.delete_user(user_id)
        raise ConflictError("admin already registered")
    logger.info("Registered admin profile %s", profile.id)

    response = ProfileResponse.model_validate(profile)
    response.email = payload.email
    return response


@router.post("/sign-in", response_model=SignInResponse)
@limiter.limit(login_limit)
async def sign_in(
    request: Request,
    payload: SignInRequest,
    db: AsyncSession = Depends(get_async_db),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Sign in with e-mail and password (admins and students)."""
    return await _open_session(db, provider, payload.email, payload.password)


@router.post("/student/sign-in", response_model=SignInResponse)
@limiter.limit(login_limit)
async def student_sign_in(
    request: Request,
    payload: StudentSignInRequest,
    db: AsyncSession = Depends(get_async_db),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Sign in a student with e-mail and CPF.

    Only available while students are provisioned with the CPF-prefix
    password.
    """
    if get_settings().STUDENT_PASSWORD_SCHEME != "cpf_prefix":
        raise PermissionDenied("CPF sign-in is disabled; use your password")

    password = student_password_from_cpf(payload.cpf)
    response = await _open_session(db, provider, payload.email, password)
    if response.profile.role != ProfileRole.STUDENT:
        await provider.sign_out(response.access_token)
        raise PermissionDenied("student access required")
    return response


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    current_user: AuthUser = Depends(get_current_user),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Revoke the caller's session at the auth provider."""
    await provider.sign_out(current_user.token)
    logger.info("Signed out user %s", current_user.user_id)
    return None
