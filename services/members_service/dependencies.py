"""Per-request authentication context.

``get_auth_context`` resolves the bearer token to the caller's profile once
per request; handlers receive the resulting ``AuthContext`` through
``require_admin`` / ``require_student``.
"""

import uuid
from dataclasses import dataclass
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, status
from libs.auth.dependencies import get_current_user
from libs.auth.models import AuthUser
from libs.common.errors import NotFoundError, PermissionDenied
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.members_service.models import Profile
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)


class ProfileNotFound(NotFoundError):
    code = "profile_not_found"
    default_message = "profile not found"


@dataclass
class AuthContext:
    user: AuthUser
    profile: Profile

    @property
    def is_admin(self) -> bool:
        return self.profile.is_admin

    @property
    def is_student(self) -> bool:
        return self.profile.is_student


async def get_profile_by_user_id(db: AsyncSession, user_id: uuid.UUID) -> Profile:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise ProfileNotFound()
    return profile


async def get_auth_context(
    current_user: AuthUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_db),
) -> AsyncGenerator[AuthContext, None]:
    try:
        auth_id = current_user.auth_uuid
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    profile = await get_profile_by_user_id(db, auth_id)
    context = AuthContext(user=current_user, profile=profile)
    logger.debug(
        "Auth context opened",
        extra={
            "extra_fields": {
                "profile_id": str(profile.id),
                "role": profile.role.value,
            }
        },
    )
    try:
        yield context
    finally:
        logger.debug(
            "Auth context closed",
            extra={"extra_fields": {"profile_id": str(profile.id)}},
        )


async def require_admin(
    context: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    if not context.is_admin:
        raise PermissionDenied("admin access required")
    return context


async def require_student(
    context: AuthContext = Depends(get_auth_context),
) -> AuthContext:
    if not context.is_student:
        raise PermissionDenied("student access required")
    return context
