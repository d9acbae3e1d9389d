"""Self-service profile router for the signed-in user."""

from fastapi import APIRouter, Depends, status
from libs.auth.provider import (
    AuthProviderError,
    SupabaseAuthProvider,
    get_auth_provider,
)
from libs.common.errors import GymError
from libs.common.logging import get_logger
from libs.db.session import get_async_db
from services.members_service.dependencies import AuthContext, get_auth_context
from services.members_service.schemas import (
    EmailChange,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
)
from sqlalchemy.ext.asyncio import AsyncSession

logger = get_logger(__name__)
router = APIRouter(prefix="/me", tags=["profile"])


def _profile_out(context: AuthContext) -> ProfileResponse:
    response = ProfileResponse.model_validate(context.profile)
    response.email = context.user.email
    return response


@router.get("/profile", response_model=ProfileResponse)
async def get_my_profile(context: AuthContext = Depends(get_auth_context)):
    return _profile_out(context)


@router.patch("/profile", response_model=ProfileResponse)
async def update_my_profile(
    payload: ProfileUpdate,
    context: AuthContext = Depends(get_auth_context),
    db: AsyncSession = Depends(get_async_db),
):
    """Edit name and phone. CPF and role are admin-managed."""
    profile = context.profile
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(profile, field, value)

    db.add(profile)
    await db.commit()
    return _profile_out(context)


@router.post("/password", status_code=status.HTTP_204_NO_CONTENT)
async def change_my_password(
    payload: PasswordChange,
    context: AuthContext = Depends(get_auth_context),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    """Change password after re-authenticating with the current one."""
    if not context.user.email:
        raise GymError("account has no e-mail to re-authenticate with")
    try:
        await provider.sign_in(context.user.email, payload.current_password)
    except AuthProviderError:
        raise GymError("current password is incorrect")

    await provider.update_password(context.user.user_id, payload.new_password)
    logger.info("Password changed for profile %s", context.profile.id)
    return None


@router.post("/email", status_code=status.HTTP_204_NO_CONTENT)
async def change_my_email(
    payload: EmailChange,
    context: AuthContext = Depends(get_auth_context),
    provider: SupabaseAuthProvider = Depends(get_auth_provider),
):
    await provider.update_email(context.user.user_id, payload.new_email)
    logger.info("E-mail changed for profile %s", context.profile.id)
    return None
