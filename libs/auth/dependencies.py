"""Bearer-token authentication.

Access tokens are issued by Supabase Auth at sign-in and verified locally;
the profile (and with it the admin/student role) is resolved per request in
``services.members_service.dependencies``.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from libs.auth.models import AuthUser
from libs.common.config import get_settings
from libs.common.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer()

# Supabase signs access tokens with HS256 and the project JWT secret
JWT_ALGORITHMS = ["HS256"]


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[HTTPAuthorizationCredentials, Depends(security)]
) -> AuthUser:
    """Verify the bearer token and return the identity it carries."""
    try:
        payload = jwt.decode(
            token.credentials,
            get_settings().SUPABASE_JWT_SECRET,
            algorithms=JWT_ALGORITHMS,
            options={"verify_aud": False},
        )
    except ExpiredSignatureError:
        raise _unauthorized("session expired, sign in again")
    except JWTError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        raise _unauthorized("Could not validate credentials")

    try:
        return AuthUser(**payload, token=token.credentials)
    except ValidationError:
        raise _unauthorized("Could not validate credentials")
