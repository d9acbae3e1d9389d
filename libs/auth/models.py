import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AuthUser(BaseModel):
    """
    Represents an authenticated user from a Supabase access token.
    """

    user_id: str = Field(..., alias="sub")
    email: Optional[EmailStr] = None
    role: str = "authenticated"
    token: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def auth_uuid(self) -> uuid.UUID:
        return uuid.UUID(self.user_id)


class AuthSession(BaseModel):
    """Session issued by the auth provider on sign-in."""

    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"
    user_id: str
