from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator
from services.members_service.schemas.profile import ProfileResponse, _normalize_cpf


class AdminSignUp(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    full_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    cpf: Optional[str] = None

    @field_validator("cpf")
    @classmethod
    def normalize_cpf(cls, value):
        return _normalize_cpf(value)


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class StudentSignInRequest(BaseModel):
    """Student sign-in with e-mail and CPF (legacy credential scheme)."""

    email: EmailStr
    cpf: str

    @field_validator("cpf")
    @classmethod
    def normalize_cpf(cls, value):
        return _normalize_cpf(value)


class SignInResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    token_type: str = "bearer"
    profile: ProfileResponse
