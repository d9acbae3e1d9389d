import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from services.members_service.credentials import (
    STUDENT_PASSWORD_LENGTH,
    cpf_digits,
)
from services.members_service.models.enums import ProfileRole
from services.plans_service.models.enums import StudentPlanStatus
from services.plans_service.schemas import MembershipResponse


def _normalize_cpf(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    digits = cpf_digits(value)
    if len(digits) < STUDENT_PASSWORD_LENGTH:
        raise ValueError(
            f"CPF must contain at least {STUDENT_PASSWORD_LENGTH} digits"
        )
    return digits


# ============================================================================
# PROFILE
# ============================================================================


class ProfileResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    full_name: str
    phone: Optional[str] = None
    cpf: Optional[str] = None
    role: ProfileRole
    photo_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    # Filled from the auth identity, not stored on the profile
    email: Optional[EmailStr] = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdate(BaseModel):
    """Fields a user may edit on their own profile."""

    full_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None


class PasswordChange(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=STUDENT_PASSWORD_LENGTH)


class EmailChange(BaseModel):
    new_email: EmailStr


# ============================================================================
# STUDENTS (admin)
# ============================================================================


class StudentCreate(BaseModel):
    email: EmailStr
    full_name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    cpf: str

    @field_validator("cpf")
    @classmethod
    def normalize_cpf(cls, value):
        return _normalize_cpf(value)


class StudentUpdate(BaseModel):
    full_name: Optional[str] = Field(None, min_length=1)
    phone: Optional[str] = None
    cpf: Optional[str] = None

    @field_validator("full_name")
    @classmethod
    def full_name_not_null(cls, value):
        # Omit the field to keep the current name
        if value is None:
            raise ValueError("full_name cannot be null")
        return value

    @field_validator("cpf")
    @classmethod
    def normalize_cpf(cls, value):
        return _normalize_cpf(value)


class StudentResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    full_name: str
    phone: Optional[str] = None
    cpf: Optional[str] = None
    photo_url: Optional[str] = None
    has_face_enrollment: bool = False
    created_at: datetime
    updated_at: datetime

    # Derived from the active-flagged plan row at read time
    membership: Optional[MembershipResponse] = None
    # As stored on that row; may disagree with the derived status
    stored_plan_status: Optional[StudentPlanStatus] = None
    current_plan_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class StudentCreated(StudentResponse):
    # Only set when the account was created with a random password
    password_reset_sent: bool = False


class FaceEnrollment(BaseModel):
    """Opaque face descriptor produced by the capture client."""

    face_encoding: str = Field(..., min_length=1)
    photo_url: Optional[str] = None
