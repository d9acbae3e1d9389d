"""Profile model.

One profile per Supabase auth identity. ``role`` gates every authorization
decision and is fixed at creation.
"""

import uuid
from datetime import datetime
from typing import Optional

from libs.common.datetime_utils import utc_now
from libs.db.base import Base
from services.members_service.models.enums import ProfileRole, enum_values
from sqlalchemy import DateTime
from sqlalchemy import Enum as SAEnum
from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column


class Profile(Base):
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    # Supabase auth.users id
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), unique=True, index=True, nullable=False
    )
    full_name: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String, nullable=True)
    cpf: Mapped[Optional[str]] = mapped_column(String, unique=True, nullable=True)
    role: Mapped[ProfileRole] = mapped_column(
        SAEnum(
            ProfileRole,
            name="profile_role",
            native_enum=False,
            values_callable=enum_values,
            validate_strings=True,
        ),
        default=ProfileRole.STUDENT,
        nullable=False,
    )

    # Opaque value supplied by the capture client; never interpreted here
    face_encoding: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    photo_url: Mapped[Optional[str]] = mapped_column(String, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )

    @property
    def is_admin(self) -> bool:
        return self.role == ProfileRole.ADMIN

    @property
    def is_student(self) -> bool:
        return self.role == ProfileRole.STUDENT

    def __repr__(self):
        return f"<Profile {self.full_name} ({self.role})>"
