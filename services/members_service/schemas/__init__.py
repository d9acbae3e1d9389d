"""Members Service schemas package.

Schema files:
  - schemas/profile.py: profile and admin student schemas
  - schemas/auth.py: sign-up / sign-in payloads
"""

from services.members_service.schemas.auth import (  # noqa: F401
    AdminSignUp,
    SignInRequest,
    SignInResponse,
    StudentSignInRequest,
)
from services.members_service.schemas.profile import (  # noqa: F401
    EmailChange,
    FaceEnrollment,
    PasswordChange,
    ProfileResponse,
    ProfileUpdate,
    StudentCreate,
    StudentCreated,
    StudentResponse,
    StudentUpdate,
)
