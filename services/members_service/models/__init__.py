"""Members Service models package."""

from services.members_service.models.core import Profile
from services.members_service.models.enums import ProfileRole

__all__ = [
    "Profile",
    "ProfileRole",
]
