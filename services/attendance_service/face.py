"""Face-recognition check-in.

Only the interface exists: enrollment stores the descriptor computed by the
capture client, and ``FaceMatcher.identify`` refuses to guess. It must never
return a student that was not actually matched.
"""

import uuid
from typing import Optional

from libs.common.errors import GymError


class FaceMatchNotImplemented(GymError):
    status_code = 501
    code = "face_match_not_implemented"
    default_message = "face recognition check-in is not implemented"


class FaceMatcher:
    async def identify(self, face_encoding: str) -> Optional[uuid.UUID]:
        """Map a captured descriptor to an enrolled student's profile id."""
        raise FaceMatchNotImplemented()


def get_face_matcher() -> FaceMatcher:
    return FaceMatcher()
