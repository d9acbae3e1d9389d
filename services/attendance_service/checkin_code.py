"""Check-in code format.

A student's code is ``"<PREFIX>-CHECKIN-<profile id>"`` (for example
``KGYM-CHECKIN-0b6f...``), rendered as a QR code by the front-end. The
profile id is a UUID and contains dashes of its own, so decoding splits off
the first two segments only.
"""

import uuid
from typing import Optional

from libs.common.config import get_settings
from libs.common.errors import GymError

CHECKIN_MARKER = "CHECKIN"


class InvalidCheckinCode(GymError):
    status_code = 400
    code = "invalid_code"
    default_message = "invalid code"


def encode_checkin_id(profile_id: uuid.UUID, prefix: Optional[str] = None) -> str:
    prefix = prefix or get_settings().CHECKIN_CODE_PREFIX
    return f"{prefix}-{CHECKIN_MARKER}-{profile_id}"


def decode_checkin_code(code: str, prefix: Optional[str] = None) -> uuid.UUID:
    """Return the profile id carried by ``code``.

    Raises ``InvalidCheckinCode`` for a wrong prefix or marker, a missing
    segment, or an id that is not a UUID.
    """
    prefix = prefix or get_settings().CHECKIN_CODE_PREFIX
    parts = (code or "").strip().split("-", 2)
    if len(parts) != 3:
        raise InvalidCheckinCode()

    code_prefix, marker, raw_id = parts
    if code_prefix != prefix or marker != CHECKIN_MARKER:
        raise InvalidCheckinCode()

    try:
        return uuid.UUID(raw_id)
    except ValueError:
        raise InvalidCheckinCode()
