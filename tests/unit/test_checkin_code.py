"""Unit tests for the check-in code format."""

import uuid

import pytest
from services.attendance_service.checkin_code import (
    InvalidCheckinCode,
    decode_checkin_code,
    encode_checkin_id,
)

PROFILE_ID = uuid.UUID("0b6f2f8e-3c1a-4d2b-9a57-2f1e6c3d4b5a")


@pytest.mark.unit
def test_encode_uses_prefix_and_marker():
    code = encode_checkin_id(PROFILE_ID)
    assert code == f"KGYM-CHECKIN-{PROFILE_ID}"


@pytest.mark.unit
def test_decode_recovers_id_with_its_dashes():
    assert decode_checkin_code(encode_checkin_id(PROFILE_ID)) == PROFILE_ID


@pytest.mark.unit
def test_custom_prefix():
    code = encode_checkin_id(PROFILE_ID, prefix="ACME")
    assert code.startswith("ACME-CHECKIN-")
    assert decode_checkin_code(code, prefix="ACME") == PROFILE_ID


@pytest.mark.unit
@pytest.mark.parametrize(
    "code",
    [
        "",
        "garbage",
        "KGYM-CHECKIN",
        f"OTHER-CHECKIN-{PROFILE_ID}",
        f"KGYM-ENTRY-{PROFILE_ID}",
        f"kgym-CHECKIN-{PROFILE_ID}",
        "KGYM-CHECKIN-not-a-uuid",
        f"KGYM-CHECKIN-{PROFILE_ID}-extra",
    ],
)
def test_malformed_codes_are_rejected(code):
    with pytest.raises(InvalidCheckinCode) as exc_info:
        decode_checkin_code(code)
    assert exc_info.value.message == "invalid code"
    assert exc_info.value.status_code == 400
