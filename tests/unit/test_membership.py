"""Unit tests for membership status resolution and plan end dates.

Pure functions; no database or HTTP involved.
"""

from dataclasses import dataclass
from datetime import date

import pytest
from services.plans_service.membership import (
    EXPIRING_SOON_DAYS,
    BadgeSeverity,
    MembershipStatus,
    badge_for,
    compute_end_date,
    days_remaining,
    find_active_plan,
    resolve_plan_status,
    resolve_student_status,
)
from services.plans_service.models import StudentPlanStatus

TODAY = date(2024, 6, 15)


@dataclass
class Term:
    status: StudentPlanStatus
    start_date: date
    end_date: date


def _active(end_date, start_date=date(2024, 1, 1)):
    return Term(StudentPlanStatus.ACTIVE, start_date, end_date)


# ---------------------------------------------------------------------------
# resolve_plan_status
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "end_date, expected",
    [
        (date(2024, 7, 15), MembershipStatus.ACTIVE),
        (date(2024, 6, 23), MembershipStatus.ACTIVE),  # 8 days left
        (date(2024, 6, 22), MembershipStatus.EXPIRING),  # 7 days left
        (date(2024, 6, 16), MembershipStatus.EXPIRING),
        (date(2024, 6, 15), MembershipStatus.EXPIRING),  # ends today
        (date(2024, 6, 14), MembershipStatus.EXPIRED),
        (date(2023, 1, 1), MembershipStatus.EXPIRED),
    ],
)
def test_resolve_plan_status_for_active_row(end_date, expected):
    assert resolve_plan_status(_active(end_date), TODAY) == expected


@pytest.mark.unit
def test_expiring_window_is_seven_days():
    assert EXPIRING_SOON_DAYS == 7


@pytest.mark.unit
def test_resolve_plan_status_without_plan_is_inactive():
    assert resolve_plan_status(None, TODAY) == MembershipStatus.INACTIVE


@pytest.mark.unit
@pytest.mark.parametrize(
    "stored", [StudentPlanStatus.EXPIRED, StudentPlanStatus.INACTIVE]
)
def test_non_active_row_resolves_to_expired(stored):
    term = Term(stored, date(2024, 6, 1), date(2024, 12, 31))
    assert resolve_plan_status(term, TODAY) == MembershipStatus.EXPIRED


# ---------------------------------------------------------------------------
# resolve_student_status
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_student_without_rows_is_inactive():
    assert resolve_student_status([], TODAY) == MembershipStatus.INACTIVE
    assert resolve_student_status(None, TODAY) == MembershipStatus.INACTIVE


@pytest.mark.unit
def test_student_without_active_flag_is_inactive_even_if_dates_are_current():
    plans = [
        Term(StudentPlanStatus.INACTIVE, date(2024, 6, 1), date(2024, 12, 31)),
        Term(StudentPlanStatus.EXPIRED, date(2024, 1, 1), date(2024, 2, 1)),
    ]
    assert resolve_student_status(plans, TODAY) == MembershipStatus.INACTIVE


@pytest.mark.unit
def test_student_status_ignores_history_rows():
    plans = [
        Term(StudentPlanStatus.EXPIRED, date(2023, 1, 1), date(2023, 2, 1)),
        _active(date(2024, 9, 1), start_date=date(2024, 6, 1)),
    ]
    assert resolve_student_status(plans, TODAY) == MembershipStatus.ACTIVE


@pytest.mark.unit
def test_latest_started_active_row_wins():
    older = _active(date(2024, 6, 1), start_date=date(2024, 5, 1))
    newer = _active(date(2024, 8, 1), start_date=date(2024, 6, 1))

    assert find_active_plan([older, newer]) is newer
    assert resolve_student_status([older, newer], TODAY) == MembershipStatus.ACTIVE


@pytest.mark.unit
def test_mensal_scenario():
    """Monthly plan from 2024-01-10: expiring on 02-05, expired on 02-11."""
    start = date(2024, 1, 10)
    end = compute_end_date(start, 1)
    plan = _active(end, start_date=start)

    assert end == date(2024, 2, 10)
    assert resolve_student_status([plan], date(2024, 1, 20)) == MembershipStatus.ACTIVE
    assert resolve_student_status([plan], date(2024, 2, 5)) == MembershipStatus.EXPIRING
    assert resolve_student_status([plan], date(2024, 2, 10)) == MembershipStatus.EXPIRING
    assert resolve_student_status([plan], date(2024, 2, 11)) == MembershipStatus.EXPIRED


# ---------------------------------------------------------------------------
# Badges and days remaining
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_badges_map_each_status():
    assert badge_for(MembershipStatus.ACTIVE).severity == BadgeSeverity.DEFAULT
    assert badge_for(MembershipStatus.EXPIRING).severity == BadgeSeverity.WARNING
    assert badge_for(MembershipStatus.EXPIRED).severity == BadgeSeverity.DESTRUCTIVE
    assert badge_for(MembershipStatus.INACTIVE).severity == BadgeSeverity.MUTED
    assert badge_for(MembershipStatus.EXPIRING).label == "Expiring soon"


@pytest.mark.unit
def test_days_remaining_counts_calendar_days():
    assert days_remaining(date(2024, 6, 22), TODAY) == 7
    assert days_remaining(TODAY, TODAY) == 0
    assert days_remaining(date(2024, 6, 10), TODAY) == -5


# ---------------------------------------------------------------------------
# compute_end_date
# ---------------------------------------------------------------------------


@pytest.mark.unit
@pytest.mark.parametrize(
    "start, months, expected",
    [
        (date(2024, 1, 10), 1, date(2024, 2, 10)),
        (date(2024, 1, 10), 3, date(2024, 4, 10)),
        (date(2024, 1, 10), 12, date(2025, 1, 10)),
        (date(2024, 11, 15), 2, date(2025, 1, 15)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),  # leap year
        (date(2023, 1, 31), 1, date(2023, 2, 28)),
        (date(2024, 3, 31), 1, date(2024, 4, 30)),
        (date(2024, 8, 31), 6, date(2025, 2, 28)),
    ],
)
def test_compute_end_date_adds_calendar_months(start, months, expected):
    assert compute_end_date(start, months) == expected


@pytest.mark.unit
@pytest.mark.parametrize("months", [0, -1])
def test_compute_end_date_rejects_non_positive_duration(months):
    with pytest.raises(ValueError):
        compute_end_date(date(2024, 1, 10), months)
