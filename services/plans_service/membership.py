"""Membership status resolution and plan date arithmetic.

Every screen that shows a status badge or gates an action goes through
``resolve_student_status`` / ``resolve_plan_status``; nothing re-derives the
status inline.

"Today" is a calendar date (see ``libs.common.datetime_utils.local_today``),
so ``end_date - today`` is a whole number of days.
"""

import enum
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Protocol

from libs.common.datetime_utils import add_months, local_today
from services.plans_service.models.enums import StudentPlanStatus

EXPIRING_SOON_DAYS = 7


class MembershipStatus(str, enum.Enum):
    ACTIVE = "active"
    EXPIRING = "expiring"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class BadgeSeverity(str, enum.Enum):
    DEFAULT = "default"
    WARNING = "warning"
    DESTRUCTIVE = "destructive"
    MUTED = "muted"


@dataclass(frozen=True)
class StatusBadge:
    status: MembershipStatus
    label: str
    severity: BadgeSeverity


_BADGES = {
    MembershipStatus.ACTIVE: StatusBadge(
        MembershipStatus.ACTIVE, "Active", BadgeSeverity.DEFAULT
    ),
    MembershipStatus.EXPIRING: StatusBadge(
        MembershipStatus.EXPIRING, "Expiring soon", BadgeSeverity.WARNING
    ),
    MembershipStatus.EXPIRED: StatusBadge(
        MembershipStatus.EXPIRED, "Expired", BadgeSeverity.DESTRUCTIVE
    ),
    MembershipStatus.INACTIVE: StatusBadge(
        MembershipStatus.INACTIVE, "No active plan", BadgeSeverity.MUTED
    ),
}


class PlanTerm(Protocol):
    status: StudentPlanStatus
    start_date: date
    end_date: date


def badge_for(status: MembershipStatus) -> StatusBadge:
    return _BADGES[status]


def days_remaining(end_date: date, today: Optional[date] = None) -> int:
    today = today or local_today()
    return (end_date - today).days


def is_flagged_active(plan: PlanTerm) -> bool:
    return plan.status == StudentPlanStatus.ACTIVE


def find_active_plan(plans: Optional[Iterable[PlanTerm]]) -> Optional[PlanTerm]:
    """Pick the row flagged ``active``, ignoring history.

    If several rows are flagged, the most recently started one wins.
    """
    flagged = [p for p in plans or () if is_flagged_active(p)]
    if not flagged:
        return None
    return max(flagged, key=lambda p: (p.start_date, p.end_date))


def resolve_plan_status(
    plan: Optional[PlanTerm], today: Optional[date] = None
) -> MembershipStatus:
    """Derive the display status of a single membership term."""
    if plan is None:
        return MembershipStatus.INACTIVE
    if not is_flagged_active(plan):
        return MembershipStatus.EXPIRED

    remaining = days_remaining(plan.end_date, today)
    if remaining < 0:
        return MembershipStatus.EXPIRED
    if remaining <= EXPIRING_SOON_DAYS:
        return MembershipStatus.EXPIRING
    return MembershipStatus.ACTIVE


def resolve_student_status(
    plans: Optional[Iterable[PlanTerm]], today: Optional[date] = None
) -> MembershipStatus:
    """Derive a student's status from all of their plan rows.

    Without an ``active``-flagged row the student is ``inactive``, whatever
    the dates of the other rows say.
    """
    active = find_active_plan(plans)
    if active is None:
        return MembershipStatus.INACTIVE
    return resolve_plan_status(active, today)


def compute_end_date(start_date: date, duration_months: int) -> date:
    """End of a term that starts on ``start_date`` and lasts N calendar months."""
    if duration_months < 1:
        raise ValueError("duration_months must be at least 1")
    return add_months(start_date, duration_months)
