"""Enum definitions for plans service models."""

import enum


def enum_values(enum_cls):
    """Return persistent DB values for SAEnum mappings."""
    return [member.value for member in enum_cls]


class StudentPlanStatus(str, enum.Enum):
    """Stored status of a membership term. Only edited by admins."""

    ACTIVE = "active"
    INACTIVE = "inactive"
    EXPIRED = "expired"
