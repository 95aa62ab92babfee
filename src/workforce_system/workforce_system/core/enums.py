from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Principal role. Login is scoped to exactly one of these."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class Capability(str, Enum):
    """Named permissions, each gating one class of operation."""

    MANAGE_EMPLOYEES = "manage-employees"
    MANAGE_ROLES = "manage-roles"
    MANAGE_PAYROLL = "manage-payroll"
    VIEW_OWN_PROFILE = "view-own-profile"
    UPDATE_OWN_PHOTO = "update-own-photo"


class PayrollStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


ROLE_CAPABILITIES: dict[Role, frozenset[Capability]] = {
    Role.ADMIN: frozenset(
        {
            Capability.MANAGE_EMPLOYEES,
            Capability.MANAGE_ROLES,
            Capability.MANAGE_PAYROLL,
        }
    ),
    Role.EMPLOYEE: frozenset(
        {
            Capability.VIEW_OWN_PROFILE,
            Capability.UPDATE_OWN_PHOTO,
        }
    ),
}
