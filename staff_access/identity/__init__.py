"""
Staff Access Identity — Public API
==================================
"""

from staff_access.identity.roster import (
    EDITABLE_ROLES,
    PRIVILEGED_ROLES,
    Role,
    Roster,
    StaffMember,
)

__all__ = [
    "Role",
    "PRIVILEGED_ROLES",
    "EDITABLE_ROLES",
    "StaffMember",
    "Roster",
]
