"""
Staff Access Permissions — Role Templates
=========================================
Applying a template snapshots a role baseline into a user's override
row. It is a one-shot copy: later edits to the role do not reach the
user, and later edits to the user do not reach the role.
"""

from __future__ import annotations

import logging
from typing import Optional

from staff_access.errors import PrivilegedRoleImmutable
from staff_access.identity.roster import Role, Roster
from staff_access.permissions.store import PermissionStore

logger = logging.getLogger("staff_access.permissions")


class TemplateApplier:
    def __init__(self, store: PermissionStore, roster: Optional[Roster] = None):
        self._store = store
        self._roster = roster

    def apply_template(self, user_id: str, role) -> None:
        """
        Replace the user's overrides with a copy of ``role``'s baseline.

        A role without a baseline row leaves the user with no overrides
        at all (fully deferring), not with an explicit all-false row.
        """
        role = Role.parse(role)
        if self._roster is not None:
            member = self._roster.get(user_id)
            if member is not None and member.is_privileged:
                logger.warning(f"Rejected template for privileged user '{user_id}'.")
                raise PrivilegedRoleImmutable(member.role.value, subject=user_id)

        # role_row already returns a deep copy
        self._store.replace_user_row(user_id, self._store.role_row(role))
        logger.info(f"Applied '{role.value}' template to user '{user_id}'.")
