"""
Staff Access Permissions — Permission Store
===========================================
Holds the two grant layers of the active edit session:
the per-role baseline matrix and the sparse per-user override matrix.

Raw cell access only. Catalog validation and privileged-role rules
live in PermissionResolver / TemplateApplier, which validate before
they call in here.
"""

from __future__ import annotations

from typing import Mapping, Optional

from staff_access.identity.roster import Role
from staff_access.permissions.catalog import ModuleKey
from staff_access.permissions.matrix import AppPermissions, Row


class PermissionStore:
    """In-memory holder of one AppPermissions document."""

    def __init__(self, permissions: Optional[AppPermissions] = None):
        self._permissions = permissions.copy() if permissions is not None else AppPermissions()

    # ── Baseline layer ────────────────────────────────────────

    def role_value(self, role: Role, module: ModuleKey, action: str) -> bool:
        """Deny-by-default read of the role baseline."""
        return bool(self._permissions.roles.get(role, module, action))

    def set_role_value(self, role: Role, module: ModuleKey, action: str, value: bool) -> None:
        self._permissions.roles.set(role, module, action, value)

    def role_row(self, role: Role) -> Row:
        return self._permissions.roles.row(role)

    def has_role_row(self, role: Role) -> bool:
        return self._permissions.roles.has_row(role)

    # ── Override layer ────────────────────────────────────────

    def user_override(self, user_id: str, module: ModuleKey, action: str) -> Optional[bool]:
        return self._permissions.users.get(user_id, module, action)

    def set_user_override(self, user_id: str, module: ModuleKey, action: str, value: bool) -> None:
        self._permissions.users.set(user_id, module, action, value)

    def clear_user_override(self, user_id: str, module: ModuleKey, action: str) -> bool:
        return self._permissions.users.clear(user_id, module, action)

    def clear_user_overrides(self, user_id: str) -> bool:
        return self._permissions.users.drop_row(user_id)

    def user_row(self, user_id: str) -> Row:
        return self._permissions.users.row(user_id)

    def replace_user_row(self, user_id: str, row: Mapping[ModuleKey, Mapping[str, bool]]) -> None:
        self._permissions.users.replace_row(user_id, row)

    # ── Document ──────────────────────────────────────────────

    def snapshot(self) -> AppPermissions:
        """Deep copy of the current document."""
        return self._permissions.copy()

    def load(self, permissions: AppPermissions) -> None:
        """Replace the whole document (copy semantics)."""
        self._permissions = permissions.copy()
