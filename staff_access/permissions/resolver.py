"""
Staff Access Permissions — Deterministic Permission Resolver
============================================================
Effective grant for (user, module, action):

    privileged role  → granted, never an override
    override present → override value; flagged when it diverges
                       from the current role baseline
    otherwise        → role baseline, deny by default

Edits to either layer go through here so that catalog membership
and the privileged-role floor are checked before anything changes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from staff_access.errors import PrivilegedRoleImmutable
from staff_access.identity.roster import Role, Roster, StaffMember
from staff_access.permissions.catalog import DEFAULT_CATALOG, ModuleKey, PermissionCatalog
from staff_access.permissions.store import PermissionStore

logger = logging.getLogger("staff_access.permissions")

SOURCE_PRIVILEGED = "privileged"
SOURCE_OVERRIDE = "override"
SOURCE_ROLE = "role"


@dataclass(frozen=True)
class PermissionResolution:
    granted: bool
    is_override: bool = False
    source: str = SOURCE_ROLE


class PermissionResolver:
    def __init__(
        self,
        store: PermissionStore,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
        roster: Optional[Roster] = None,
    ):
        self._store = store
        self._catalog = catalog
        self._roster = roster

    @property
    def store(self) -> PermissionStore:
        return self._store

    @property
    def catalog(self) -> PermissionCatalog:
        return self._catalog

    # ── Read path ─────────────────────────────────────────────

    def resolve(self, user: StaffMember, module, action) -> PermissionResolution:
        """
        Resolve the effective grant for a user.

        Raises UnknownCatalogEntry for a module/action outside the catalog,
        including for privileged users.
        """
        module_key, action_key = self._catalog.require(module, action)

        if user.role.is_privileged:
            return PermissionResolution(
                granted=True, is_override=False, source=SOURCE_PRIVILEGED
            )

        baseline = self._store.role_value(user.role, module_key, action_key)
        override = self._store.user_override(user.user_id, module_key, action_key)
        if override is None:
            result = PermissionResolution(granted=baseline, source=SOURCE_ROLE)
        else:
            result = PermissionResolution(
                granted=override,
                is_override=override != baseline,
                source=SOURCE_OVERRIDE,
            )

        logger.debug(
            f"Resolved {module_key.value}.{action_key} for user "
            f"'{user.user_id}' ({user.role.value}): {result}"
        )
        return result

    def has_access(
        self,
        user: Optional[StaffMember],
        module,
        action,
        safe_mode: bool = False,
    ) -> bool:
        """
        Gate check for one action.

        ``safe_mode`` opens every read-only action (any action key that
        contains "view") to all staff, ahead of overrides and baselines.
        ``resolve`` itself never looks at it.
        """
        if user is None:
            return False
        module_key, action_key = self._catalog.require(module, action)
        if safe_mode and not user.role.is_privileged and "view" in action_key:
            logger.debug(
                f"Safe mode grants {module_key.value}.{action_key} to '{user.user_id}'."
            )
            return True
        return self.resolve(user, module_key, action_key).granted

    def effective_permissions(self, user: StaffMember) -> Dict[ModuleKey, Dict[str, bool]]:
        """Every catalog cell resolved for one user, in catalog order."""
        return {
            config.key: {
                action: self.resolve(user, config.key, action).granted
                for action in config.action_keys
            }
            for config in self._catalog.modules()
        }

    def diverging_overrides(self, user: StaffMember) -> List[Tuple[ModuleKey, str]]:
        """Cells where the user's override currently differs from the role."""
        return [
            (config.key, action)
            for config in self._catalog.modules()
            for action in config.action_keys
            if self.resolve(user, config.key, action).is_override
        ]

    # ── Baseline edits ────────────────────────────────────────

    def set_role_permission(self, role, module, action, value: bool) -> None:
        role = Role.parse(role)
        module_key, action_key = self._catalog.require(module, action)
        _check_bool(value)
        if role.is_privileged:
            logger.warning(f"Rejected baseline edit of privileged role '{role.value}'.")
            raise PrivilegedRoleImmutable(role.value)

        self._store.set_role_value(role, module_key, action_key, value)
        logger.info(
            f"Role '{role.value}' {module_key.value}.{action_key} set to {value}."
        )

    def set_role_module(self, role, module, value: bool) -> None:
        """Set every action of one module on a role baseline."""
        role = Role.parse(role)
        module_key = self._catalog.require_module(module)
        _check_bool(value)
        if role.is_privileged:
            logger.warning(f"Rejected baseline edit of privileged role '{role.value}'.")
            raise PrivilegedRoleImmutable(role.value)

        for action in self._catalog.module(module_key).action_keys:
            self._store.set_role_value(role, module_key, action, value)
        logger.info(f"Role '{role.value}' module {module_key.value} set to {value}.")

    # ── Override edits ────────────────────────────────────────

    def set_user_override(self, user_id: str, module, action, value: bool) -> None:
        module_key, action_key = self._catalog.require(module, action)
        _check_bool(value)
        self._check_editable_user(user_id)

        self._store.set_user_override(user_id, module_key, action_key, value)
        logger.info(
            f"User '{user_id}' override {module_key.value}.{action_key} set to {value}."
        )

    def set_user_module(self, user_id: str, module, value: bool) -> None:
        """Override every action of one module for a user."""
        module_key = self._catalog.require_module(module)
        _check_bool(value)
        self._check_editable_user(user_id)

        for action in self._catalog.module(module_key).action_keys:
            self._store.set_user_override(user_id, module_key, action, value)
        logger.info(f"User '{user_id}' module {module_key.value} overridden to {value}.")

    def clear_user_override(self, user_id: str, module, action) -> bool:
        """Drop one override so the cell defers to the role again."""
        module_key, action_key = self._catalog.require(module, action)
        removed = self._store.clear_user_override(user_id, module_key, action_key)
        if removed:
            logger.info(
                f"User '{user_id}' override {module_key.value}.{action_key} cleared."
            )
        return removed

    def _check_editable_user(self, user_id: str) -> None:
        if self._roster is None:
            return
        member = self._roster.get(user_id)
        if member is not None and member.is_privileged:
            logger.warning(
                f"Rejected override edit of privileged user '{user_id}'."
            )
            raise PrivilegedRoleImmutable(member.role.value, subject=user_id)


def _check_bool(value) -> None:
    if not isinstance(value, bool):
        raise TypeError(f"permission value must be bool, got {type(value).__name__}.")
