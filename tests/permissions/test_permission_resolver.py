"""
Tests for staff_access.permissions.resolver — layered resolution and edits.
"""

import logging

import pytest

from staff_access.errors import PrivilegedRoleImmutable, UnknownCatalogEntry
from staff_access.identity.roster import Role, Roster, StaffMember
from staff_access.permissions.catalog import ModuleKey
from staff_access.permissions.matrix import AppPermissions
from staff_access.permissions.resolver import (
    SOURCE_OVERRIDE,
    SOURCE_PRIVILEGED,
    SOURCE_ROLE,
    PermissionResolution,
    PermissionResolver,
)
from staff_access.permissions.store import PermissionStore


CASHIER = StaffMember(user_id="u-cash", name="Amina", role=Role.CASHIER)
MANAGER = StaffMember(user_id="u-mgr", name="Brian", role=Role.MANAGER)
OWNER = StaffMember(user_id="u-own", name="Chloe", role=Role.OWNER)
SUPER_ADMIN = StaffMember(user_id="u-sa", name="Dev", role=Role.SUPER_ADMIN)
ROSTER = Roster([CASHIER, MANAGER, OWNER, SUPER_ADMIN])


def _resolver(document=None, roster=ROSTER) -> PermissionResolver:
    permissions = AppPermissions.from_dict(document or {})
    return PermissionResolver(PermissionStore(permissions), roster=roster)


# ── Resolution ───────────────────────────────────────────────

class TestResolve:
    def test_documented_scenario(self):
        resolver = _resolver({"roles": {"Cashier": {"SALES": {"create_sale": True}}}})

        assert resolver.resolve(CASHIER, "Sales", "create_sale") == PermissionResolution(
            granted=True, is_override=False, source=SOURCE_ROLE
        )

        resolver.set_user_override(CASHIER.user_id, "Sales", "create_sale", False)
        result = resolver.resolve(CASHIER, "Sales", "create_sale")
        assert result.granted is False
        assert result.is_override is True
        assert result.source == SOURCE_OVERRIDE

    def test_unset_cell_denies(self):
        resolver = _resolver()
        result = resolver.resolve(CASHIER, ModuleKey.SETTINGS, "admin_settings")
        assert result.granted is False
        assert result.is_override is False

    def test_role_without_row_denies_everything(self):
        resolver = _resolver({"roles": {"Manager": {"AI": {"view_assistant": True}}}})
        assert resolver.resolve(CASHIER, ModuleKey.AI, "view_assistant").granted is False

    def test_override_matching_baseline_is_not_flagged(self):
        resolver = _resolver({
            "roles": {"Cashier": {"SALES": {"create_sale": True}}},
            "users": {"u-cash": {"SALES": {"create_sale": True}}},
        })
        result = resolver.resolve(CASHIER, ModuleKey.SALES, "create_sale")
        assert result.granted is True
        assert result.is_override is False
        assert result.source == SOURCE_OVERRIDE

    def test_override_true_over_implicit_false_is_flagged(self):
        resolver = _resolver({"users": {"u-cash": {"SALES": {"give_credit": True}}}})
        result = resolver.resolve(CASHIER, ModuleKey.SALES, "give_credit")
        assert result.granted is True
        assert result.is_override is True

    def test_baseline_change_flips_override_flag(self):
        resolver = _resolver({"users": {"u-cash": {"SALES": {"give_credit": True}}}})
        assert resolver.resolve(CASHIER, ModuleKey.SALES, "give_credit").is_override

        resolver.set_role_permission(Role.CASHIER, ModuleKey.SALES, "give_credit", True)

        result = resolver.resolve(CASHIER, ModuleKey.SALES, "give_credit")
        assert result.granted is True
        assert result.is_override is False

    def test_overrides_are_per_user(self):
        other = StaffMember(user_id="u-cash-2", name="Eve", role=Role.CASHIER)
        resolver = _resolver({"roles": {"Cashier": {"SALES": {"create_sale": True}}}})
        resolver.set_user_override(CASHIER.user_id, "SALES", "create_sale", False)
        assert resolver.resolve(other, "SALES", "create_sale").granted is True

    @pytest.mark.parametrize("user", [OWNER, SUPER_ADMIN])
    def test_privileged_always_granted(self, user):
        resolver = _resolver({"users": {user.user_id: {"SALES": {"delete_sale": False}}}})
        result = resolver.resolve(user, ModuleKey.SALES, "delete_sale")
        assert result == PermissionResolution(
            granted=True, is_override=False, source=SOURCE_PRIVILEGED
        )

    def test_unknown_entry_raises_even_for_privileged(self):
        resolver = _resolver()
        with pytest.raises(UnknownCatalogEntry):
            resolver.resolve(OWNER, "SALES", "not_an_action")

    def test_has_access(self):
        resolver = _resolver({"roles": {"Manager": {"REPORTS": {"view_sales_reports": True}}}})
        assert resolver.has_access(MANAGER, "REPORTS", "view_sales_reports")
        assert not resolver.has_access(MANAGER, "REPORTS", "view_profit_reports")
        assert not resolver.has_access(None, "REPORTS", "view_sales_reports")

    def test_effective_permissions_cover_catalog(self):
        resolver = _resolver({"roles": {"Cashier": {"AI": {"view_assistant": True}}}})
        effective = resolver.effective_permissions(CASHIER)
        assert effective[ModuleKey.AI] == {"view_assistant": True, "admin_ai": False}
        assert set(effective) == set(ModuleKey)

    def test_diverging_overrides(self):
        resolver = _resolver({
            "roles": {"Cashier": {"SALES": {"create_sale": True}}},
            "users": {"u-cash": {"SALES": {"create_sale": True, "edit_sale": True}}},
        })
        assert resolver.diverging_overrides(CASHIER) == [(ModuleKey.SALES, "edit_sale")]


# ── Baseline edits ───────────────────────────────────────────

class TestRoleEdits:
    def test_set_role_permission(self):
        resolver = _resolver()
        resolver.set_role_permission("Manager", "inventory", "ADJUST_STOCK", True)
        assert resolver.store.role_value(Role.MANAGER, ModuleKey.INVENTORY, "adjust_stock")

    @pytest.mark.parametrize("role", [Role.OWNER, Role.SUPER_ADMIN, "Owner"])
    def test_privileged_rows_rejected(self, role):
        resolver = _resolver()
        before = resolver.store.snapshot()
        with pytest.raises(PrivilegedRoleImmutable):
            resolver.set_role_permission(role, ModuleKey.SALES, "create_sale", False)
        assert resolver.store.snapshot() == before

    def test_unknown_entry_leaves_matrix_untouched(self):
        resolver = _resolver()
        with pytest.raises(UnknownCatalogEntry):
            resolver.set_role_permission(Role.CASHIER, ModuleKey.SALES, "teleport", True)
        assert resolver.store.snapshot() == AppPermissions()

    def test_unknown_role_rejected(self):
        resolver = _resolver()
        with pytest.raises(UnknownCatalogEntry, match="role"):
            resolver.set_role_permission("Janitor", ModuleKey.SALES, "create_sale", True)

    def test_non_bool_value_rejected(self):
        resolver = _resolver()
        with pytest.raises(TypeError):
            resolver.set_role_permission(Role.CASHIER, ModuleKey.SALES, "create_sale", "true")

    def test_set_role_module(self):
        resolver = _resolver()
        resolver.set_role_module(Role.INVESTOR, ModuleKey.INVESTORS, True)
        row = resolver.store.role_row(Role.INVESTOR)
        assert len(row[ModuleKey.INVESTORS]) == 5
        assert all(row[ModuleKey.INVESTORS].values())

    def test_set_role_module_privileged_rejected(self):
        resolver = _resolver()
        with pytest.raises(PrivilegedRoleImmutable):
            resolver.set_role_module(Role.OWNER, ModuleKey.SALES, False)

    def test_edit_is_logged(self, caplog):
        resolver = _resolver()
        with caplog.at_level(logging.INFO, logger="staff_access.permissions"):
            resolver.set_role_permission(Role.CASHIER, ModuleKey.SALES, "create_sale", True)
        assert "Cashier" in caplog.text


# ── Override edits ───────────────────────────────────────────

class TestOverrideEdits:
    def test_override_for_privileged_user_rejected(self):
        resolver = _resolver()
        with pytest.raises(PrivilegedRoleImmutable) as exc:
            resolver.set_user_override(OWNER.user_id, ModuleKey.SALES, "create_sale", False)
        assert exc.value.subject == OWNER.user_id
        assert resolver.store.snapshot() == AppPermissions()

    def test_override_for_unknown_user_is_allowed(self):
        resolver = _resolver()
        resolver.set_user_override("former-staff", ModuleKey.SALES, "create_sale", True)
        assert resolver.store.user_override("former-staff", ModuleKey.SALES, "create_sale")

    def test_without_roster_any_id_is_editable(self):
        resolver = _resolver(roster=None)
        resolver.set_user_override(OWNER.user_id, ModuleKey.SALES, "create_sale", False)
        # the privileged floor still applies at resolution time
        assert resolver.resolve(OWNER, ModuleKey.SALES, "create_sale").granted

    def test_clear_user_override_defers_again(self):
        resolver = _resolver({"roles": {"Cashier": {"SALES": {"create_sale": True}}}})
        resolver.set_user_override(CASHIER.user_id, ModuleKey.SALES, "create_sale", False)
        assert resolver.clear_user_override(CASHIER.user_id, ModuleKey.SALES, "create_sale")
        result = resolver.resolve(CASHIER, ModuleKey.SALES, "create_sale")
        assert result.granted is True
        assert result.source == SOURCE_ROLE
        assert not resolver.clear_user_override(CASHIER.user_id, ModuleKey.SALES, "create_sale")

    def test_set_user_module(self):
        resolver = _resolver({"roles": {"Cashier": {"CUSTOMERS": {"view_customers": True}}}})
        resolver.set_user_module(CASHIER.user_id, ModuleKey.CUSTOMERS, False)
        assert not any(resolver.effective_permissions(CASHIER)[ModuleKey.CUSTOMERS].values())


# ── Safe mode ────────────────────────────────────────────────

class TestSafeMode:
    def test_view_actions_open_to_everyone(self):
        resolver = _resolver({"users": {"u-cash": {"REPORTS": {"view_profit_reports": False}}}})
        assert not resolver.has_access(CASHIER, "REPORTS", "view_profit_reports")
        assert resolver.has_access(CASHIER, "REPORTS", "view_profit_reports", safe_mode=True)
        assert resolver.has_access(CASHIER, ModuleKey.INVESTORS, "view_all_investors", safe_mode=True)

    def test_non_view_actions_still_resolved(self):
        resolver = _resolver({"roles": {"Cashier": {"SALES": {"create_sale": True}}}})
        assert resolver.has_access(CASHIER, "SALES", "create_sale", safe_mode=True)
        assert not resolver.has_access(CASHIER, "SALES", "delete_sale", safe_mode=True)
        assert not resolver.has_access(CASHIER, "SETTINGS", "manage_permissions", safe_mode=True)

    def test_resolve_ignores_safe_mode(self):
        resolver = _resolver()
        assert resolver.has_access(CASHIER, "REPORTS", "view_sales_reports", safe_mode=True)
        result = resolver.resolve(CASHIER, "REPORTS", "view_sales_reports")
        assert result == PermissionResolution(granted=False, is_override=False, source=SOURCE_ROLE)

    def test_no_user_never_granted(self):
        assert not _resolver().has_access(None, "REPORTS", "view_sales_reports", safe_mode=True)

    def test_privileged_unaffected(self):
        assert _resolver().has_access(OWNER, "SETTINGS", "admin_settings", safe_mode=True)

    def test_unknown_action_still_rejected(self):
        with pytest.raises(UnknownCatalogEntry):
            _resolver().has_access(CASHIER, "REPORTS", "view_everything", safe_mode=True)
