"""
Staff Access Permissions — Default Role Baselines
=================================================
Seed baselines for a new business. Privileged roles have no rows:
they are implicitly all-allowed and their rows are never consulted.
Roles without an entry (SellerAgent, BankVerifier) start fully denied.
"""

from __future__ import annotations

from staff_access.identity.roster import Role
from staff_access.permissions.catalog import ModuleKey
from staff_access.permissions.matrix import AppPermissions, PermissionMatrix

DEFAULT_ROLE_BASELINES = {
    Role.MANAGER: {
        ModuleKey.SALES: {
            "view_counter": True,
            "create_sale": True,
            "cash_sale": True,
            "bank_transfer": True,
            "view_transactions": True,
            "apply_discount": True,
            "view_client_requests": True,
            "process_client_requests": True,
        },
        ModuleKey.INVENTORY: {"view_inventory": True},
        ModuleKey.CUSTOMERS: {
            "view_customers": True,
            "create_customer": True,
            "edit_customer": True,
        },
        ModuleKey.EXPENSES: {"view_expenses": True, "add_expense": True},
        ModuleKey.REPORTS: {"view_sales_reports": True},
        ModuleKey.FINANCE: {
            "cash_count_enter": True,
            "weekly_inventory_check_enter": True,
            "goods_receiving_enter": True,
        },
        ModuleKey.AI: {"view_assistant": True},
    },
    Role.CASHIER: {
        ModuleKey.SALES: {
            "view_counter": True,
            "create_sale": True,
            "cash_sale": True,
            "bank_transfer": True,
            "view_client_requests": True,
        },
        ModuleKey.INVENTORY: {"view_inventory": True},
        ModuleKey.CUSTOMERS: {"view_customers": True, "create_customer": True},
        ModuleKey.EXPENSES: {"view_expenses": True},
        ModuleKey.AI: {"view_assistant": True},
    },
    Role.INVESTOR: {
        ModuleKey.INVESTORS: {
            "view_own_investment": True,
            "view_own_profit_share": True,
        },
        ModuleKey.AI: {"view_assistant": True},
    },
}


def default_permissions() -> AppPermissions:
    """Fresh document seeded with the default baselines and no overrides."""
    return AppPermissions(roles=PermissionMatrix(DEFAULT_ROLE_BASELINES))
