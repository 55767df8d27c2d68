"""
Staff Access Permissions — Module / Action Catalog
==================================================
Static catalog of functional modules and the actions each exposes.
Pure data: the catalog is configuration consumed read-only.

Lookups are case-insensitive. Module keys normalize to upper case,
action keys to lower case.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple

from staff_access.errors import UnknownCatalogEntry


class ModuleKey(Enum):
    SALES = "SALES"
    INVENTORY = "INVENTORY"
    RECEIPTS = "RECEIPTS"
    CUSTOMERS = "CUSTOMERS"
    EXPENSES = "EXPENSES"
    EXPENSE_REQUESTS = "EXPENSE_REQUESTS"
    COMMISSIONS = "COMMISSIONS"
    INVESTORS = "INVESTORS"
    REPORTS = "REPORTS"
    FINANCE = "FINANCE"
    AI = "AI"
    SETTINGS = "SETTINGS"


@dataclass(frozen=True)
class ActionInfo:
    key: str
    name: str
    description: str = ""

    def __post_init__(self):
        if not self.key or not isinstance(self.key, str):
            raise ValueError("action key must be a non-empty string.")
        if self.key != self.key.lower():
            raise ValueError(f"action key '{self.key}' must be lower case.")


@dataclass(frozen=True)
class ModuleConfig:
    key: ModuleKey
    name: str
    actions: Tuple[ActionInfo, ...]

    def __post_init__(self):
        if not isinstance(self.key, ModuleKey):
            raise TypeError("key must be ModuleKey enum.")
        if not isinstance(self.actions, tuple) or not self.actions:
            raise ValueError(
                f"module '{self.key.value}' must own a non-empty tuple of actions."
            )
        keys = [a.key for a in self.actions]
        if len(keys) != len(set(keys)):
            raise ValueError(f"module '{self.key.value}' has duplicate actions.")

    @property
    def action_keys(self) -> Tuple[str, ...]:
        return tuple(a.key for a in self.actions)


def _module(key: ModuleKey, name: str, *actions: Tuple[str, str, str]) -> ModuleConfig:
    return ModuleConfig(
        key=key,
        name=name,
        actions=tuple(ActionInfo(*action) for action in actions),
    )


MODULE_CONFIG: Tuple[ModuleConfig, ...] = (
    _module(
        ModuleKey.SALES, "Sales / Counter",
        ("view_counter", "View Counter", "Access storefront and checkout."),
        ("create_sale", "Create Sale", "Finalize transactions."),
        ("cash_sale", "Cash Settlement", "Process cash-based payments."),
        ("bank_transfer", "Bank Transfer", "Allow bank receipt/transfer payments."),
        ("view_transactions", "Cash Transactions", "Access the global cash transactions history."),
        ("view_client_requests", "Client Request", "Monitor incoming requests from the public shopfront."),
        ("process_client_requests", "Process Client Requests", "Convert public inquiries into finalized sales."),
        ("apply_discount", "Apply Discount", "Modify prices during checkout."),
        ("apply_gift_free", "Apply Gift/Free", "Zero out item prices."),
        ("add_tax", "Add Tax", "Modify tax at checkout."),
        ("edit_sale", "Edit Sale", "Modify existing sale records."),
        ("delete_sale", "Delete Sale", "Purge sale records."),
        ("give_credit", "Give Credit", "Allow debt transactions."),
    ),
    _module(
        ModuleKey.INVENTORY, "Inventory",
        ("view_inventory", "View Inventory", "Access product registry."),
        ("create_product", "Create Product", "Enroll new items."),
        ("edit_product", "Edit Product", "Modify SKU details."),
        ("adjust_stock", "Adjust Stock", "Perform manual stock shifts."),
        ("view_cost_price", "View Cost Price", "See unit acquisition costs."),
        ("admin_inventory", "Admin Inventory", "Full inventory control."),
    ),
    _module(
        ModuleKey.RECEIPTS, "Receipts & Proforma",
        ("view_receipts", "View Receipts", "Access sales ledger."),
        ("create_receipt", "Create Receipt", "Issue digital receipts."),
        ("edit_receipt", "Edit Receipt", "Modify issued receipts."),
        ("return_receipt", "Return Receipt", "Process stock returns."),
        ("delete_receipt", "Delete Receipt", "Purge receipt records."),
        ("view_proforma", "View Proforma", "Access proforma ledger."),
        ("create_proforma", "Create Proforma", "Issue quotes."),
        ("edit_proforma", "Edit Proforma", "Modify quotes."),
    ),
    _module(
        ModuleKey.CUSTOMERS, "Customers",
        ("view_customers", "View Customers", "Access client registry."),
        ("create_customer", "Create Customer", "Enroll new clients."),
        ("edit_customer", "Edit Customer", "Modify client data."),
        ("admin_customers", "Admin Customers", "Full client control."),
    ),
    _module(
        ModuleKey.EXPENSES, "Expenses",
        ("view_expenses", "View Expenses", "Access expense ledger."),
        ("add_expense", "Add Expense", "Log expenditure."),
        ("modify_expense", "Modify Expense", "Edit expense records."),
        ("delete_expense", "Delete Expense", "Archive expense records."),
        ("approve_expense", "Approve Expense", "Authorize pending items."),
    ),
    _module(
        ModuleKey.EXPENSE_REQUESTS, "Expense Requests",
        ("view_expense_requests", "View Requests", "Monitor pending queue."),
        ("create_expense_request", "Create Request", "Submit for review."),
        ("approve_expense_request", "Approve Request", "Authorize staff spend."),
    ),
    _module(
        ModuleKey.COMMISSIONS, "Commissions & Withdrawals",
        ("view_own_commissions", "View Own", "See personal yield."),
        ("request_commission_withdrawal", "Request Payout", "Initiate liquidation."),
        ("view_all_commissions", "View All", "Monitor team performance."),
        ("approve_commission_withdrawal", "Approve Payout", "Authorize liquidation."),
    ),
    _module(
        ModuleKey.INVESTORS, "Investors",
        ("view_own_investment", "View Own Stake", "See personal capital."),
        ("view_own_profit_share", "View Own Yield", "See personal profit."),
        ("request_investor_withdrawal", "Request Dividend", "Request profit payout."),
        ("view_all_investors", "View All", "See global capital pool."),
        ("approve_investor_withdrawal", "Approve Dividend", "Authorize capital payout."),
    ),
    _module(
        ModuleKey.REPORTS, "Reports Page",
        ("view_sales_reports", "View Sales Reports", "Access revenue and performance reports."),
        ("view_profit_reports", "View Profit Reports", "Access sensitive earnings and margin reports."),
        ("view_inventory_reports", "View Inventory Reports", "Access stock velocity reports."),
    ),
    _module(
        ModuleKey.FINANCE, "Finance & Controls",
        ("cash_count_enter", "Daily Cash Verification", "Perform daily cash count entry."),
        ("cash_count_verify", "Verify Cash (2nd Sign)", "Perform 2nd signature verification."),
        ("cash_count_approve", "Approve Cash (Final)", "Final owner/admin audit approval."),
        ("weekly_inventory_check_enter", "Weekly Inventory Audit", "Perform physical stock checks."),
        ("weekly_inventory_check_verify", "Verify Stock (2nd Sign)", "Verify physical stock checks."),
        ("weekly_inventory_check_approve", "Approve Stock (Final)", "Final stock audit approval."),
        ("goods_receiving_enter", "Goods Receiving", "Log arrival of new shipments."),
        ("goods_receiving_verify", "Verify Goods (2nd Sign)", "Perform verification on shipments."),
        ("goods_receiving_approve", "Approve Goods (Final)", "Final sign-off for shipment entries."),
        ("goods_costing_view", "Goods Costing", "Access the landed cost derivation tool."),
    ),
    _module(
        ModuleKey.AI, "AI Assistant",
        ("view_assistant", "Use AI Assistant", "Access the assistant."),
        ("admin_ai", "Admin AI Policy", "Manage AI filtering rules and data access."),
    ),
    _module(
        ModuleKey.SETTINGS, "Settings",
        ("view_settings", "View Settings", "Access the basic settings panel."),
        ("manage_business_settings", "Manage Business", "Change business config and profile."),
        ("manage_permissions", "Staff Management", "Enroll staff and control access rights."),
        ("admin_settings", "Owner Controls", "Access principal owner-only overrides."),
    ),
)


# ══════════════════════════════════════════════════════════════
# CATALOG
# ══════════════════════════════════════════════════════════════

class PermissionCatalog:
    """
    Read-only index over module configurations.

    Every matrix write and every resolution goes through ``require``
    so that unknown entries are rejected before anything is touched.
    """

    def __init__(self, modules: Iterable[ModuleConfig]):
        self._modules: Dict[ModuleKey, ModuleConfig] = {}
        for module in modules:
            if module.key in self._modules:
                raise ValueError(f"Duplicate module '{module.key.value}'.")
            self._modules[module.key] = module

    def modules(self) -> Tuple[ModuleConfig, ...]:
        return tuple(self._modules.values())

    def module(self, module) -> ModuleConfig:
        return self._modules[self.require_module(module)]

    def actions(self, module) -> Tuple[ActionInfo, ...]:
        return self.module(module).actions

    def require_module(self, module) -> ModuleKey:
        if isinstance(module, ModuleKey):
            key = module
        elif isinstance(module, str):
            try:
                key = ModuleKey(module.strip().upper())
            except ValueError:
                raise UnknownCatalogEntry("module", module) from None
        else:
            raise UnknownCatalogEntry("module", module)
        if key not in self._modules:
            raise UnknownCatalogEntry("module", module)
        return key

    def require(self, module, action) -> Tuple[ModuleKey, str]:
        """Normalize and validate a (module, action) pair."""
        key = self.require_module(module)
        if not isinstance(action, str):
            raise UnknownCatalogEntry("action", action)
        normalized = action.strip().lower()
        if normalized not in self._modules[key].action_keys:
            raise UnknownCatalogEntry("action", f"{key.value}.{action}")
        return key, normalized

    def contains(self, module, action) -> bool:
        try:
            self.require(module, action)
        except UnknownCatalogEntry:
            return False
        return True

    def full_access(self) -> Dict[ModuleKey, Dict[str, bool]]:
        return {
            key: {action: True for action in config.action_keys}
            for key, config in self._modules.items()
        }


DEFAULT_CATALOG = PermissionCatalog(MODULE_CONFIG)
