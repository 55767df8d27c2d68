"""
Staff Access Permissions — Public API
=====================================
"""

from staff_access.permissions.catalog import (
    DEFAULT_CATALOG,
    MODULE_CONFIG,
    ActionInfo,
    ModuleConfig,
    ModuleKey,
    PermissionCatalog,
)
from staff_access.permissions.defaults import DEFAULT_ROLE_BASELINES, default_permissions
from staff_access.permissions.matrix import (
    AppPermissions,
    PermissionMatrix,
    permissions_equal,
)
from staff_access.permissions.resolver import PermissionResolution, PermissionResolver
from staff_access.permissions.store import PermissionStore
from staff_access.permissions.templates import TemplateApplier

__all__ = [
    "ModuleKey",
    "ActionInfo",
    "ModuleConfig",
    "MODULE_CONFIG",
    "PermissionCatalog",
    "DEFAULT_CATALOG",
    "DEFAULT_ROLE_BASELINES",
    "default_permissions",
    "PermissionMatrix",
    "AppPermissions",
    "permissions_equal",
    "PermissionStore",
    "PermissionResolution",
    "PermissionResolver",
    "TemplateApplier",
]
