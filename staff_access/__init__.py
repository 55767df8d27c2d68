"""
Staff Access - Public API
=========================
Role/user permission resolution and workflow signer delegation
for a retail back office.
"""

from staff_access.config import AssignmentGlobalPolicy
from staff_access.errors import (
    AccessControlError,
    DuplicateSignerConflict,
    IneligibleAssignee,
    PrivilegedRoleImmutable,
    UnassignedSigner,
    UnknownCatalogEntry,
    UnknownStaffMember,
)
from staff_access.identity import PRIVILEGED_ROLES, Role, Roster, StaffMember
from staff_access.permissions import (
    DEFAULT_CATALOG,
    AppPermissions,
    ModuleKey,
    PermissionCatalog,
    PermissionResolution,
    PermissionResolver,
    PermissionStore,
    TemplateApplier,
    default_permissions,
    permissions_equal,
)
from staff_access.session import AccessSettingsSession, SessionDocuments
from staff_access.workflow import (
    UNASSIGN_ALL,
    AssignmentPolicy,
    AssignmentResult,
    SignatureGuard,
    VerificationChain,
    WorkflowAssignmentStore,
    WorkflowRoleAssignment,
    WorkflowRoleKey,
    WorkflowRoleRegistry,
)

__all__ = [
    "AccessControlError",
    "UnknownCatalogEntry",
    "DuplicateSignerConflict",
    "PrivilegedRoleImmutable",
    "UnknownStaffMember",
    "IneligibleAssignee",
    "UnassignedSigner",
    "Role",
    "PRIVILEGED_ROLES",
    "StaffMember",
    "Roster",
    "ModuleKey",
    "PermissionCatalog",
    "DEFAULT_CATALOG",
    "AppPermissions",
    "permissions_equal",
    "default_permissions",
    "PermissionStore",
    "PermissionResolution",
    "PermissionResolver",
    "TemplateApplier",
    "VerificationChain",
    "WorkflowRoleKey",
    "WorkflowRoleRegistry",
    "WorkflowRoleAssignment",
    "WorkflowAssignmentStore",
    "UNASSIGN_ALL",
    "AssignmentResult",
    "AssignmentPolicy",
    "SignatureGuard",
    "AssignmentGlobalPolicy",
    "AccessSettingsSession",
    "SessionDocuments",
]
