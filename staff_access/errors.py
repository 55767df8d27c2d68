"""
Staff Access — Errors
=====================
Structured errors for permission and workflow-assignment operations.

Every mutating operation validates before it mutates, so raising
one of these guarantees that nothing was changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from staff_access.workflow.roles import WorkflowRoleKey


class AccessControlError(Exception):
    """Base error for staff access operations."""
    pass


class UnknownCatalogEntry(AccessControlError):
    """Module, action, role or workflow role key is not in the catalog."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        self.value = value
        super().__init__(f"Unknown {kind} '{value}'.")


class PrivilegedRoleImmutable(AccessControlError):
    """Owner / Super Admin permissions cannot be edited."""

    def __init__(self, role: str, subject: str | None = None):
        self.role = role
        self.subject = subject
        target = f"'{subject}' " if subject else ""
        super().__init__(
            f"Permissions of {target}role '{role}' are implicitly "
            f"all-allowed and cannot be edited."
        )


class DuplicateSignerConflict(AccessControlError):
    """The same person would occupy two stages of one verification chain."""

    def __init__(
        self,
        role_key: WorkflowRoleKey | str,
        user_id: str,
        conflicting_role_key: WorkflowRoleKey | str,
    ):
        self.role_key = role_key
        self.user_id = user_id
        self.conflicting_role_key = conflicting_role_key
        super().__init__(
            f"User '{user_id}' cannot take '{_key_value(role_key)}': "
            f"already holds '{_key_value(conflicting_role_key)}' "
            f"in the same verification chain."
        )


class UnknownStaffMember(AccessControlError):
    """User id is not present in the roster."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' is not in the staff roster.")


class IneligibleAssignee(AccessControlError):
    """User cannot be delegated a workflow role."""

    def __init__(self, user_id: str, role: str):
        self.user_id = user_id
        self.role = role
        super().__init__(
            f"User '{user_id}' with role '{role}' is not in the "
            f"workflow-assignable pool."
        )


class UnassignedSigner(AccessControlError):
    """User tried to sign a stage they are not delegated to."""

    def __init__(self, role_key: WorkflowRoleKey | str, user_id: str):
        self.role_key = role_key
        self.user_id = user_id
        super().__init__(
            f"User '{user_id}' is not assigned to workflow role "
            f"'{_key_value(role_key)}'."
        )


def _key_value(key: WorkflowRoleKey | str) -> str:
    return getattr(key, "value", key)
