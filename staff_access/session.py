"""
Staff Access — Settings Edit Session
====================================
One load → edit → save cycle of the administration screens.

The surrounding application hands over whole documents, edits them
through the components exposed here and asks for whole documents back
on save. ``has_unsaved_changes`` compares the working copies with the
loaded baseline by deep equality; it gates the commit affordance.

Single writer: one session per business at a time. Serializing
concurrent sessions is the caller's job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional

from staff_access.config.settings import AssignmentGlobalPolicy
from staff_access.identity.roster import Roster
from staff_access.permissions.catalog import DEFAULT_CATALOG, PermissionCatalog
from staff_access.permissions.matrix import AppPermissions
from staff_access.permissions.resolver import PermissionResolver
from staff_access.permissions.store import PermissionStore
from staff_access.permissions.templates import TemplateApplier
from staff_access.time.clock import Clock
from staff_access.workflow.assignments import WorkflowAssignmentStore
from staff_access.workflow.policy import AssignmentPolicy
from staff_access.workflow.roles import DEFAULT_WORKFLOW_REGISTRY, WorkflowRoleRegistry
from staff_access.workflow.signing import SignatureGuard

logger = logging.getLogger("staff_access.session")


@dataclass(frozen=True)
class SessionDocuments:
    """Whole documents produced by ``save``."""
    permissions: dict
    workflow_roles: dict
    settings: dict


class AccessSettingsSession:
    def __init__(
        self,
        permissions: Optional[AppPermissions] = None,
        assignments: Optional[WorkflowAssignmentStore] = None,
        settings: Optional[AssignmentGlobalPolicy] = None,
        roster: Optional[Roster] = None,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
    ):
        self.roster = roster
        self.permission_store = PermissionStore(permissions)
        self.resolver = PermissionResolver(self.permission_store, catalog=catalog, roster=roster)
        self.templates = TemplateApplier(self.permission_store, roster=roster)
        self.assignments = assignments if assignments is not None else WorkflowAssignmentStore()
        self.policy = AssignmentPolicy(self.assignments, settings=settings, roster=roster)
        self.signatures = SignatureGuard(self.policy)
        self._rebaseline()

    @classmethod
    def from_documents(
        cls,
        permissions: Optional[Mapping[str, Any]] = None,
        workflow_roles: Optional[Mapping[str, Any]] = None,
        settings: Optional[Mapping[str, Any]] = None,
        roster: Optional[Iterable[Mapping[str, Any]]] = None,
        catalog: PermissionCatalog = DEFAULT_CATALOG,
        registry: WorkflowRoleRegistry = DEFAULT_WORKFLOW_REGISTRY,
        clock: Optional[Clock] = None,
    ) -> AccessSettingsSession:
        """Parse every document first so a bad one loads nothing."""
        return cls(
            permissions=AppPermissions.from_dict(permissions, catalog=catalog),
            assignments=WorkflowAssignmentStore.from_dict(
                workflow_roles, registry=registry, clock=clock
            ),
            settings=AssignmentGlobalPolicy.from_settings(settings),
            roster=Roster.from_records(roster) if roster is not None else None,
            catalog=catalog,
        )

    @property
    def settings(self) -> AssignmentGlobalPolicy:
        return self.policy.settings

    def update_settings(self, **changes) -> AssignmentGlobalPolicy:
        updated = self.policy.settings.with_changes(**changes)
        self.policy.update_settings(updated)
        return updated

    @property
    def has_unsaved_changes(self) -> bool:
        return (
            self.permission_store.snapshot() != self._baseline_permissions
            or self.assignments.snapshot() != self._baseline_assignments
            or self.policy.settings != self._baseline_settings
        )

    def save(self) -> SessionDocuments:
        """Return whole documents for persistence and make them the new baseline."""
        documents = SessionDocuments(
            permissions=self.permission_store.snapshot().to_dict(),
            workflow_roles=self.assignments.to_dict(),
            settings=self.policy.settings.to_dict(),
        )
        self._rebaseline()
        logger.info("Access settings saved.")
        return documents

    def discard(self) -> None:
        """Drop every edit made since load or the last save."""
        self.permission_store.load(self._baseline_permissions)
        self.assignments.load(self._baseline_assignments)
        self.policy.update_settings(self._baseline_settings)
        logger.info("Access settings edits discarded.")

    def _rebaseline(self) -> None:
        self._baseline_permissions = self.permission_store.snapshot()
        self._baseline_assignments = self.assignments.snapshot()
        self._baseline_settings = self.policy.settings
