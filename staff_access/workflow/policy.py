"""
Staff Access Workflow — Assignment Policy
=========================================
Business rules applied before a workflow role is delegated:

- single vs. multiple assignees per role (AssignmentGlobalPolicy)
- unique signers: nobody may hold two stages of the same chain,
  otherwise the second signature proves nothing

The unique-signer check runs at assignment time only. Turning the
setting off and back on never invalidates assignments that already
exist; ``overlaps()`` reports them instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from staff_access.config.settings import AssignmentGlobalPolicy
from staff_access.errors import DuplicateSignerConflict, IneligibleAssignee
from staff_access.identity.roster import Roster, StaffMember
from staff_access.workflow.assignments import (
    UNASSIGN_ALL,
    AssignmentResult,
    WorkflowAssignmentStore,
)
from staff_access.workflow.roles import VerificationChain, WorkflowRoleKey

logger = logging.getLogger("staff_access.workflow")


@dataclass(frozen=True)
class SignerOverlap:
    """One user holding several stages of a single chain."""
    user_id: str
    chain: VerificationChain
    role_keys: Tuple[WorkflowRoleKey, ...]


class AssignmentPolicy:
    def __init__(
        self,
        store: WorkflowAssignmentStore,
        settings: Optional[AssignmentGlobalPolicy] = None,
        roster: Optional[Roster] = None,
    ):
        self._store = store
        self._settings = settings if settings is not None else AssignmentGlobalPolicy()
        self._roster = roster

    @property
    def store(self) -> WorkflowAssignmentStore:
        return self._store

    @property
    def settings(self) -> AssignmentGlobalPolicy:
        return self._settings

    def update_settings(self, settings: AssignmentGlobalPolicy) -> None:
        """Swap the policy. Existing assignments are left untouched."""
        self._settings = settings
        logger.info(f"Assignment policy updated: {settings.to_dict()}.")

    def assign(
        self,
        role_key,
        user_id: str,
        acting: Union[StaffMember, str],
    ) -> AssignmentResult:
        """
        Delegate ``role_key`` to ``user_id`` on behalf of ``acting``.

        Raises:
            UnknownCatalogEntry: role_key is not a workflow role.
            UnknownStaffMember / IneligibleAssignee: roster rejects the user.
            DuplicateSignerConflict: user holds another stage of the chain.
        """
        key = self._store.registry.parse(role_key)
        assigned_by = acting.name if isinstance(acting, StaffMember) else acting

        if user_id != UNASSIGN_ALL:
            self._check_eligible(user_id)
            conflicting = self.conflict_for(key, user_id)
            if conflicting is not None:
                logger.warning(
                    f"Rejected '{user_id}' for '{key.value}': already holds "
                    f"'{conflicting.value}'."
                )
                raise DuplicateSignerConflict(key, user_id, conflicting)

        return self._store.assign(
            key,
            user_id,
            assigned_by=assigned_by,
            allow_multiple=self._settings.allow_multiple_assignees_per_role,
        )

    def unassign(self, role_key, user_id: str) -> bool:
        return self._store.unassign(role_key, user_id)

    def conflict_for(self, role_key, user_id: str) -> Optional[WorkflowRoleKey]:
        """First peer stage held by ``user_id``, or None when allowed."""
        if not self._settings.enforce_unique_signers:
            return None
        for peer in self._store.registry.peers(role_key):
            if self._store.is_assigned(peer, user_id):
                return peer
        return None

    def overlaps(self) -> List[SignerOverlap]:
        """Users currently holding more than one stage of a chain."""
        registry = self._store.registry
        found = []
        for chain in registry.chains():
            held: dict[str, list] = {}
            for stage in registry.stages(chain):
                for user_id in self._store.holders(stage.key):
                    held.setdefault(user_id, []).append(stage.key)
            for user_id, keys in held.items():
                if len(keys) > 1:
                    found.append(SignerOverlap(user_id, chain, tuple(keys)))
        return found

    def _check_eligible(self, user_id: str) -> None:
        if self._roster is None:
            return
        member = self._roster.require(user_id)
        if member.is_privileged:
            raise IneligibleAssignee(user_id, member.role.value)
