"""
Staff Access Workflow — Workflow Role Assignments
=================================================
For each workflow role key, the ordered list of staff delegated to
perform it. Insertion order is grant order.

RULES:
- Assignments are immutable. Removal deletes; nothing is edited in place.
- ``assigned_by`` / ``assigned_at`` are captured once, at creation.
- A user appears at most once per role.
- Unassigning someone who is not assigned is a silent no-op.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple

from staff_access.time.clock import Clock, get_default_clock
from staff_access.workflow.roles import (
    DEFAULT_WORKFLOW_REGISTRY,
    WorkflowRoleKey,
    WorkflowRoleRegistry,
)

logger = logging.getLogger("staff_access.workflow")

# Sentinel user id meaning "clear every assignee of this role".
UNASSIGN_ALL = "none"


# ══════════════════════════════════════════════════════════════
# ASSIGNMENT RECORD
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class WorkflowRoleAssignment:
    """
    One delegation of a workflow role to a staff member.

    Fields:
        user_id:     The delegated staff member
        assigned_by: Display name of whoever granted it
        assigned_at: Timezone-aware grant time
    """
    user_id: str
    assigned_by: str
    assigned_at: datetime

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if not isinstance(self.assigned_by, str):
            raise ValueError("assigned_by must be a string.")
        if not isinstance(self.assigned_at, datetime):
            raise TypeError("assigned_at must be datetime.")
        if self.assigned_at.tzinfo is None:
            raise ValueError("assigned_at must be timezone-aware.")

    def to_dict(self) -> dict:
        return {
            "userId": self.user_id,
            "assignedBy": self.assigned_by,
            "assignedAt": self.assigned_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> WorkflowRoleAssignment:
        return cls(
            user_id=data["userId"],
            assigned_by=data.get("assignedBy", ""),
            assigned_at=_parse_timestamp(data["assignedAt"]),
        )


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# ══════════════════════════════════════════════════════════════
# ASSIGNMENT RESULT
# ══════════════════════════════════════════════════════════════

class AssignmentOutcome(Enum):
    ASSIGNED = "ASSIGNED"      # fresh grant written
    REPLACED = "REPLACED"      # single-assignee: prior assignees dropped
    UNCHANGED = "UNCHANGED"    # multi-assignee: user already present
    CLEARED = "CLEARED"        # unassign-all sentinel


@dataclass(frozen=True)
class AssignmentResult:
    role_key: WorkflowRoleKey
    outcome: AssignmentOutcome
    assignments: Tuple[WorkflowRoleAssignment, ...]
    dropped: Tuple[WorkflowRoleAssignment, ...] = ()

    @property
    def changed(self) -> bool:
        return self.outcome != AssignmentOutcome.UNCHANGED


# ══════════════════════════════════════════════════════════════
# ASSIGNMENT STORE
# ══════════════════════════════════════════════════════════════

class WorkflowAssignmentStore:
    """
    In-memory WorkflowRoleAssignments document for one edit session.

    Cross-stage rules are not checked here; AssignmentPolicy does that
    before delegating to ``assign``.
    """

    def __init__(
        self,
        assignments: Optional[Mapping[WorkflowRoleKey, Iterable[WorkflowRoleAssignment]]] = None,
        registry: WorkflowRoleRegistry = DEFAULT_WORKFLOW_REGISTRY,
        clock: Optional[Clock] = None,
    ):
        self._registry = registry
        self._clock = clock
        self._assignments: Dict[WorkflowRoleKey, Tuple[WorkflowRoleAssignment, ...]] = {}
        for key, entries in (assignments or {}).items():
            entries = tuple(entries)
            user_ids = [a.user_id for a in entries]
            if len(user_ids) != len(set(user_ids)):
                raise ValueError(
                    f"Workflow role '{self._registry.parse(key).value}' lists a user twice."
                )
            if entries:
                self._assignments[self._registry.parse(key)] = entries

    @property
    def registry(self) -> WorkflowRoleRegistry:
        return self._registry

    def _now(self) -> datetime:
        clock = self._clock if self._clock is not None else get_default_clock()
        return clock.now_utc()

    # ── Mutations ─────────────────────────────────────────────

    def assign(
        self,
        role_key,
        user_id: str,
        *,
        assigned_by: str,
        allow_multiple: bool = False,
    ) -> AssignmentResult:
        """
        Delegate ``role_key`` to ``user_id``.

        Single-assignee mode replaces the list with one new assignment,
        restamped even when the user already held the role.
        Multi-assignee mode appends unless the user is already present.
        ``UNASSIGN_ALL`` clears the role.
        """
        key = self._registry.parse(role_key)
        if not user_id or not isinstance(user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        current = self._assignments.get(key, ())

        if user_id == UNASSIGN_ALL:
            self._assignments.pop(key, None)
            logger.info(f"Cleared all assignees of '{key.value}'.")
            return AssignmentResult(key, AssignmentOutcome.CLEARED, (), current)

        if allow_multiple:
            if any(a.user_id == user_id for a in current):
                return AssignmentResult(key, AssignmentOutcome.UNCHANGED, current)
            updated = current + (self._new_assignment(user_id, assigned_by),)
            self._assignments[key] = updated
            logger.info(f"Assigned '{user_id}' to '{key.value}' by '{assigned_by}'.")
            return AssignmentResult(key, AssignmentOutcome.ASSIGNED, updated)

        # single mode always writes a fresh grant, even for the current holder
        fresh = self._new_assignment(user_id, assigned_by)
        dropped = tuple(a for a in current if a.user_id != user_id)
        self._assignments[key] = (fresh,)
        outcome = AssignmentOutcome.REPLACED if dropped else AssignmentOutcome.ASSIGNED
        logger.info(
            f"Assigned '{user_id}' as sole holder of '{key.value}' by '{assigned_by}'"
            f" (dropped {[a.user_id for a in dropped]})."
        )
        return AssignmentResult(key, outcome, (fresh,), dropped)

    def unassign(self, role_key, user_id: str) -> bool:
        """Remove one assignee. Returns whether anything was removed."""
        key = self._registry.parse(role_key)
        current = self._assignments.get(key, ())
        remaining = tuple(a for a in current if a.user_id != user_id)
        if len(remaining) == len(current):
            return False
        if remaining:
            self._assignments[key] = remaining
        else:
            del self._assignments[key]
        logger.info(f"Unassigned '{user_id}' from '{key.value}'.")
        return True

    def _new_assignment(self, user_id: str, assigned_by: str) -> WorkflowRoleAssignment:
        return WorkflowRoleAssignment(
            user_id=user_id,
            assigned_by=assigned_by,
            assigned_at=self._now(),
        )

    # ── Queries ───────────────────────────────────────────────

    def assignments_for(self, role_key) -> Tuple[WorkflowRoleAssignment, ...]:
        return self._assignments.get(self._registry.parse(role_key), ())

    def holders(self, role_key) -> Tuple[str, ...]:
        return tuple(a.user_id for a in self.assignments_for(role_key))

    def is_assigned(self, role_key, user_id: str) -> bool:
        return user_id in self.holders(role_key)

    def roles_for(self, user_id: str) -> Tuple[WorkflowRoleKey, ...]:
        """Workflow roles the user currently holds, in catalog order."""
        return tuple(
            key for key in self._registry.keys()
            if any(a.user_id == user_id for a in self._assignments.get(key, ()))
        )

    # ── Document ──────────────────────────────────────────────

    def snapshot(self) -> Dict[WorkflowRoleKey, Tuple[WorkflowRoleAssignment, ...]]:
        return dict(self._assignments)

    def load(
        self,
        assignments: Mapping[WorkflowRoleKey, Iterable[WorkflowRoleAssignment]],
    ) -> None:
        """Replace the whole document in place."""
        replacement = WorkflowAssignmentStore(assignments, registry=self._registry)
        self._assignments = replacement._assignments

    def copy(self) -> WorkflowAssignmentStore:
        return WorkflowAssignmentStore(self._assignments, registry=self._registry, clock=self._clock)

    def to_dict(self) -> Dict[str, list]:
        return {
            key.value: [a.to_dict() for a in self._assignments[key]]
            for key in self._registry.keys()
            if key in self._assignments
        }

    @classmethod
    def from_dict(
        cls,
        data: Optional[Mapping[str, Iterable[Mapping]]],
        registry: WorkflowRoleRegistry = DEFAULT_WORKFLOW_REGISTRY,
        clock: Optional[Clock] = None,
    ) -> WorkflowAssignmentStore:
        parsed = {
            registry.parse(key): tuple(WorkflowRoleAssignment.from_dict(e) for e in (entries or ()))
            for key, entries in (data or {}).items()
        }
        return cls(parsed, registry=registry, clock=clock)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WorkflowAssignmentStore):
            return NotImplemented
        return self._assignments == other._assignments
