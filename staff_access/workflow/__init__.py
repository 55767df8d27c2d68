"""
Staff Access Workflow — Public API
==================================
"""

from staff_access.workflow.assignments import (
    UNASSIGN_ALL,
    AssignmentOutcome,
    AssignmentResult,
    WorkflowAssignmentStore,
    WorkflowRoleAssignment,
)
from staff_access.workflow.policy import AssignmentPolicy, SignerOverlap
from staff_access.workflow.roles import (
    DEFAULT_WORKFLOW_REGISTRY,
    WORKFLOW_STAGES,
    VerificationChain,
    WorkflowRoleKey,
    WorkflowRoleRegistry,
    WorkflowStage,
)
from staff_access.workflow.signing import SignatureGuard

__all__ = [
    "VerificationChain",
    "WorkflowRoleKey",
    "WorkflowStage",
    "WORKFLOW_STAGES",
    "WorkflowRoleRegistry",
    "DEFAULT_WORKFLOW_REGISTRY",
    "UNASSIGN_ALL",
    "WorkflowRoleAssignment",
    "AssignmentOutcome",
    "AssignmentResult",
    "WorkflowAssignmentStore",
    "AssignmentPolicy",
    "SignerOverlap",
    "SignatureGuard",
]
