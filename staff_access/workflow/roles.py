"""
Staff Access Workflow — Workflow Role Registry
==============================================
Typed catalog of workflow role keys, grouped into verification
chains. Each chain is an ordered sequence of stages; each key sits in
exactly one chain at one position.

    Cash Verification   cashCounter(1)    → cashVerifier(2)      → cashApprover(3)
    Goods Receiving     receivingClerk(1) → receivingVerifier(2) → receivingApprover(3)
    Goods Costing       costingManager(1) → costingApprover(2)
    Stock Audit         stockManager(1)   → stockVerifier(2)     → stockApprover(3)

Chain membership is structural, so unique-signer checks never match
on label strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Tuple

from staff_access.errors import UnknownCatalogEntry


class VerificationChain(Enum):
    CASH_VERIFICATION = "Cash Verification"
    GOODS_RECEIVING = "Goods Receiving"
    GOODS_COSTING = "Goods Costing"
    STOCK_AUDIT = "Stock Audit"


class WorkflowRoleKey(Enum):
    """Values are the keys used in the persisted assignments document."""
    CASH_COUNTER = "cashCounter"
    CASH_VERIFIER = "cashVerifier"
    CASH_APPROVER = "cashApprover"
    RECEIVING_CLERK = "receivingClerk"
    RECEIVING_VERIFIER = "receivingVerifier"
    RECEIVING_APPROVER = "receivingApprover"
    COSTING_MANAGER = "costingManager"
    COSTING_APPROVER = "costingApprover"
    STOCK_MANAGER = "stockManager"
    STOCK_VERIFIER = "stockVerifier"
    STOCK_APPROVER = "stockApprover"


@dataclass(frozen=True)
class WorkflowStage:
    key: WorkflowRoleKey
    chain: VerificationChain
    position: int
    label: str

    def __post_init__(self):
        if not isinstance(self.key, WorkflowRoleKey):
            raise TypeError("key must be WorkflowRoleKey enum.")
        if not isinstance(self.chain, VerificationChain):
            raise TypeError("chain must be VerificationChain enum.")
        if self.position < 1:
            raise ValueError("stage position is 1-based.")


WORKFLOW_STAGES: Tuple[WorkflowStage, ...] = (
    WorkflowStage(WorkflowRoleKey.CASH_COUNTER, VerificationChain.CASH_VERIFICATION, 1, "Cash Counter"),
    WorkflowStage(WorkflowRoleKey.CASH_VERIFIER, VerificationChain.CASH_VERIFICATION, 2, "Cash Verifier (2nd Sign)"),
    WorkflowStage(WorkflowRoleKey.CASH_APPROVER, VerificationChain.CASH_VERIFICATION, 3, "Cash Approver (Final)"),
    WorkflowStage(WorkflowRoleKey.RECEIVING_CLERK, VerificationChain.GOODS_RECEIVING, 1, "Receiving Clerk"),
    WorkflowStage(WorkflowRoleKey.RECEIVING_VERIFIER, VerificationChain.GOODS_RECEIVING, 2, "Receiving Verifier (2nd Sign)"),
    WorkflowStage(WorkflowRoleKey.RECEIVING_APPROVER, VerificationChain.GOODS_RECEIVING, 3, "Receiving Approver (Final)"),
    WorkflowStage(WorkflowRoleKey.COSTING_MANAGER, VerificationChain.GOODS_COSTING, 1, "Costing Manager"),
    WorkflowStage(WorkflowRoleKey.COSTING_APPROVER, VerificationChain.GOODS_COSTING, 2, "Costing Approver (Final)"),
    WorkflowStage(WorkflowRoleKey.STOCK_MANAGER, VerificationChain.STOCK_AUDIT, 1, "Stock Manager"),
    WorkflowStage(WorkflowRoleKey.STOCK_VERIFIER, VerificationChain.STOCK_AUDIT, 2, "Stock Verifier (2nd Sign)"),
    WorkflowStage(WorkflowRoleKey.STOCK_APPROVER, VerificationChain.STOCK_AUDIT, 3, "Stock Approver (Final)"),
)


class WorkflowRoleRegistry:
    """Lookup tables over the stage catalog. Immutable after construction."""

    def __init__(self, stages: Iterable[WorkflowStage] = WORKFLOW_STAGES):
        self._stages: Dict[WorkflowRoleKey, WorkflowStage] = {}
        self._chains: Dict[VerificationChain, Tuple[WorkflowStage, ...]] = {}

        grouped: Dict[VerificationChain, list] = {}
        for stage in stages:
            if stage.key in self._stages:
                raise ValueError(f"Duplicate workflow role '{stage.key.value}'.")
            self._stages[stage.key] = stage
            grouped.setdefault(stage.chain, []).append(stage)

        for chain, chain_stages in grouped.items():
            ordered = tuple(sorted(chain_stages, key=lambda s: s.position))
            positions = [s.position for s in ordered]
            if positions != list(range(1, len(ordered) + 1)):
                raise ValueError(
                    f"Chain '{chain.value}' stage positions must be 1..n, got {positions}."
                )
            self._chains[chain] = ordered

    def parse(self, value) -> WorkflowRoleKey:
        if isinstance(value, WorkflowRoleKey):
            key = value
        else:
            try:
                key = WorkflowRoleKey(value)
            except ValueError:
                raise UnknownCatalogEntry("workflow role", value) from None
        if key not in self._stages:
            raise UnknownCatalogEntry("workflow role", value)
        return key

    def keys(self) -> Tuple[WorkflowRoleKey, ...]:
        return tuple(self._stages)

    def stage(self, key) -> WorkflowStage:
        return self._stages[self.parse(key)]

    def chain_of(self, key) -> VerificationChain:
        return self.stage(key).chain

    def label(self, key) -> str:
        return self.stage(key).label

    def chains(self) -> Tuple[VerificationChain, ...]:
        return tuple(self._chains)

    def stages(self, chain: VerificationChain) -> Tuple[WorkflowStage, ...]:
        if chain not in self._chains:
            raise UnknownCatalogEntry("verification chain", chain)
        return self._chains[chain]

    def peers(self, key) -> Tuple[WorkflowRoleKey, ...]:
        """The other stages of ``key``'s chain, in stage order."""
        stage = self.stage(key)
        return tuple(s.key for s in self._chains[stage.chain] if s.key != stage.key)


DEFAULT_WORKFLOW_REGISTRY = WorkflowRoleRegistry()
