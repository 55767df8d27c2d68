"""
Tests for staff_access.workflow.roles — chain membership and stage order.
"""

import pytest

from staff_access.errors import UnknownCatalogEntry
from staff_access.workflow.roles import (
    DEFAULT_WORKFLOW_REGISTRY as REGISTRY,
    VerificationChain,
    WorkflowRoleKey,
    WorkflowRoleRegistry,
    WorkflowStage,
)


class TestCatalogShape:
    def test_eleven_keys_in_four_chains(self):
        assert len(REGISTRY.keys()) == 11
        assert set(REGISTRY.chains()) == set(VerificationChain)

    @pytest.mark.parametrize("chain,size", [
        (VerificationChain.CASH_VERIFICATION, 3),
        (VerificationChain.GOODS_RECEIVING, 3),
        (VerificationChain.GOODS_COSTING, 2),
        (VerificationChain.STOCK_AUDIT, 3),
    ])
    def test_chain_sizes(self, chain, size):
        assert len(REGISTRY.stages(chain)) == size

    def test_cash_chain_order(self):
        keys = [s.key for s in REGISTRY.stages(VerificationChain.CASH_VERIFICATION)]
        assert keys == [
            WorkflowRoleKey.CASH_COUNTER,
            WorkflowRoleKey.CASH_VERIFIER,
            WorkflowRoleKey.CASH_APPROVER,
        ]

    def test_each_key_in_exactly_one_chain(self):
        seen = []
        for chain in REGISTRY.chains():
            seen.extend(s.key for s in REGISTRY.stages(chain))
        assert sorted(k.value for k in seen) == sorted(k.value for k in WorkflowRoleKey)


class TestLookups:
    def test_parse_document_value(self):
        assert REGISTRY.parse("costingApprover") == WorkflowRoleKey.COSTING_APPROVER

    def test_parse_unknown(self):
        with pytest.raises(UnknownCatalogEntry, match="workflow role"):
            REGISTRY.parse("coffeeMaker")

    def test_stage_position(self):
        assert REGISTRY.stage(WorkflowRoleKey.STOCK_VERIFIER).position == 2
        assert REGISTRY.stage("costingApprover").position == 2

    def test_chain_of(self):
        assert REGISTRY.chain_of("receivingClerk") == VerificationChain.GOODS_RECEIVING

    def test_label(self):
        assert REGISTRY.label(WorkflowRoleKey.CASH_VERIFIER) == "Cash Verifier (2nd Sign)"

    def test_peers(self):
        assert REGISTRY.peers(WorkflowRoleKey.CASH_VERIFIER) == (
            WorkflowRoleKey.CASH_COUNTER,
            WorkflowRoleKey.CASH_APPROVER,
        )
        assert REGISTRY.peers(WorkflowRoleKey.COSTING_MANAGER) == (
            WorkflowRoleKey.COSTING_APPROVER,
        )


class TestRegistryConstruction:
    def test_duplicate_key_rejected(self):
        stage = WorkflowStage(WorkflowRoleKey.CASH_COUNTER, VerificationChain.CASH_VERIFICATION, 1, "A")
        with pytest.raises(ValueError, match="Duplicate"):
            WorkflowRoleRegistry([stage, stage])

    def test_gap_in_positions_rejected(self):
        stages = [
            WorkflowStage(WorkflowRoleKey.CASH_COUNTER, VerificationChain.CASH_VERIFICATION, 1, "A"),
            WorkflowStage(WorkflowRoleKey.CASH_APPROVER, VerificationChain.CASH_VERIFICATION, 3, "C"),
        ]
        with pytest.raises(ValueError, match="positions"):
            WorkflowRoleRegistry(stages)

    def test_reduced_registry_rejects_missing_key(self):
        registry = WorkflowRoleRegistry([
            WorkflowStage(WorkflowRoleKey.CASH_COUNTER, VerificationChain.CASH_VERIFICATION, 1, "A"),
        ])
        with pytest.raises(UnknownCatalogEntry):
            registry.parse(WorkflowRoleKey.STOCK_MANAGER)

    def test_position_is_one_based(self):
        with pytest.raises(ValueError, match="1-based"):
            WorkflowStage(WorkflowRoleKey.CASH_COUNTER, VerificationChain.CASH_VERIFICATION, 0, "A")
