"""
Staff Access Workflow — Signature Guard
=======================================
Decides whether a user may sign a given stage of one document
instance (a cash count, a receiving entry, a costing, a stock check).

Owner and Super Admin may sign any stage. Everyone else must hold
the stage's workflow role. With unique signers enforced, nobody may
sign a document they already signed at another stage.
"""

from __future__ import annotations

from typing import Iterable, Tuple

from staff_access.errors import DuplicateSignerConflict, UnassignedSigner
from staff_access.identity.roster import StaffMember
from staff_access.workflow.policy import AssignmentPolicy


class SignatureGuard:
    def __init__(self, policy: AssignmentPolicy):
        self._policy = policy

    def check(
        self,
        role_key,
        user: StaffMember,
        prior_signatures: Iterable[Tuple[object, str]] = (),
    ) -> None:
        """
        Raise unless ``user`` may sign ``role_key``.

        ``prior_signatures`` holds (role_key, user_id) pairs already on
        the document instance.
        """
        store = self._policy.store
        key = store.registry.parse(role_key)
        prior = [(store.registry.parse(k), signer) for k, signer in prior_signatures]

        if not user.is_privileged and not store.is_assigned(key, user.user_id):
            raise UnassignedSigner(key, user.user_id)

        if self._policy.settings.enforce_unique_signers:
            for signed_key, signer_id in prior:
                if signer_id == user.user_id and signed_key != key:
                    raise DuplicateSignerConflict(key, user.user_id, signed_key)

    def can_sign(
        self,
        role_key,
        user: StaffMember,
        prior_signatures: Iterable[Tuple[object, str]] = (),
    ) -> bool:
        try:
            self.check(role_key, user, prior_signatures)
        except (UnassignedSigner, DuplicateSignerConflict):
            return False
        return True
