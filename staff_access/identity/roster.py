"""
Staff Access Identity — Roles and Staff Roster
==============================================
The roster is read-only input supplied by the surrounding
application. Identities arrive already authenticated; this module
only classifies them.

RULES:
- Role is a closed set
- Owner and Super Admin are privileged: implicitly all-allowed,
  never permission-editable, never workflow-assignable
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from staff_access.errors import UnknownCatalogEntry, UnknownStaffMember


# ══════════════════════════════════════════════════════════════
# ROLES
# ══════════════════════════════════════════════════════════════

class Role(Enum):
    """Staff role. Values are the names used in persisted documents."""
    OWNER = "Owner"
    SUPER_ADMIN = "Super Admin"
    MANAGER = "Manager"
    CASHIER = "Cashier"
    SELLER_AGENT = "SellerAgent"
    BANK_VERIFIER = "BankVerifier"
    INVESTOR = "Investor"

    @property
    def is_privileged(self) -> bool:
        return self in PRIVILEGED_ROLES

    @classmethod
    def parse(cls, value) -> Role:
        """Accept a Role or its document value."""
        if isinstance(value, cls):
            return value
        for role in cls:
            if role.value == value:
                return role
        raise UnknownCatalogEntry("role", value)


PRIVILEGED_ROLES = frozenset({Role.OWNER, Role.SUPER_ADMIN})

EDITABLE_ROLES = tuple(role for role in Role if role not in PRIVILEGED_ROLES)


# ══════════════════════════════════════════════════════════════
# STAFF MEMBER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class StaffMember:
    """
    A roster record.

    Fields:
        user_id:    Stable identifier (document key for overrides)
        name:       Display name, recorded as ``assignedBy`` on grants
        role:       Closed-set Role
        avatar_url: Presentation only, carried through untouched
    """
    user_id: str
    name: str
    role: Role
    avatar_url: str = ""

    def __post_init__(self):
        if not self.user_id or not isinstance(self.user_id, str):
            raise ValueError("user_id must be a non-empty string.")
        if not isinstance(self.name, str):
            raise ValueError("name must be a string.")
        if not isinstance(self.role, Role):
            raise TypeError("role must be Role enum.")

    @property
    def is_privileged(self) -> bool:
        return self.role.is_privileged

    def to_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "role": self.role.value,
            "avatarUrl": self.avatar_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> StaffMember:
        return cls(
            user_id=data["id"],
            name=data.get("name", ""),
            role=Role.parse(data["role"]),
            avatar_url=data.get("avatarUrl") or "",
        )


# ══════════════════════════════════════════════════════════════
# ROSTER
# ══════════════════════════════════════════════════════════════

class Roster:
    """Id-indexed, insertion-ordered view over staff records."""

    def __init__(self, members: Iterable[StaffMember] = ()):
        self._members: dict[str, StaffMember] = {}
        for member in members:
            if member.user_id in self._members:
                raise ValueError(f"Duplicate user_id '{member.user_id}'.")
            self._members[member.user_id] = member

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> Roster:
        return cls(StaffMember.from_dict(record) for record in records)

    def get(self, user_id: str) -> Optional[StaffMember]:
        return self._members.get(user_id)

    def require(self, user_id: str) -> StaffMember:
        member = self._members.get(user_id)
        if member is None:
            raise UnknownStaffMember(user_id)
        return member

    def members(self) -> List[StaffMember]:
        return list(self._members.values())

    def assignable_members(self) -> List[StaffMember]:
        """Staff that may be edited or delegated workflow roles."""
        return [m for m in self._members.values() if not m.is_privileged]

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._members

    def __len__(self) -> int:
        return len(self._members)
